# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import copy
import logging
from fractions import Fraction

import numpy as np
import pytest

from squarematrix.errors import (
    DimensionMismatchError,
    FixedSizeError,
    IndexOutOfRangeError,
    InvalidDimensionError,
)
from squarematrix.matrix import SquareMatrix
from squarematrix.utils import random_square
from squarematrix.vector import RowVector

logger = logging.getLogger(__name__)


def test_default_construction_is_empty():
    M = SquareMatrix()
    assert M.dimension == 0
    assert len(M) == 0
    assert M.shape == (0, 0)
    assert list(M) == []


@pytest.mark.parametrize("n", [0, 1, 2, 7, 20])
def test_sized_construction(n):
    M = SquareMatrix(n)
    assert M.dimension == n
    assert len(list(M)) == n
    for row in M:
        assert len(row) == n
    np.testing.assert_array_equal(M.to_numpy(), np.zeros((n, n)))


@pytest.mark.parametrize("n", [-1, -5])
def test_negative_dimension_rejected(n):
    with pytest.raises(InvalidDimensionError) as info:
        SquareMatrix(n)
    assert info.value.dimension == n


@pytest.mark.parametrize("bad", [2.0, "3", None, True])
def test_non_integer_dimension_rejected(bad):
    with pytest.raises(TypeError):
        SquareMatrix(bad)


def test_numpy_integer_dimension_accepted():
    assert SquareMatrix(np.int32(3)).dimension == 3


def test_unsupported_dtype_rejected():
    with pytest.raises(TypeError):
        SquareMatrix(2, dtype=bool)
    with pytest.raises(TypeError):
        SquareMatrix(2, dtype=np.uint8)


def test_from_rows_infers_dtype():
    assert SquareMatrix.from_rows([[1, 2], [3, 4]]).dtype.kind == "i"
    assert SquareMatrix.from_rows([[1.5, 2], [3, 4]]).dtype.kind == "f"
    M = SquareMatrix.from_rows([[Fraction(1, 2), 1], [0, 1]])
    assert M.dtype == np.dtype(object)
    assert M[0][0] == Fraction(1, 2)


def test_from_rows_rejects_non_square():
    with pytest.raises(DimensionMismatchError):
        SquareMatrix.from_rows([[1, 2, 3], [4, 5, 6]])
    with pytest.raises(DimensionMismatchError):
        SquareMatrix.from_rows([[1, 2], [3]])


def test_from_rows_rejects_nested_elements():
    with pytest.raises(DimensionMismatchError):
        SquareMatrix.from_rows([[[1, 2], [3, 4]], [[5, 6], [7, 8]]])
    with pytest.raises(DimensionMismatchError):
        SquareMatrix.from_rows(np.zeros((2, 2, 3)))


def test_from_rows_keeps_square_shape():
    M = SquareMatrix.from_rows(np.arange(9).reshape(3, 3))
    assert M.shape == (M.dimension, M.dimension) == (3, 3)


def test_from_rows_empty():
    M = SquareMatrix.from_rows([], dtype=int)
    assert M.dimension == 0
    assert M.dtype == np.dtype(int)


def test_copy_construction_does_not_alias():
    A = SquareMatrix.from_rows(random_square(4, seed=0))
    for B in (SquareMatrix(A), A.copy(), copy.copy(A), copy.deepcopy(A)):
        assert B == A
        assert B.dtype == A.dtype
        B[0][0] = B[0][0] + 1
        assert B != A


def test_copy_construction_with_dtype():
    A = SquareMatrix.from_rows([[1.7, -2.2], [3.0, 4.9]])
    B = SquareMatrix(A, dtype=int)
    assert B.tolist() == [[1, -2], [3, 4]]


def test_set_dimension_discards_contents():
    M = SquareMatrix.from_rows([[1, 2], [3, 4]])
    M.set_dimension(2)
    assert M.tolist() == [[0, 0], [0, 0]]
    M.set_dimension(3)
    assert M.dimension == 3
    assert M.dtype.kind == "i"
    M.set_dimension(0)
    assert M.dimension == 0


def test_set_dimension_negative_leaves_matrix_unchanged():
    M = SquareMatrix.from_rows([[1, 2], [3, 4]])
    with pytest.raises(InvalidDimensionError):
        M.set_dimension(-1)
    assert M.tolist() == [[1, 2], [3, 4]]


def test_row_view_writes_through():
    M = SquareMatrix(3, dtype=int)
    M.at(1)[2] = 9
    M[0][1] = 5
    assert M.get(1, 2) == 9
    assert M[0, 1] == 5
    row = M[2]
    row[0] = 7
    assert M.tolist() == [[0, 5, 0], [0, 0, 9], [7, 0, 0]]


def test_row_view_cannot_resize():
    M = SquareMatrix(2)
    with pytest.raises(FixedSizeError):
        M[0].resize(3)
    assert M.dimension == 2


def test_element_get_set():
    M = SquareMatrix(2)
    M.set(1, 0, 2.5)
    M[0, 1] = -1.0
    assert M.get(1, 0) == 2.5
    assert M[0][1] == -1.0


@pytest.mark.parametrize("i", [-1, 3, 100])
def test_row_access_out_of_range(i):
    M = SquareMatrix(3)
    with pytest.raises(IndexOutOfRangeError) as info:
        M.at(i)
    assert info.value.index == i
    assert info.value.dimension == 3
    with pytest.raises(IndexError):
        M[i]


def test_element_access_out_of_range():
    M = SquareMatrix(2)
    with pytest.raises(IndexOutOfRangeError):
        M.get(0, 2)
    with pytest.raises(IndexOutOfRangeError):
        M[1][-1]
    with pytest.raises(IndexOutOfRangeError):
        M[2, 0] = 1.0
    assert M == SquareMatrix(2)


def test_empty_matrix_has_no_rows():
    with pytest.raises(IndexOutOfRangeError):
        SquareMatrix().at(0)


def test_row_assignment():
    M = SquareMatrix(2, dtype=int)
    M[1] = RowVector.from_values([3, 4])
    M[0] = [1, 2]
    assert M.tolist() == [[1, 2], [3, 4]]

    # assigning a copy of another row must not alias
    M[0] = M[1]
    M[1][0] = 0
    assert M.tolist() == [[3, 4], [0, 4]]


def test_row_assignment_length_mismatch():
    M = SquareMatrix(2, dtype=int)
    with pytest.raises(DimensionMismatchError):
        M[0] = [1, 2, 3]
    with pytest.raises(IndexOutOfRangeError):
        M[5] = [1, 2]
    assert M.tolist() == [[0, 0], [0, 0]]


def test_equality():
    A = SquareMatrix.from_rows([[1, 2], [3, 4]])
    assert A == SquareMatrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
    assert A != SquareMatrix.from_rows([[1, 2], [3, 5]])
    assert A != SquareMatrix(3)
    assert A != [[1, 2], [3, 4]]
    with pytest.raises(TypeError):
        hash(A)


def test_allclose():
    A = SquareMatrix.from_rows(random_square(5, seed=1))
    B = SquareMatrix.from_rows(A.to_numpy() + 1e-14)
    assert A.allclose(B)
    assert not A.allclose(A * 2)
    assert not A.allclose(SquareMatrix(4))


def test_to_numpy_is_a_copy():
    M = SquareMatrix.from_rows([[1, 2], [3, 4]])
    arr = M.to_numpy()
    arr[0, 0] = 100
    assert M[0][0] == 1


def test_repr_round_trip():
    M = SquareMatrix.from_rows([[1, 2], [3, 4]])
    logger.debug(repr(M))
    assert eval(repr(M), {"SquareMatrix": SquareMatrix}) == M
