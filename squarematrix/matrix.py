# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Optional, TextIO

import numpy as np

from .errors import DimensionMismatchError
from .textio import format_matrix, read_matrix, write_matrix
from .utils import (
    as_dtype,
    check_dimension,
    check_index,
    is_integer_scalar,
    scalar_as,
    scale_tol,
    zero_of,
)
from .vector import RowVector

logger = logging.getLogger(__name__)


class SquareMatrix:
    """
    An n by n matrix with bounds-checked indexing and value semantics.

    Parameters
    ----------
    source : int or SquareMatrix
        Dimension of a new zero matrix, or a matrix to deep-copy.
    dtype : numpy dtype, optional
        Element type. Signed integer, floating point and ``object``
        (Fraction, Decimal, ...) are supported. Defaults to float64,
        or to the dtype of `source` when copying.

    Examples
    --------
    >>> M = SquareMatrix.from_rows([[1, 2], [3, 4]])
    >>> (M * M).tolist()
    [[7, 10], [15, 22]]
    >>> M[1][0] == M.get(1, 0) == 3
    True
    """

    # numpy must defer to our operators instead of broadcasting
    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, source=0, dtype=None):
        if isinstance(source, SquareMatrix):
            dt = source.dtype if dtype is None else as_dtype(dtype)
            self._data = source._data.astype(dt, copy=True)
        else:
            n = check_dimension(source)
            self._data = np.zeros((n, n), dtype=as_dtype(dtype))

    @classmethod
    def from_rows(cls, rows, dtype=None) -> "SquareMatrix":
        """
        Build a matrix from a nested sequence or a square 2-D array.

        The element type is inferred from the values unless `dtype` is
        given.

        Raises
        ------
        DimensionMismatchError : if any row length differs from the row count.
        """
        if isinstance(rows, SquareMatrix):
            return cls(rows, dtype=dtype)

        rows = [list(r) for r in rows]
        n = len(rows)
        for r in rows:
            if len(r) != n:
                raise DimensionMismatchError(n, len(r), "construction")

        if n == 0:
            return cls(0, dtype=dtype)
        arr = np.array(rows, dtype=None if dtype is None else as_dtype(dtype))
        if arr.shape != (n, n):
            # nested one level too deep, e.g. rows of rows
            raise DimensionMismatchError(
                n, arr.shape[-1], f"construction (got shape {arr.shape})"
            )
        as_dtype(arr.dtype)
        return cls._wrap(arr)

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> "SquareMatrix":
        M = cls.__new__(cls)
        M._data = arr
        return M

    # ------------------------------------------------------------------
    # shape
    # ------------------------------------------------------------------
    @property
    def dimension(self) -> int:
        return self._data.shape[0]

    @property
    def shape(self):
        return self._data.shape

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def __len__(self) -> int:
        return self.dimension

    def set_dimension(self, n: int) -> None:
        """
        Reallocate as an n by n zero matrix.

        Existing contents are discarded, even when `n` equals the current
        dimension. Row views taken earlier no longer refer to this matrix.
        """
        n = check_dimension(n)
        logger.debug("set_dimension: %d -> %d, contents discarded", self.dimension, n)
        self._data = np.zeros((n, n), dtype=self.dtype)

    # ------------------------------------------------------------------
    # element access
    # ------------------------------------------------------------------
    def at(self, i: int) -> RowVector:
        """Row `i` as a write-through view."""
        i = check_index(i, self.dimension)
        return RowVector._wrap(self._data[i], view=True)

    def get(self, i: int, j: int):
        n = self.dimension
        return self._data[check_index(i, n), check_index(j, n)]

    def set(self, i: int, j: int, value) -> None:
        n = self.dimension
        self._data[check_index(i, n), check_index(j, n)] = value

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return self.get(*key)
        return self.at(key)

    def __setitem__(self, key, value):
        if isinstance(key, tuple):
            self.set(*key, value)
            return
        i = check_index(key, self.dimension)
        row = np.asarray(value.to_numpy() if isinstance(value, RowVector) else value)
        if row.ndim != 1 or row.shape[0] != self.dimension:
            actual = row.shape[0] if row.ndim else 1
            raise DimensionMismatchError(self.dimension, actual, "row assignment")
        self._data[i] = row

    def __iter__(self):
        for i in range(self.dimension):
            yield self.at(i)

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------
    def transpose(self) -> "SquareMatrix":
        """New matrix with ``result[i][j] == self[j][i]``."""
        return SquareMatrix._wrap(self._data.T.copy())

    @property
    def T(self) -> "SquareMatrix":
        return self.transpose()

    def _check_same_dimension(self, rhs, operation: str) -> None:
        if not isinstance(rhs, SquareMatrix):
            raise TypeError(
                f"{operation} needs a SquareMatrix, got {type(rhs).__name__}"
            )
        if rhs.dimension != self.dimension:
            raise DimensionMismatchError(self.dimension, rhs.dimension, operation)

    def add(self, rhs: "SquareMatrix") -> "SquareMatrix":
        self._check_same_dimension(rhs, "addition")
        return SquareMatrix._wrap(self._data + rhs._data)

    def subtract(self, rhs: "SquareMatrix") -> "SquareMatrix":
        self._check_same_dimension(rhs, "subtraction")
        return self.add(rhs.negate())

    def multiply_matrix(self, rhs: "SquareMatrix") -> "SquareMatrix":
        """
        Matrix product, ``result[i][j] = sum_k self[i][k] * rhs[k][j]``.

        Every sum starts from the additive identity of the result dtype.
        """
        self._check_same_dimension(rhs, "multiplication")
        n = self.dimension
        dt = np.result_type(self.dtype, rhs.dtype)
        zero = zero_of(dt)
        A, B = self._data, rhs._data
        C = np.zeros((n, n), dtype=dt)
        logger.debug("multiplying %dx%d matrices (%s)", n, n, dt)

        for i in range(n):
            for j in range(n):
                acc = zero
                for k in range(n):
                    acc = acc + A[i, k] * B[k, j]
                C[i, j] = acc
        return SquareMatrix._wrap(C)

    def multiply_scalar(self, k: int) -> "SquareMatrix":
        """
        Multiply every element by the integer `k`; the dtype is kept.

        For integer dtypes, `k` and the products wrap around like any
        other overflowing numpy integer arithmetic.
        """
        if not is_integer_scalar(k):
            raise TypeError(f"Scalar must be an integer, got {type(k).__name__}")
        return SquareMatrix._wrap(self._data * scalar_as(k, self.dtype))

    def multiply_vector(self, v: RowVector) -> RowVector:
        """
        Return ``w`` with ``w[i] = sum_j self[j][i] * v[j]``.

        Note the index order: column i of the matrix is dotted with `v`,
        i.e. this is ``transpose(self) @ v`` rather than ``self @ v``.
        """
        if not isinstance(v, RowVector):
            raise TypeError(f"Expected a RowVector, got {type(v).__name__}")
        n = self.dimension
        if v.size != n:
            raise DimensionMismatchError(n, v.size, "matrix-vector multiplication")

        dt = np.result_type(self.dtype, v.dtype)
        zero = zero_of(dt)
        A, x = self._data, v._data
        w = np.zeros(n, dtype=dt)
        for i in range(n):
            acc = zero
            for j in range(n):
                acc = acc + A[j, i] * x[j]
            w[i] = acc
        return RowVector._wrap(w, view=False)

    def multiply(self, rhs):
        """Dispatch to the matrix, vector or integer-scalar product."""
        if isinstance(rhs, SquareMatrix):
            return self.multiply_matrix(rhs)
        if isinstance(rhs, RowVector):
            return self.multiply_vector(rhs)
        return self.multiply_scalar(rhs)

    def negate(self) -> "SquareMatrix":
        return self.multiply_scalar(-1)

    def __add__(self, rhs):
        if not isinstance(rhs, SquareMatrix):
            return NotImplemented
        return self.add(rhs)

    def __sub__(self, rhs):
        if not isinstance(rhs, SquareMatrix):
            return NotImplemented
        return self.subtract(rhs)

    def __mul__(self, rhs):
        if isinstance(rhs, (SquareMatrix, RowVector)) or is_integer_scalar(rhs):
            return self.multiply(rhs)
        return NotImplemented

    def __rmul__(self, lhs):
        if is_integer_scalar(lhs):
            return self.multiply_scalar(lhs)
        return NotImplemented

    def __neg__(self) -> "SquareMatrix":
        return self.negate()

    def __invert__(self) -> "SquareMatrix":
        return self.transpose()

    # ------------------------------------------------------------------
    # comparison / conversion
    # ------------------------------------------------------------------
    def __eq__(self, other):
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._data, other._data)
        )

    def allclose(
        self,
        other: "SquareMatrix",
        rtol: float = 1e-9,
        atol: Optional[float] = None,
    ) -> bool:
        """
        Element-wise approximate equality.

        `atol` defaults to a tolerance scaled to the magnitude of `self`.
        Matrices of different dimension are never close.
        """
        if not isinstance(other, SquareMatrix):
            raise TypeError(f"Expected a SquareMatrix, got {type(other).__name__}")
        if other.dimension != self.dimension:
            return False
        if atol is None:
            atol = scale_tol(self._data)
        a = self._data.astype(float)
        b = other._data.astype(float)
        return bool(np.allclose(a, b, rtol=rtol, atol=atol))

    def copy(self) -> "SquareMatrix":
        return SquareMatrix(self)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def to_numpy(self) -> np.ndarray:
        """Independent 2-D array copy of the elements."""
        return self._data.copy()

    def tolist(self) -> list:
        return self._data.tolist()

    # ------------------------------------------------------------------
    # text
    # ------------------------------------------------------------------
    def write(self, stream: TextIO) -> None:
        write_matrix(self, stream)

    def read(self, source) -> "SquareMatrix":
        """Fill this matrix in place from text; see `textio.read_matrix`."""
        return read_matrix(self, source)

    def __str__(self) -> str:
        return format_matrix(self)

    def __repr__(self) -> str:
        return f"SquareMatrix.from_rows({self.tolist()!r}, dtype={str(self.dtype)!r})"
