# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Bounds-checked row vectors
"""

import logging

import numpy as np

from .errors import DimensionMismatchError, FixedSizeError
from .utils import (
    as_dtype,
    check_dimension,
    check_index,
    is_integer_scalar,
    scalar_as,
)

logger = logging.getLogger(__name__)


class RowVector:
    """
    Ordered, bounds-checked sequence of elements sharing one dtype.

    A RowVector either owns its storage, or is a view of one row of a
    `SquareMatrix`. Writes to a view land in the matrix; a view can not
    be resized.
    """

    # keep numpy from broadcasting over us in ``ndarray * RowVector``
    __array_ufunc__ = None
    __hash__ = None

    def __init__(self, size: int = 0, dtype=None):
        size = check_dimension(size)
        self._data = np.zeros(size, dtype=as_dtype(dtype))
        self._is_view = False

    @classmethod
    def from_values(cls, values, dtype=None) -> "RowVector":
        """Build an owned vector from a 1-D sequence or array (copied)."""
        arr = np.array(values, dtype=None if dtype is None else as_dtype(dtype))
        if arr.ndim != 1:
            raise ValueError(f"RowVector values must be 1-D, got shape {arr.shape}")
        as_dtype(arr.dtype)
        return cls._wrap(arr, view=False)

    @classmethod
    def _wrap(cls, arr: np.ndarray, view: bool) -> "RowVector":
        vec = cls.__new__(cls)
        vec._data = arr
        vec._is_view = view
        return vec

    @property
    def size(self) -> int:
        return self._data.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def is_view(self) -> bool:
        return self._is_view

    def __len__(self) -> int:
        return self.size

    def resize(self, size: int) -> None:
        """
        Change the length of an owned vector.

        The first ``min(old, new)`` elements are kept and any new slots
        are zero.
        """
        if self._is_view:
            raise FixedSizeError("Cannot resize a row that belongs to a matrix")
        size = check_dimension(size)
        logger.debug("resizing vector %d -> %d", self.size, size)
        data = np.zeros(size, dtype=self.dtype)
        keep = min(size, self.size)
        data[:keep] = self._data[:keep]
        self._data = data

    def at(self, i: int):
        return self._data[check_index(i, self.size)]

    def __getitem__(self, i: int):
        return self.at(i)

    def __setitem__(self, i: int, value) -> None:
        self._data[check_index(i, self.size)] = value

    def __iter__(self):
        return iter(self._data)

    def __add__(self, other):
        if not isinstance(other, RowVector):
            return NotImplemented
        if other.size != self.size:
            raise DimensionMismatchError(self.size, other.size, "addition")
        return RowVector._wrap(self._data + other._data, view=False)

    def __sub__(self, other):
        if not isinstance(other, RowVector):
            return NotImplemented
        if other.size != self.size:
            raise DimensionMismatchError(self.size, other.size, "subtraction")
        return self + (-other)

    def __mul__(self, k):
        if not is_integer_scalar(k):
            return NotImplemented
        return RowVector._wrap(self._data * scalar_as(k, self.dtype), view=False)

    __rmul__ = __mul__

    def __neg__(self):
        return self * -1

    def __eq__(self, other):
        if not isinstance(other, RowVector):
            return NotImplemented
        return self.size == other.size and bool(
            np.array_equal(self._data, other._data)
        )

    def copy(self) -> "RowVector":
        """Owned copy, even when `self` is a view."""
        return RowVector._wrap(self._data.copy(), view=False)

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def tolist(self) -> list:
        return self._data.tolist()

    def __str__(self) -> str:
        return " ".join(str(x) for x in self._data)

    def __repr__(self) -> str:
        return f"RowVector.from_values({self.tolist()!r}, dtype={str(self.dtype)!r})"
