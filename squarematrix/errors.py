# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by squarematrix.

Every error derives from `MatrixError`, and also from the builtin exception
a caller would naturally expect (``ValueError``, ``IndexError``,
``TypeError``), so both ``except MatrixError`` and ``except IndexError``
work.
"""

from typing import Optional


class MatrixError(Exception):
    """Base exception for all squarematrix errors."""


class InvalidDimensionError(MatrixError, ValueError):
    """
    A matrix dimension or vector size is negative.

    Attributes
    ----------
    dimension : int
        The rejected value.
    """

    def __init__(self, dimension: int, message: Optional[str] = None):
        if message is None:
            message = f"Dimension must be non-negative, got {dimension}"
        super().__init__(message)
        self.dimension = dimension


class IndexOutOfRangeError(MatrixError, IndexError):
    """
    An index falls outside ``[0, dimension)``.

    Negative indices are always out of range; they never wrap around.
    """

    def __init__(self, index: int, dimension: int):
        super().__init__(f"Index {index} out of bounds for dimension {dimension}")
        self.index = index
        self.dimension = dimension


class DimensionMismatchError(MatrixError, ValueError):
    """
    Operand dimensions disagree.

    Attributes
    ----------
    expected : int
        Dimension of the receiving operand.
    actual : int
        Dimension of the other operand.
    operation : str
        Name of the operation that was attempted.
    """

    def __init__(self, expected: int, actual: int, operation: str):
        super().__init__(
            f"Operands must have the same dimension for {operation}: "
            f"expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual
        self.operation = operation


class FixedSizeError(MatrixError, TypeError):
    """A row view of a matrix cannot be resized."""


class MatrixParseError(MatrixError, ValueError):
    """
    Text input could not be read into a matrix.

    `position` is the zero-based row-major index of the element being read.
    """

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position
