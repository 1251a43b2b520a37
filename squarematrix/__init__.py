# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
squarematrix
============

A small square-matrix arithmetic type on top of NumPy, with
bounds-checked indexing and value semantics.

Public API
~~~~~~~~~~
- Types
    - `SquareMatrix`, `RowVector`
- Text format
    - `format_matrix`, `write_matrix`, `read_matrix`, `TokenReader`
- Errors
    - `MatrixError`, `InvalidDimensionError`, `IndexOutOfRangeError`,
      `DimensionMismatchError`, `FixedSizeError`, `MatrixParseError`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import squarematrix as sm
>>> M = sm.SquareMatrix.from_rows([[1, 2], [3, 4]])
>>> (~M).tolist()
[[1, 3], [2, 4]]
>>> (M * sm.RowVector.from_values([1, 1])).tolist()
[4, 6]
"""

from importlib.metadata import version as _pkg_version

from .errors import (
    DimensionMismatchError,
    FixedSizeError,
    IndexOutOfRangeError,
    InvalidDimensionError,
    MatrixError,
    MatrixParseError,
)
from .matrix import SquareMatrix
from .textio import TokenReader, format_matrix, read_matrix, write_matrix
from .utils import DEFAULT_DTYPE, EPS, random_square, random_vector
from .vector import RowVector

__all__ = [
    "SquareMatrix",
    "RowVector",
    "TokenReader",
    "format_matrix",
    "write_matrix",
    "read_matrix",
    "MatrixError",
    "InvalidDimensionError",
    "IndexOutOfRangeError",
    "DimensionMismatchError",
    "FixedSizeError",
    "MatrixParseError",
    "DEFAULT_DTYPE",
    "EPS",
    "random_square",
    "random_vector",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show squarematrix”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Users see log records only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
