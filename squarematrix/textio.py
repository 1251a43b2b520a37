# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Plain-text matrix format

A matrix of dimension n is written as n lines of space separated
elements followed by one blank line. Reading is token based: any
whitespace (including newlines) separates values, and exactly n*n
values are consumed, row-major.
"""

import io
import logging
from collections import deque
from fractions import Fraction
from typing import Optional, TextIO, Union

import numpy as np

from .errors import MatrixParseError

logger = logging.getLogger(__name__)


class TokenReader:
    """
    Split a text stream into whitespace separated tokens, lazily.

    Tokens left over on a partially consumed line are kept, so one
    reader can feed several consecutive `read_matrix` calls. The stream
    is read one line at a time for that reason: ``np.loadtxt`` consumes
    the whole stream and can not stop after n*n values.
    """

    def __init__(self, stream: Union[TextIO, str]):
        if isinstance(stream, str):
            stream = io.StringIO(stream)
        self._stream = stream
        self._pending: deque = deque()
        self.consumed = 0

    def __iter__(self):
        return self

    def __next__(self) -> str:
        while not self._pending:
            line = self._stream.readline()
            if not line:
                raise StopIteration
            self._pending.extend(line.split())
        self.consumed += 1
        return self._pending.popleft()

    def next_token(self) -> Optional[str]:
        """Return the next token, or None at end of input."""
        return next(self, None)


def format_matrix(matrix) -> str:
    """Render `matrix` one row per line, followed by a blank line."""
    return "".join(f"{row}\n" for row in matrix) + "\n"


def write_matrix(matrix, stream: TextIO) -> None:
    stream.write(format_matrix(matrix))


def _parse_token(token: str, dtype: np.dtype):
    """Parse one token as a float and convert it to an element of `dtype`."""
    try:
        value = float(token)
    except ValueError:
        if dtype.kind != "O":
            raise
        # object matrices write Fractions as p/q
        return Fraction(token)
    if dtype.kind == "O":
        return value
    return dtype.type(value)


def read_matrix(matrix, source: Union[TokenReader, TextIO, str]):
    """
    Fill `matrix` in place from text.

    The matrix dimension must already be set; it is never inferred from
    the input. Every token is parsed as a float and then converted to the
    matrix dtype (integer dtypes truncate toward zero). Object matrices
    also accept ``p/q`` tokens, read as `fractions.Fraction`, so matrices
    of Fractions read back what `write_matrix` wrote.

    Raises
    ------
    MatrixParseError : input ended early, or a token is not a number or
        does not fit the dtype (e.g. ``nan`` into an integer matrix).
        Elements assigned before the failure keep their new values.
    """
    reader = source if isinstance(source, TokenReader) else TokenReader(source)
    n = matrix.dimension
    dtype = matrix.dtype
    logger.debug("reading %d values into %dx%d matrix", n * n, n, n)

    for pos in range(n * n):
        token = reader.next_token()
        if token is None:
            raise MatrixParseError(
                f"Expected {n * n} values, input ended after {pos}", position=pos
            )
        try:
            value = _parse_token(token, dtype)
        except (ValueError, OverflowError, ZeroDivisionError) as e:
            raise MatrixParseError(
                f"Cannot read {token!r} as {dtype}", position=pos
            ) from e

        i, j = divmod(pos, n)
        matrix.set(i, j, value)

    return matrix
