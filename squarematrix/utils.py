# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numbers

import numpy as np

from .errors import IndexOutOfRangeError, InvalidDimensionError

EPS: float = 1e-12
DEFAULT_DTYPE = np.float64

# signed integer, floating point, python objects (Fraction, Decimal, ...)
SUPPORTED_KINDS = "ifO"


def as_dtype(dtype=None) -> np.dtype:
    """Normalise `dtype` and reject element types without usable arithmetic."""
    dt = np.dtype(DEFAULT_DTYPE if dtype is None else dtype)
    if dt.kind not in SUPPORTED_KINDS:
        raise TypeError(f"Unsupported element type {dt}")
    return dt


def zero_of(dtype: np.dtype):
    """Return the additive identity for elements of `dtype`."""
    if dtype.kind == "O":
        return 0
    return dtype.type(0)


def check_dimension(n) -> int:
    """Validate a requested dimension (or size) and return it as an int."""
    if not is_integer_scalar(n):
        raise TypeError(f"Dimension must be an integer, got {type(n).__name__}")
    n = int(n)
    if n < 0:
        raise InvalidDimensionError(n)
    return n


def check_index(i, dimension: int) -> int:
    """Bounds-check `i` against ``[0, dimension)``; negatives never wrap."""
    if not is_integer_scalar(i):
        raise TypeError(f"Index must be an integer, got {type(i).__name__}")
    i = int(i)
    if i < 0 or i >= dimension:
        raise IndexOutOfRangeError(i, dimension)
    return i


def is_integer_scalar(k) -> bool:
    return isinstance(k, numbers.Integral) and not isinstance(k, bool)


def scalar_as(k, dtype: np.dtype):
    """
    Convert the integer scalar `k` to an element of `dtype`.

    Integer dtypes wrap `k` modulo 2**bits, the same two's-complement
    wrap-around numpy applies to overflowing integer arithmetic, so
    multiplying by a scalar that does not fit the element type never
    raises. Object dtypes get a plain python int.
    """
    k = int(k)
    if dtype.kind == "O":
        return k
    if dtype.kind == "i":
        bits = 8 * dtype.itemsize
        half = 1 << (bits - 1)
        k = (k + half) % (1 << bits) - half
    return dtype.type(k)


def scale_tol(A: np.ndarray) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    A = np.asarray(A)
    if A.size == 0:
        return EPS
    # infinity norm, written out so object arrays work too
    mags = np.abs(A)
    norm = mags.sum(axis=1).max() if A.ndim == 2 else mags.max()
    return EPS * max(1.0, float(norm))


def random_square(n, low=-100, high=100, dtype=None, seed=None) -> np.ndarray:
    """
    Build an n by n array of random entries in [low, high).

    Integer dtypes get uniformly drawn integers, everything else
    uniformly drawn floats.

    Returns
    -------
    Array with the requested dtype (float64 by default)
    """
    dt = as_dtype(dtype)
    rng = np.random.default_rng(seed)
    if dt.kind == "i":
        return rng.integers(low, high, size=(n, n)).astype(dt)
    return np.asarray(rng.uniform(low, high, size=(n, n)), dtype=dt)


def random_vector(n, low=-100, high=100, dtype=None, seed=None) -> np.ndarray:
    """1-D counterpart of `random_square`."""
    dt = as_dtype(dtype)
    rng = np.random.default_rng(seed)
    if dt.kind == "i":
        return rng.integers(low, high, size=n).astype(dt)
    return np.asarray(rng.uniform(low, high, size=n), dtype=dt)
