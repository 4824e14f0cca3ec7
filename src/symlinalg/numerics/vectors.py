# src/symlinalg/numerics/vectors.py
from __future__ import annotations

import math
from typing import cast

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import InvalidDimension

__all__ = [
    "as_vector",
    "as_square_matrix",
    "norm2",
    "rms_error",
    "residual",
    "residual_norm",
]


def as_vector(
    v: ArrayLike, n: int | None = None, *, name: str = "vector"
) -> NDArray[np.float64]:
    """
    Coerce ``v`` to a 1D float64 array, optionally requiring length ``n``.

    Always returns a fresh array so callers may mutate the result without
    touching the caller's data.
    """
    arr = np.array(v, dtype=np.float64, copy=True)
    if arr.ndim != 1:
        raise InvalidDimension(f"{name} must be 1D, got shape {arr.shape}")
    if n is not None and arr.shape != (n,):
        raise InvalidDimension(f"{name} must have shape {(n,)} got {arr.shape}")
    return arr


def as_square_matrix(
    A: ArrayLike, n: int | None = None, *, name: str = "A"
) -> NDArray[np.float64]:
    arr = np.asarray(A, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InvalidDimension(f"{name} must be square 2D, got shape {arr.shape}")
    if n is not None and arr.shape != (n, n):
        raise InvalidDimension(f"{name} must have shape {(n, n)} got {arr.shape}")
    return arr


def norm2(v: ArrayLike) -> float:
    return float(np.linalg.norm(np.asarray(v, dtype=np.float64), 2))


def rms_error(a: ArrayLike, b: ArrayLike) -> float:
    """Root-mean-square difference ``||a - b||_2 / sqrt(n)``."""
    a_arr = as_vector(a, name="a")
    b_arr = as_vector(b, a_arr.shape[0], name="b")
    n = a_arr.shape[0]
    if n == 0:
        return 0.0
    return norm2(a_arr - b_arr) / math.sqrt(n)


def residual(A: ArrayLike, x: ArrayLike, b: ArrayLike) -> NDArray[np.float64]:
    """Return ``b - A @ x`` after checking that the shapes agree."""
    A_arr = as_square_matrix(A)
    n = A_arr.shape[0]
    x_arr = as_vector(x, n, name="x")
    b_arr = as_vector(b, n, name="b")
    return cast(NDArray[np.float64], b_arr - A_arr @ x_arr)


def residual_norm(A: ArrayLike, x: ArrayLike, b: ArrayLike) -> float:
    return norm2(residual(A, x, b))
