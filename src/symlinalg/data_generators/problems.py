from __future__ import annotations

import math

import numpy as np

from ..numerics.tridiag import SymTridiag, sym_tridiag_to_dense
from ..typing import FloatArray


def banded_spd_matrix(n: int, decay: float) -> FloatArray:
    """
    Symmetric circulant test matrix with unit diagonal.

    Entry (j, (j+k) mod n) and its mirror equal ``decay**k`` for
    k = 1..(n-1)/2, so the bands decay geometrically away from the diagonal.
    Positive definite for the decays of interest (the infinite-band limit has
    eigenvalues bounded below by (1 - decay)/(1 + decay)).
    """
    n = int(n)
    if n < 1 or n % 2 != 1:
        raise ValueError("n must be odd and positive")
    decay = float(decay)
    if not (0.0 <= decay <= 1.0):
        raise ValueError("decay must be in [0, 1]")

    A = np.eye(n, dtype=np.float64)
    rows = np.arange(n)
    el = decay
    for k in range(1, (n + 1) // 2):
        cols = (rows + k) % n
        A[rows, cols] = el
        A[cols, rows] = el
        el *= decay
    return A


def sine_knots(n: int, upper: float = 2.0 * math.pi) -> tuple[float, FloatArray]:
    """Uniform knots 0, h, ..., upper with h = upper/(n-1); returns (h, sin(knots))."""
    n = int(n)
    if n < 2:
        raise ValueError("n must be >= 2")
    h = float(upper) / (n - 1)
    y = np.sin(np.arange(n, dtype=np.float64) * h)
    return h, y


def random_spd_tridiag(
    rng: np.random.Generator, n: int, scale: float = 1.0
) -> SymTridiag:
    """Random strictly diagonally dominant symmetric tridiagonal (hence SPD)."""
    n = int(n)
    if n < 1:
        raise ValueError("n must be >= 1")

    offdiag = rng.normal(size=n - 1) * scale
    diag = (1.0 + np.abs(rng.normal(size=n))) * scale
    if n > 1:
        diag[:-1] += np.abs(offdiag)
        diag[1:] += np.abs(offdiag)
    return SymTridiag(diag=diag, offdiag=offdiag)


def random_spd_problem(
    rng: np.random.Generator, n: int, scale: float = 1.0
) -> tuple[FloatArray, FloatArray, FloatArray]:
    """Return (A, x_star, b) with dense SPD A and b = A @ x_star."""
    A = sym_tridiag_to_dense(random_spd_tridiag(rng, n, scale=scale))
    x_star = rng.normal(size=int(n))
    b = A @ x_star
    return np.asarray(A, dtype=np.float64), x_star, b
