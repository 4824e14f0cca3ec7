"""Pytest helpers for the symlinalg library."""

from __future__ import annotations

import numpy as np
import pytest

from symlinalg.numerics.tridiag import sym_tridiag_to_dense


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng


@pytest.fixture
def spd5() -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """A 5x5 diagonally dominant SPD tridiagonal system (A, x_star, b = A x_star)."""
    A = sym_tridiag_to_dense(np.full(5, 4.0), np.ones(4))
    x_star = np.array([1.0, -2.0, 0.5, 3.0, -1.5])
    return A, x_star, A @ x_star
