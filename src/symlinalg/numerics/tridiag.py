# src/symlinalg/numerics/tridiag.py
from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import InvalidDimension, SingularPivot
from .vectors import as_vector

__all__ = [
    "SymTridiag",
    "LDLFactor",
    "sym_tridiag_mv",
    "ldl_factor",
    "ldl_solve",
    "solve_sym_tridiag",
    "solve_tridiagonal",
    "solve_sym_tridiag_scipy",
    "sym_tridiag_to_dense",
]


@dataclass(frozen=True, slots=True)
class SymTridiag:
    """
    Symmetric tridiagonal matrix stored as two bands.

    diag    : (M,)   main diagonal
    offdiag : (M-1,) sub-diagonal, equal to the super-diagonal by symmetry
    """

    diag: NDArray[np.floating]
    offdiag: NDArray[np.floating]

    def check(self) -> int:
        """
        Validate internal shapes and return M (system size).

        Supports M == 0 with empty bands (diag.shape == offdiag.shape == (0,)).
        """
        diag = np.asarray(self.diag)
        if diag.ndim != 1:
            raise InvalidDimension("diag must be 1D")

        M = int(diag.shape[0])
        offdiag = np.asarray(self.offdiag)

        if M == 0:
            if offdiag.shape != (0,):
                raise InvalidDimension("For M==0, offdiag must be empty (shape (0,))")
            return 0

        if offdiag.shape != (M - 1,):
            raise InvalidDimension(
                f"offdiag must have shape {(M - 1,)} got {offdiag.shape}"
            )
        return M

    @property
    def size(self) -> int:
        return self.check()

    def mv(self, u: ArrayLike) -> NDArray[np.floating]:
        self.check()
        return sym_tridiag_mv(self.diag, self.offdiag, u)

    def to_dense(self) -> NDArray[np.floating]:
        return sym_tridiag_to_dense(self)

    @classmethod
    def from_dense(cls, A: ArrayLike, *, atol: float = 0.0) -> SymTridiag:
        """
        Extract the bands of a dense symmetric tridiagonal matrix.

        Raises InvalidDimension if A is not square, is not symmetric to within
        ``atol``, or has entries larger than ``atol`` outside the three bands.
        """
        A = np.asarray(A, dtype=np.float64)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise InvalidDimension(f"A must be square 2D, got shape {A.shape}")

        M = int(A.shape[0])
        diag = np.diag(A).copy()
        lower = np.diag(A, -1).copy()
        upper = np.diag(A, 1).copy()

        if M > 1 and np.any(np.abs(lower - upper) > atol):
            raise InvalidDimension("A is not symmetric")

        off_band = A.copy()
        idx = np.arange(M)
        off_band[idx, idx] = 0.0
        off_band[idx[1:], idx[:-1]] = 0.0
        off_band[idx[:-1], idx[1:]] = 0.0
        if np.any(np.abs(off_band) > atol):
            raise InvalidDimension("A has nonzero entries outside the tridiagonal band")

        return cls(diag=diag, offdiag=lower)


@dataclass(frozen=True, slots=True)
class LDLFactor:
    """
    Factorization A = L D L^T of a symmetric tridiagonal matrix.

    l : (M-1,) sub-diagonal of the unit lower-triangular L, l[k-1] = L[k, k-1]
    d : (M,)   diagonal of D
    """

    l: NDArray[np.float64]
    d: NDArray[np.float64]


def sym_tridiag_mv(
    diag: ArrayLike,  # (M,)
    offdiag: ArrayLike,  # (M-1,) or (0,) if M==0
    u: ArrayLike,  # (M,)
) -> NDArray[np.floating]:
    """
    Compute y = T u for the symmetric tridiagonal T with bands (diag, offdiag).

    Convention (for M>=2):
      y[0]   = d[0]*u[0] + e[0]*u[1]
      y[j]   = e[j-1]*u[j-1] + d[j]*u[j] + e[j]*u[j+1]   for 1<=j<=M-2
      y[M-1] = e[M-2]*u[M-2] + d[M-1]*u[M-1]
    """
    d = np.asarray(diag)
    e = np.asarray(offdiag)
    u = np.asarray(u)

    if d.ndim != 1:
        raise InvalidDimension("diag must be 1D")

    M = int(d.shape[0])

    if u.shape != (M,):
        raise InvalidDimension(f"u must have shape {(M,)} got {u.shape}")

    if M == 0:
        if e.shape != (0,):
            raise InvalidDimension("For M==0, offdiag must be empty (shape (0,))")
        return cast(NDArray[np.floating], d * u)  # empty

    if e.shape != (M - 1,):
        raise InvalidDimension(f"offdiag must have shape {(M - 1,)} got {e.shape}")

    y = d * u
    y[1:] += e * u[:-1]
    y[:-1] += e * u[1:]
    return cast(NDArray[np.floating], y)


def ldl_factor(T: SymTridiag) -> LDLFactor:
    """
    Factor T = L D L^T without pivoting.

      d_0 = diag[0]
      l_k = offdiag[k-1] / d_{k-1}
      d_k = diag[k] - l_k * offdiag[k-1]      for k = 1..M-1

    Raises SingularPivot if any pivot d_k is exactly zero.
    """
    M = T.check()
    diag = np.asarray(T.diag, dtype=np.float64)
    offdiag = np.asarray(T.offdiag, dtype=np.float64)

    d = np.empty(M, dtype=np.float64)
    l = np.empty(max(M - 1, 0), dtype=np.float64)
    if M == 0:
        return LDLFactor(l=l, d=d)

    d[0] = diag[0]
    if d[0] == 0.0:
        raise SingularPivot(0)

    for k in range(1, M):
        l[k - 1] = offdiag[k - 1] / d[k - 1]
        d[k] = diag[k] - l[k - 1] * offdiag[k - 1]
        if d[k] == 0.0:
            raise SingularPivot(k)

    return LDLFactor(l=l, d=d)


def ldl_solve(F: LDLFactor, b: ArrayLike) -> NDArray[np.float64]:
    """Solve L D L^T x = b given a factorization from :func:`ldl_factor`."""
    M = int(F.d.shape[0])
    x = as_vector(b, M, name="b")
    if M == 0:
        return x

    l = F.l

    # Forward substitution, L y = b
    for k in range(1, M):
        x[k] = x[k] - l[k - 1] * x[k - 1]

    # Diagonal solve, D z = y
    x /= F.d

    # Back substitution, L^T x = z
    for k in range(M - 2, -1, -1):
        x[k] = x[k] - l[k] * x[k + 1]
    return x


def solve_sym_tridiag(T: SymTridiag, b: ArrayLike) -> NDArray[np.float64]:
    """
    Solve T x = b for symmetric tridiagonal T.

    Notes:
    - O(M) time and memory; no pivoting. Intended for symmetric positive
      definite systems, which never need it.
    - Raises SingularPivot on an exactly-zero pivot.
    - Inputs are never modified.
    """
    M = T.check()
    b = as_vector(b, M, name="b")
    return ldl_solve(ldl_factor(T), b)


def solve_tridiagonal(
    n: int,
    diagonal: ArrayLike,
    subdiagonal: ArrayLike,
    b: ArrayLike,
) -> NDArray[np.float64]:
    """Solve the n x n symmetric tridiagonal system given as explicit bands."""
    n = int(n)
    if n < 1:
        raise InvalidDimension("n must be >= 1")
    T = SymTridiag(
        diag=as_vector(diagonal, n, name="diagonal"),
        offdiag=as_vector(subdiagonal, n - 1, name="subdiagonal"),
    )
    return solve_sym_tridiag(T, b)


def solve_sym_tridiag_scipy(T: SymTridiag, b: ArrayLike) -> NDArray[np.floating]:
    """
    Solve using SciPy's symmetric banded (Cholesky) solver. SciPy is imported
    lazily. Requires T positive definite.
    """
    from scipy.linalg import (
        solveh_banded,  # local import to avoid import-time dependency
    )

    M = T.check()
    b = as_vector(b, M, name="b")

    if M == 0:
        return cast(NDArray[np.floating], b)

    # Upper form: ab[0, 1:] holds the super-diagonal, ab[1, :] the diagonal
    ab = np.zeros((2, M), dtype=np.float64)
    ab[0, 1:] = np.asarray(T.offdiag, dtype=np.float64)
    ab[1, :] = np.asarray(T.diag, dtype=np.float64)

    res = solveh_banded(ab, b)
    # scipy stubs often return Any; cast back to an NDArray
    return cast(NDArray[np.floating], np.asarray(res))


def sym_tridiag_to_dense(
    diag: ArrayLike | SymTridiag,
    offdiag: ArrayLike | None = None,
) -> NDArray[np.floating]:
    """
    Convert a symmetric tridiagonal to a dense matrix.
    Accepts either (diag, offdiag) arrays or a SymTridiag instance.
    """
    if isinstance(diag, SymTridiag):
        T = diag
    else:
        if offdiag is None:
            raise ValueError("Must provide (diag, offdiag) or a SymTridiag")
        T = SymTridiag(diag=np.asarray(diag), offdiag=np.asarray(offdiag))

    M = T.check()
    d = np.asarray(T.diag)
    e = np.asarray(T.offdiag)

    A = np.zeros((M, M), dtype=np.result_type(d, e, np.float64))
    A[np.arange(M), np.arange(M)] = d
    A[np.arange(1, M), np.arange(M - 1)] = e
    A[np.arange(M - 1), np.arange(1, M)] = e
    return A
