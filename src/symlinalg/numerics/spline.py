# src/symlinalg/numerics/spline.py
from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..config import SplineMethod
from ..exceptions import InvalidDimension, OutOfDomain
from ..typing import ScalarFn
from .tridiag import SymTridiag, solve_sym_tridiag
from .vectors import as_vector

__all__ = [
    "NaturalCubicSpline",
    "natural_spline_system",
    "spline_second_derivatives",
    "spline_second_derivatives_spectral",
    "evaluate_spline",
    "sample_spline",
    "write_sample_table",
]


def _check_knots(y: ArrayLike, h: float) -> tuple[NDArray[np.float64], float]:
    y_arr = as_vector(y, name="y")
    if y_arr.shape[0] < 2:
        raise InvalidDimension("Need at least 2 knots")
    h = float(h)
    if not h > 0.0:
        raise ValueError("h must be > 0")
    return y_arr, h


def natural_spline_system(
    y: ArrayLike, h: float
) -> tuple[SymTridiag, NDArray[np.float64]]:
    """
    Build the reduced system for the interior second derivatives ypp[1..n-2].

    The matrix is tridiag(1, 4, 1) of size n-2 and
      rhs[i] = (6/h^2) * (y[i+2] - 2*y[i+1] + y[i])    for i = 0..n-3
    """
    y, h = _check_knots(y, h)
    m = y.shape[0] - 2

    fac = 6.0 / (h * h)
    rhs = fac * (y[2:] - 2.0 * y[1:-1] + y[:-2])

    T = SymTridiag(
        diag=np.full(m, 4.0, dtype=np.float64),
        offdiag=np.ones(max(m - 1, 0), dtype=np.float64),
    )
    return T, rhs


def spline_second_derivatives(
    y: ArrayLike,
    h: float,
    *,
    method: SplineMethod | str = SplineMethod.LDLT,
) -> NDArray[np.float64]:
    """
    Second derivatives of the natural cubic spline through uniformly spaced knots.

    Returns an array of length n with ypp[0] = ypp[n-1] = 0.
    """
    method = SplineMethod(method)
    if method is SplineMethod.SPECTRAL:
        return spline_second_derivatives_spectral(y, h)

    T, rhs = natural_spline_system(y, h)
    n = rhs.shape[0] + 2

    ypp = np.zeros(n, dtype=np.float64)
    if n > 2:
        ypp[1:-1] = solve_sym_tridiag(T, rhs)
    return ypp


def spline_second_derivatives_spectral(y: ArrayLike, h: float) -> NDArray[np.float64]:
    """
    Same system as :func:`spline_second_derivatives`, solved in the eigenbasis of
    tridiag(1, 4, 1).

    With q = pi/(n-1) the eigenvectors are v_k[i] = sqrt(2/(n-1)) sin(q*i*k) and
    the eigenvalues are 4 + 2 cos(q*k), for i, k = 1..n-2. O(n^2); kept as an
    independent check on the O(n) factorization.
    """
    y, h = _check_knots(y, h)
    n = y.shape[0]

    ypp = np.zeros(n, dtype=np.float64)
    if n == 2:
        return ypp

    fac = 6.0 / (h * h)
    b = fac * (y[2:] - 2.0 * y[1:-1] + y[:-2])

    q = math.pi / (n - 1)
    k = np.arange(1, n - 1, dtype=np.float64)
    S = np.sin(q * np.outer(k, k))  # symmetric, S[i-1, k-1] = sin(q*i*k)
    norm = math.sqrt(2.0 / (n - 1))

    coeffs = norm * (S @ b)
    coeffs /= 4.0 + 2.0 * np.cos(q * k)
    ypp[1:-1] = norm * (S @ coeffs)
    return ypp


def _interval(x: float, h: float, n: int) -> int:
    i = int(math.floor(x / h))
    # the right endpoint (and rounding just below it) uses the last interval
    return min(max(i, 0), n - 2)


def evaluate_spline(
    x: float, h: float, y: ArrayLike, ypp: ArrayLike
) -> float:
    """
    Evaluate the natural cubic spline at a single point x in [0, (n-1)*h].

    With i = floor(x/h), t0 = x - i*h and t1 = h - t0:

      s(x) = (1/h) * [ t1*y[i] + t0*y[i+1]
                       - (1/6)*t0*t1*((t1 + h)*ypp[i] + (t0 + h)*ypp[i+1]) ]

    Raises OutOfDomain outside the knot interval.
    """
    y_arr, h = _check_knots(y, h)
    n = y_arr.shape[0]
    ypp_arr = as_vector(ypp, n, name="ypp")

    x = float(x)
    upper = (n - 1) * h
    if not (0.0 <= x <= upper):
        raise OutOfDomain(x, (0.0, upper))

    i = _interval(x, h, n)
    x_lower = i * h
    x_upper = x_lower + h

    t0 = x - x_lower
    t1 = x_upper - x
    inv_h = 1.0 / h

    value = inv_h * (
        t1 * y_arr[i]
        + t0 * y_arr[i + 1]
        - (1.0 / 6.0) * t0 * t1 * ((t1 + h) * ypp_arr[i] + (t0 + h) * ypp_arr[i + 1])
    )
    return float(value)


@dataclass(frozen=True, slots=True)
class NaturalCubicSpline:
    """
    Natural cubic spline on the uniform knots 0, h, 2h, ..., (n-1)h.

    Instances are immutable; calling one is a pure function of the query.
    """

    h: float
    y: NDArray[np.float64]
    ypp: NDArray[np.float64]

    def __post_init__(self) -> None:
        y, h = _check_knots(self.y, self.h)
        ypp = as_vector(self.ypp, y.shape[0], name="ypp")
        y.setflags(write=False)
        ypp.setflags(write=False)
        object.__setattr__(self, "h", h)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "ypp", ypp)

    @classmethod
    def from_samples(
        cls,
        y: ArrayLike,
        h: float,
        *,
        method: SplineMethod | str = SplineMethod.LDLT,
    ) -> NaturalCubicSpline:
        ypp = spline_second_derivatives(y, h, method=method)
        return cls(h=float(h), y=as_vector(y, name="y"), ypp=ypp)

    @property
    def n_knots(self) -> int:
        return int(self.y.shape[0])

    @property
    def domain(self) -> tuple[float, float]:
        return 0.0, (self.n_knots - 1) * self.h

    @property
    def knots(self) -> NDArray[np.float64]:
        return np.arange(self.n_knots, dtype=np.float64) * self.h

    def __call__(self, x: ArrayLike) -> float | NDArray[np.float64]:
        x_in = np.asarray(x, dtype=np.float64)
        if x_in.ndim == 0:
            return evaluate_spline(float(x_in), self.h, self.y, self.ypp)

        flat = x_in.reshape(-1)
        out = np.empty_like(flat)
        for j, xq in enumerate(flat):
            out[j] = evaluate_spline(float(xq), self.h, self.y, self.ypp)
        return out.reshape(x_in.shape)


def sample_spline(
    spline: NaturalCubicSpline,
    n_samples: int,
    reference: ScalarFn | None = None,
) -> NDArray[np.float64]:
    """
    Evaluate the spline at n_samples + 1 evenly spaced points covering its domain.

    Returns rows (x, s(x)) or, with a reference function, (x, s(x), s(x) - f(x)).
    """
    n_samples = int(n_samples)
    if n_samples < 1:
        raise ValueError("n_samples must be >= 1")

    lo, hi = spline.domain
    xs = np.linspace(lo, hi, n_samples + 1)
    values = np.asarray(spline(xs), dtype=np.float64)

    if reference is None:
        return np.column_stack([xs, values])

    ref = np.array([float(reference(float(xq))) for xq in xs], dtype=np.float64)
    return np.column_stack([xs, values, values - ref])


def write_sample_table(path: str | Path, table: ArrayLike) -> Path:
    """Write a sample table as tab-separated text, one row per sample."""
    table = np.asarray(table, dtype=np.float64)
    if table.ndim != 2 or table.shape[1] not in (2, 3):
        raise InvalidDimension(
            f"table must have shape (N, 2) or (N, 3) got {table.shape}"
        )
    path = Path(path)
    np.savetxt(path, table, delimiter="\t", fmt="%.17g")
    return path
