from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from symlinalg.numerics.iterative import IterativeResult


class SolverError(Exception):
    """Base class for all solver failures raised by symlinalg."""


class InvalidDimension(SolverError, ValueError):
    """Raised when vector/matrix shapes passed to an operation are inconsistent."""


class SingularPivot(SolverError, np.linalg.LinAlgError):
    """Raised when an LDL^T pivot of a tridiagonal system is exactly zero.

    The factorization performs no pivoting, so a zero pivot means the matrix is
    not positive definite along its leading minors. ``row`` is the index ``k``
    of the failing pivot ``d_k``.
    """

    def __init__(self, row: int, message: str | None = None) -> None:
        self.row = int(row)
        super().__init__(message or f"Zero pivot at row {self.row}")


class OutOfDomain(SolverError, ValueError):
    """Raised when a spline is queried outside its knot interval.

    No extrapolated value is produced. ``x`` is the offending query point and
    ``domain`` is the closed interval ``(0, (n-1)*h)``.
    """

    def __init__(self, x: float, domain: tuple[float, float]) -> None:
        self.x = float(x)
        self.domain = (float(domain[0]), float(domain[1]))
        super().__init__(
            f"x={self.x!r} outside spline domain [{self.domain[0]}, {self.domain[1]}]"
        )


class ConvergenceFailure(SolverError):
    """Raised when an iterative solve exhausts ``max_iter`` without meeting ``tol``.

    The unconverged result is attached as ``result`` so callers can still use
    the best available iterate (``result.x``) and ``result.iterations``.
    """

    def __init__(self, result: IterativeResult | Any, message: str | None = None) -> None:
        self.result = result
        if message is None:
            message = (
                f"{getattr(result, 'method', 'iterative')} did not converge within "
                f"{getattr(result, 'iterations', '?')} iterations"
            )
        super().__init__(message)


class ConvergenceWarning(RuntimeWarning):
    """Issued instead of ``ConvergenceFailure`` when ``raise_on_failure=False``."""
