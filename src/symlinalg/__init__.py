"""
symlinalg

Solvers for symmetric linear systems.

The everyday API is exposed at the top level, for example:

    from symlinalg import solve_tridiagonal, NaturalCubicSpline, solve_iterative
"""

import logging

from .config import IterativeConfig, IterativeMethod, SplineMethod
from .exceptions import (
    ConvergenceFailure,
    ConvergenceWarning,
    InvalidDimension,
    OutOfDomain,
    SingularPivot,
    SolverError,
)
from .numerics.iterative import (
    IterativeResult,
    solve_conjugate_gradient,
    solve_iterative,
    solve_steepest_descent,
)
from .numerics.spline import NaturalCubicSpline, evaluate_spline, spline_second_derivatives
from .numerics.tridiag import SymTridiag, solve_sym_tridiag, solve_tridiagonal

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Config
    "IterativeConfig",
    "IterativeMethod",
    "SplineMethod",
    # Errors
    "SolverError",
    "InvalidDimension",
    "SingularPivot",
    "OutOfDomain",
    "ConvergenceFailure",
    "ConvergenceWarning",
    # Tridiagonal
    "SymTridiag",
    "solve_sym_tridiag",
    "solve_tridiagonal",
    # Spline
    "NaturalCubicSpline",
    "evaluate_spline",
    "spline_second_derivatives",
    # Iterative
    "IterativeResult",
    "solve_iterative",
    "solve_steepest_descent",
    "solve_conjugate_gradient",
]
