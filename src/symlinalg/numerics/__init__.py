"""
Numerical building blocks.

Symmetric tridiagonal LDL^T solves, natural cubic splines on uniform knots and
steepest descent / conjugate gradient for dense SPD systems.
"""

from .iterative import (
    IterativeResult,
    IterState,
    conjugate_gradient_step,
    solve_conjugate_gradient,
    solve_iterative,
    solve_steepest_descent,
    steepest_descent_step,
)
from .spline import (
    NaturalCubicSpline,
    evaluate_spline,
    natural_spline_system,
    sample_spline,
    spline_second_derivatives,
    spline_second_derivatives_spectral,
    write_sample_table,
)
from .tridiag import (
    LDLFactor,
    SymTridiag,
    ldl_factor,
    ldl_solve,
    solve_sym_tridiag,
    solve_sym_tridiag_scipy,
    solve_tridiagonal,
    sym_tridiag_mv,
    sym_tridiag_to_dense,
)
from .vectors import as_square_matrix, as_vector, norm2, residual, residual_norm, rms_error

__all__ = [
    # Tridiagonal
    "SymTridiag",
    "LDLFactor",
    "ldl_factor",
    "ldl_solve",
    "solve_sym_tridiag",
    "solve_sym_tridiag_scipy",
    "solve_tridiagonal",
    "sym_tridiag_mv",
    "sym_tridiag_to_dense",
    # Spline
    "NaturalCubicSpline",
    "natural_spline_system",
    "spline_second_derivatives",
    "spline_second_derivatives_spectral",
    "evaluate_spline",
    "sample_spline",
    "write_sample_table",
    # Iterative
    "IterativeResult",
    "IterState",
    "steepest_descent_step",
    "conjugate_gradient_step",
    "solve_iterative",
    "solve_steepest_descent",
    "solve_conjugate_gradient",
    # Vector primitives
    "as_vector",
    "as_square_matrix",
    "norm2",
    "rms_error",
    "residual",
    "residual_norm",
]
