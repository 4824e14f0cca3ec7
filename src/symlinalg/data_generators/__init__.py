from .problems import banded_spd_matrix, random_spd_problem, random_spd_tridiag, sine_knots

__all__ = [
    "banded_spd_matrix",
    "random_spd_problem",
    "random_spd_tridiag",
    "sine_knots",
]
