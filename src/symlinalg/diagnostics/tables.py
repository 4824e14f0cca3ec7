from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from ..config import IterativeMethod, SplineMethod
from ..exceptions import ConvergenceFailure
from ..numerics.iterative import IterativeResult, solve_iterative
from ..numerics.spline import spline_second_derivatives
from ..numerics.vectors import as_square_matrix, as_vector, rms_error


def _solve_keep_unconverged(
    A: np.ndarray, b: np.ndarray, x0: np.ndarray | None, method: IterativeMethod, **kw
) -> IterativeResult:
    try:
        return solve_iterative(A, b, x0, method=method, **kw)
    except ConvergenceFailure as exc:
        return exc.result


def compare_iterative_methods(
    A: ArrayLike,
    b: ArrayLike,
    x0: ArrayLike | None = None,
    *,
    methods: Iterable[IterativeMethod | str] = (
        IterativeMethod.STEEPEST_DESCENT,
        IterativeMethod.CONJUGATE_GRADIENT,
    ),
    tol: float | None = None,
    max_iter: int | None = None,
) -> pd.DataFrame:
    """Run each iterative method on the same system and compare to a dense solve.

    Unconverged runs are kept in the table (``converged == False``) rather than
    raised, so the table always has one row per method.

    Columns: method, iterations, converged, residual_norm, step_norm, rms_error.
    """
    A_arr = as_square_matrix(A)
    n = A_arr.shape[0]
    b_arr = as_vector(b, n, name="b")
    x0_arr = None if x0 is None else as_vector(x0, n, name="x0")

    x_ref = np.linalg.solve(A_arr, b_arr)

    rows: list[dict[str, object]] = []
    for m in methods:
        res = _solve_keep_unconverged(
            A_arr, b_arr, x0_arr, IterativeMethod(m), tol=tol, max_iter=max_iter
        )
        row = asdict(res)
        row.pop("x")
        row["rms_error"] = rms_error(res.x, x_ref)
        rows.append(row)

    return pd.DataFrame(
        rows,
        columns=[
            "method",
            "iterations",
            "converged",
            "residual_norm",
            "step_norm",
            "rms_error",
        ],
    )


def compare_second_derivatives(y: ArrayLike, h: float) -> pd.DataFrame:
    """Spline second derivatives from the spectral and LDL^T solvers side by side."""
    ypp_spectral = spline_second_derivatives(y, h, method=SplineMethod.SPECTRAL)
    ypp_ldlt = spline_second_derivatives(y, h, method=SplineMethod.LDLT)
    return pd.DataFrame(
        {
            "ypp_spectral": ypp_spectral,
            "ypp_ldlt": ypp_ldlt,
            "abs_diff": np.abs(ypp_spectral - ypp_ldlt),
        }
    )
