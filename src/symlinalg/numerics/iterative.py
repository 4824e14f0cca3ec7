# src/symlinalg/numerics/iterative.py
from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TypeAlias, cast

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..config import IterativeConfig, IterativeMethod, default_config
from ..exceptions import ConvergenceFailure, ConvergenceWarning
from .vectors import as_square_matrix, as_vector, norm2

__all__ = [
    "IterativeResult",
    "IterState",
    "steepest_descent_step",
    "conjugate_gradient_step",
    "solve_steepest_descent",
    "solve_conjugate_gradient",
    "solve_iterative",
]

logger = logging.getLogger(__name__)


# ---------------------------
# Results + iterate state
# ---------------------------


@dataclass(frozen=True, slots=True)
class IterativeResult:
    x: NDArray[np.float64]
    iterations: int
    converged: bool
    method: str
    residual_norm: float  # ||b - A x|| at the returned x
    step_norm: float  # ||x_prev - x|| of the last step


@dataclass(slots=True)
class IterState:
    """
    Mutable iterate of a single solve.

    x : current approximation
    r : residual b - A x (steepest descent keeps the gradient A x - b here)
    p : search direction
    """

    x: NDArray[np.float64]
    r: NDArray[np.float64]
    p: NDArray[np.float64]


# ---------------------------
# Single steps
# ---------------------------


def _ratio(num: float, den: float) -> float:
    # IEEE division: a zero denominator (A not SPD) yields inf/nan, not an exception
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(num) / np.float64(den))


def steepest_descent_step(
    A: NDArray[np.float64], x: NDArray[np.float64], b: NDArray[np.float64]
) -> tuple[NDArray[np.float64], NDArray[np.float64], float]:
    """
    One steepest descent step for A x = b.

      g     = A x - b
      alpha = (g.g) / (g.A g)
      x    <- x - alpha g

    Returns (x_new, g, alpha). A zero gradient gives alpha = 0.
    """
    g = A @ x - b
    gg = float(g @ g)
    if gg == 0.0:
        alpha = 0.0
    else:
        alpha = _ratio(gg, float(g @ (A @ g)))
    x_new = x - alpha * g
    return cast(NDArray[np.float64], x_new), cast(NDArray[np.float64], g), alpha


def conjugate_gradient_step(
    A: NDArray[np.float64], state: IterState
) -> tuple[float, float]:
    """
    One conjugate gradient step, updating ``state`` in place.

      alpha  = (r.r) / (p.A p)
      x     <- x + alpha p
      r_new  = r - alpha A p
      beta   = (r_new.r_new) / (r.r)
      p     <- r_new + beta p

    Returns (alpha, beta). A zero residual gives alpha = beta = 0.
    """
    rr = float(state.r @ state.r)
    if rr == 0.0:
        alpha = beta = 0.0
        r_new = state.r
    else:
        Ap = A @ state.p
        alpha = _ratio(rr, float(state.p @ Ap))
        state.x = state.x + alpha * state.p
        r_new = state.r - alpha * Ap
        beta = float(r_new @ r_new) / rr

    state.p = r_new + beta * state.p
    state.r = r_new
    return alpha, beta


# ---------------------------
# Shared driver
# ---------------------------

# A step advances the state and returns (monitored norm, ||x_prev - x||)
StepFn: TypeAlias = Callable[[IterState], tuple[float, float]]
StopFn: TypeAlias = Callable[[float, float, float], bool]


def _sd_stepper(A: NDArray[np.float64], b: NDArray[np.float64]) -> StepFn:
    def step(state: IterState) -> tuple[float, float]:
        x_prev = state.x
        state.x, state.r, _ = steepest_descent_step(A, x_prev, b)
        state.p = -state.r
        return norm2(state.r), norm2(x_prev - state.x)

    return step


def _cg_stepper(A: NDArray[np.float64]) -> StepFn:
    def step(state: IterState) -> tuple[float, float]:
        x_prev = state.x
        conjugate_gradient_step(A, state)
        return norm2(state.p), norm2(x_prev - state.x)

    return step


def _sd_stop(g_norm: float, dx_norm: float, tol: float) -> bool:
    return g_norm < tol


def _cg_stop(p_norm: float, dx_norm: float, tol: float) -> bool:
    # both the search direction and the step must be small
    return p_norm < tol and dx_norm < tol


def _iterate(
    A: NDArray[np.float64],
    b: NDArray[np.float64],
    state: IterState,
    *,
    step: StepFn,
    stop: StopFn,
    method: IterativeMethod,
    config: IterativeConfig,
) -> IterativeResult:
    converged = False
    dx_norm = math.nan
    it = 0

    for it in range(1, config.max_iter + 1):
        monitored, dx_norm = step(state)

        if stop(monitored, dx_norm, config.tol):
            converged = True
            break

        if not (math.isfinite(monitored) and math.isfinite(dx_norm)):
            logger.debug("%s: non-finite iterate at step %d", method.value, it)
            break

    result = IterativeResult(
        x=state.x,
        iterations=it,
        converged=converged,
        method=method.value,
        residual_norm=norm2(b - A @ state.x),
        step_norm=float(dx_norm),
    )

    if converged:
        logger.debug(
            "%s converged in %d iterations (residual_norm=%.3e)",
            method.value,
            it,
            result.residual_norm,
        )
        return result

    logger.warning(
        "%s: failure of convergence after %d iterations (residual_norm=%.3e)",
        method.value,
        it,
        result.residual_norm,
    )
    if config.raise_on_failure:
        raise ConvergenceFailure(result)

    warnings.warn(
        f"{method.value} did not converge within {it} iterations",
        ConvergenceWarning,
        stacklevel=3,
    )
    return result


def _prepare(
    A: ArrayLike, b: ArrayLike, x0: ArrayLike | None
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    A_arr = as_square_matrix(A)
    n = A_arr.shape[0]
    b_arr = as_vector(b, n, name="b")
    if x0 is None:
        x = np.zeros(n, dtype=np.float64)
    else:
        x = as_vector(x0, n, name="x0")
    return A_arr, b_arr, x


def _resolve_config(
    method: IterativeMethod,
    config: IterativeConfig | None,
    tol: float | None,
    max_iter: int | None,
    raise_on_failure: bool | None,
) -> IterativeConfig:
    cfg = default_config(method) if config is None else config
    overrides: dict[str, object] = {}
    if tol is not None:
        overrides["tol"] = float(tol)
    if max_iter is not None:
        overrides["max_iter"] = int(max_iter)
    if raise_on_failure is not None:
        overrides["raise_on_failure"] = bool(raise_on_failure)
    return replace(cfg, **overrides) if overrides else cfg


# ---------------------------
# Public solvers
# ---------------------------


def solve_iterative(
    A: ArrayLike,
    b: ArrayLike,
    x0: ArrayLike | None = None,
    *,
    method: IterativeMethod | str = IterativeMethod.CONJUGATE_GRADIENT,
    config: IterativeConfig | None = None,
    tol: float | None = None,
    max_iter: int | None = None,
    raise_on_failure: bool | None = None,
) -> IterativeResult:
    """
    Solve A x = b for symmetric positive definite A by an iterative method.

    Parameters
    ----------
    A, b
        Dense (n, n) matrix and (n,) right-hand side. Symmetry and positive
        definiteness are the caller's responsibility.
    x0
        Initial guess (zeros if omitted). Never modified.
    method
        ``"steepest_descent"`` or ``"conjugate_gradient"``.
    config, tol, max_iter, raise_on_failure
        Stopping policy. Keyword values override ``config``, which defaults to
        the per-method default (tol 1e-10, max_iter 1000).

    Stopping rules
    --------------
    - Steepest descent: the gradient ``A x - b`` of the step has norm < tol.
    - Conjugate gradient: both the updated search direction and the step
      ``x_prev - x`` have norm < tol.

    Raises
    ------
    ConvergenceFailure
        If ``max_iter`` steps do not meet the rule (and ``raise_on_failure``).
        The unconverged result is available as ``exc.result``.
    """
    method = IterativeMethod(method)
    cfg = _resolve_config(method, config, tol, max_iter, raise_on_failure)
    A_arr, b_arr, x = _prepare(A, b, x0)

    if method is IterativeMethod.STEEPEST_DESCENT:
        g = A_arr @ x - b_arr
        state = IterState(x=x, r=g, p=-g)
        step = _sd_stepper(A_arr, b_arr)
        stop = _sd_stop
    else:
        r = b_arr - A_arr @ x
        state = IterState(x=x, r=r, p=r.copy())
        step = _cg_stepper(A_arr)
        stop = _cg_stop

    return _iterate(
        A_arr, b_arr, state, step=step, stop=stop, method=method, config=cfg
    )


def solve_steepest_descent(
    A: ArrayLike,
    b: ArrayLike,
    x0: ArrayLike | None = None,
    *,
    tol: float = 1e-10,
    max_iter: int = 1000,
    raise_on_failure: bool = True,
) -> IterativeResult:
    return solve_iterative(
        A,
        b,
        x0,
        method=IterativeMethod.STEEPEST_DESCENT,
        tol=tol,
        max_iter=max_iter,
        raise_on_failure=raise_on_failure,
    )


def solve_conjugate_gradient(
    A: ArrayLike,
    b: ArrayLike,
    x0: ArrayLike | None = None,
    *,
    tol: float = 1e-10,
    max_iter: int = 1000,
    raise_on_failure: bool = True,
) -> IterativeResult:
    return solve_iterative(
        A,
        b,
        x0,
        method=IterativeMethod.CONJUGATE_GRADIENT,
        tol=tol,
        max_iter=max_iter,
        raise_on_failure=raise_on_failure,
    )
