from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IterativeMethod(str, Enum):
    STEEPEST_DESCENT = "steepest_descent"
    CONJUGATE_GRADIENT = "conjugate_gradient"


class SplineMethod(str, Enum):
    LDLT = "ldlt"  # symmetric tridiagonal LDL^T factorization
    SPECTRAL = "spectral"  # sine-transform eigen-decomposition of tridiag(1, 4, 1)


@dataclass(frozen=True, slots=True)
class IterativeConfig:
    tol: float = 1e-10
    max_iter: int = 1000
    raise_on_failure: bool = True

    def __post_init__(self) -> None:
        if not self.tol > 0:
            raise ValueError("tol must be > 0")
        if self.max_iter <= 0:
            raise ValueError("max_iter must be > 0")


DEFAULT_SD_CONFIG: IterativeConfig = IterativeConfig(tol=1e-10, max_iter=1000)
DEFAULT_CG_CONFIG: IterativeConfig = IterativeConfig(tol=1e-10, max_iter=1000)


def default_config(method: IterativeMethod | str) -> IterativeConfig:
    method = IterativeMethod(method)
    if method is IterativeMethod.STEEPEST_DESCENT:
        return DEFAULT_SD_CONFIG
    return DEFAULT_CG_CONFIG
