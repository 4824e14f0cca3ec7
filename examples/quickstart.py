from __future__ import annotations


def main() -> None:
    import math

    import numpy as np

    from symlinalg import (
        ConvergenceFailure,
        NaturalCubicSpline,
        solve_conjugate_gradient,
        solve_steepest_descent,
        solve_tridiagonal,
    )
    from symlinalg.data_generators import banded_spd_matrix, sine_knots

    print("tridiag:", solve_tridiagonal(3, [4.0, 4.0, 4.0], [1.0, 1.0], [5.0, 6.0, 5.0]))

    h, y = sine_knots(10)
    s = NaturalCubicSpline.from_samples(y, h)
    print("spline(3.14):", s(3.14), "sin(3.14):", math.sin(3.14))

    rng = np.random.default_rng(0)
    A = banded_spd_matrix(101, 0.5)
    b = rng.uniform(size=101)
    x0 = rng.uniform(size=101)

    cg = solve_conjugate_gradient(A, b, x0)
    print("CG:", cg.iterations, "iterations")
    try:
        sd = solve_steepest_descent(A, b, x0)
        print("SD:", sd.iterations, "iterations")
    except ConvergenceFailure as exc:
        print("SD did not converge; residual", exc.result.residual_norm)


if __name__ == "__main__":
    main()
