"""Print comparison tables for the symmetric solvers.

Two tables are produced:

- steepest descent vs conjugate gradient on the banded circulant SPD matrix,
  both measured against a dense LAPACK solve;
- spline second derivatives of sin(x) on [0, 2*pi] from the spectral and the
  LDL^T solvers, plus the spline value at a query point.

Run from the repository root:

    PYTHONPATH=src python scripts/solver_tables.py --n 101 --decay 0.5
    PYTHONPATH=src python scripts/solver_tables.py --knots 10 --x 3.14 --plot-file spline.txt
"""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence

import numpy as np

from symlinalg import NaturalCubicSpline, SplineMethod
from symlinalg.data_generators import banded_spd_matrix, sine_knots
from symlinalg.diagnostics import compare_iterative_methods, compare_second_derivatives
from symlinalg.numerics.spline import sample_spline, write_sample_table


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    p.add_argument("--n", type=int, default=101, help="matrix size (odd)")
    p.add_argument("--decay", type=float, default=0.5, help="band decay in [0, 1]")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--knots", type=int, default=10, help="number of spline knots")
    p.add_argument("--x", type=float, default=3.14, help="spline query point")
    p.add_argument("--plot-file", default=None, help="write (x, s(x), error) rows here")
    p.add_argument("--samples", type=int, default=100)
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    rng = np.random.default_rng(args.seed)

    A = banded_spd_matrix(args.n, args.decay)
    b = rng.uniform(size=args.n)
    x0 = rng.uniform(size=args.n)

    print("Iterative solvers")
    print(compare_iterative_methods(A, b, x0).to_string(index=False))
    print()

    h, y = sine_knots(args.knots)
    print("Spline second derivatives")
    print(compare_second_derivatives(y, h).to_string(index=False))
    print()

    s_ldlt = NaturalCubicSpline.from_samples(y, h, method=SplineMethod.LDLT)
    s_spec = NaturalCubicSpline.from_samples(y, h, method=SplineMethod.SPECTRAL)
    v_ldlt = s_ldlt(args.x)
    v_spec = s_spec(args.x)
    print(f"spline(x) LDL^T    = {v_ldlt:.9g}")
    print(f"spline(x) spectral = {v_spec:.9g}")
    print(f"difference         = {abs(v_ldlt - v_spec):.3e}")
    print(f"sin(x)             = {math.sin(args.x):.9g}")

    if args.plot_file is not None:
        table = sample_spline(s_ldlt, args.samples, reference=math.sin)
        path = write_sample_table(args.plot_file, table)
        print(f"wrote {path}")


if __name__ == "__main__":
    main()
