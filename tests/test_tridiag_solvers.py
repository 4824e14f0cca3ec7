import numpy as np
import pytest

from symlinalg.data_generators import random_spd_tridiag
from symlinalg.exceptions import InvalidDimension, SingularPivot
from symlinalg.numerics.spline import natural_spline_system
from symlinalg.numerics.tridiag import (
    SymTridiag,
    ldl_factor,
    ldl_solve,
    solve_sym_tridiag,
    solve_sym_tridiag_scipy,
    solve_tridiagonal,
    sym_tridiag_mv,
    sym_tridiag_to_dense,
)

EPS = np.finfo(np.float64).eps


# --- Tests: tridiagonal algebra and solvers ---------------------------------


@pytest.mark.parametrize("M", [1, 2, 3, 10, 50, 200])
def test_ldlt_matches_scipy_on_random_spd(M: int) -> None:
    rng = np.random.default_rng(12345 + M)
    T = random_spd_tridiag(rng, M)
    rhs = rng.normal(size=M)

    x_ldlt = solve_sym_tridiag(T, rhs)
    x_scipy = solve_sym_tridiag_scipy(T, rhs)

    np.testing.assert_allclose(x_ldlt, x_scipy, rtol=1e-10, atol=1e-12)


@pytest.mark.parametrize("M", [1, 2, 10, 80])
def test_solutions_match_dense_solve(M: int) -> None:
    rng = np.random.default_rng(777 + M)
    T = random_spd_tridiag(rng, M, scale=2.0)
    rhs = rng.normal(size=M)

    x_dense = np.linalg.solve(sym_tridiag_to_dense(T), rhs)
    x_ldlt = solve_sym_tridiag(T, rhs)

    np.testing.assert_allclose(x_ldlt, x_dense, rtol=1e-10, atol=1e-12)


@pytest.mark.parametrize("n_knots", [3, 4, 10, 100, 1000])
def test_spline_system_residual_is_order_n_eps(n_knots: int) -> None:
    h = 2.0 * np.pi / (n_knots - 1)
    y = np.sin(np.arange(n_knots) * h)
    T, rhs = natural_spline_system(y, h)

    x = solve_sym_tridiag(T, rhs)
    resid = T.mv(x) - rhs

    M = rhs.shape[0]
    scale = max(1.0, float(np.max(np.abs(rhs))))
    assert np.max(np.abs(resid)) <= 10.0 * M * EPS * scale


def test_factorization_reproduces_matrix() -> None:
    rng = np.random.default_rng(5)
    T = random_spd_tridiag(rng, 7)
    F = ldl_factor(T)

    L = np.eye(7)
    L[np.arange(1, 7), np.arange(6)] = F.l
    np.testing.assert_allclose(L @ np.diag(F.d) @ L.T, T.to_dense(), rtol=1e-12, atol=1e-12)
    assert np.all(F.d > 0.0)


def test_factor_once_solve_many() -> None:
    rng = np.random.default_rng(6)
    T = random_spd_tridiag(rng, 12)
    F = ldl_factor(T)
    for _ in range(3):
        rhs = rng.normal(size=12)
        np.testing.assert_allclose(ldl_solve(F, rhs), solve_sym_tridiag(T, rhs))


def test_hand_computed_pivots() -> None:
    # tridiag(1, 4, 1) of size 3: d = [4, 15/4, 56/15]
    F = ldl_factor(SymTridiag(diag=np.full(3, 4.0), offdiag=np.ones(2)))
    np.testing.assert_allclose(F.d, [4.0, 15.0 / 4.0, 56.0 / 15.0])
    np.testing.assert_allclose(F.l, [0.25, 4.0 / 15.0])


@pytest.mark.parametrize("M", [2, 5, 30])
def test_inputs_not_modified(M: int) -> None:
    rng = np.random.default_rng(999 + M)
    T = random_spd_tridiag(rng, M)
    rhs = rng.normal(size=M)

    diag0 = T.diag.copy()
    offdiag0 = T.offdiag.copy()
    rhs0 = rhs.copy()

    _ = solve_sym_tridiag(T, rhs)
    np.testing.assert_array_equal(T.diag, diag0)
    np.testing.assert_array_equal(T.offdiag, offdiag0)
    np.testing.assert_array_equal(rhs, rhs0)

    _ = solve_tridiagonal(M, T.diag, T.offdiag, rhs)
    np.testing.assert_array_equal(T.diag, diag0)
    np.testing.assert_array_equal(rhs, rhs0)


def test_solve_tridiagonal_contract() -> None:
    x = solve_tridiagonal(1, [2.0], [], [3.0])
    np.testing.assert_allclose(x, [1.5])

    x = solve_tridiagonal(3, [4.0, 4.0, 4.0], [1.0, 1.0], [5.0, 6.0, 5.0])
    np.testing.assert_allclose(x, [1.0, 1.0, 1.0], rtol=1e-14)


def test_shape_errors() -> None:
    rng = np.random.default_rng(0)
    M = 5
    T = random_spd_tridiag(rng, M)
    rhs = rng.normal(size=M)

    # wrong offdiag shape: should be (M-1,)
    with pytest.raises(InvalidDimension):
        _ = solve_sym_tridiag(SymTridiag(diag=T.diag, offdiag=T.offdiag[:-1]), rhs)

    # wrong rhs shape
    with pytest.raises(InvalidDimension):
        _ = solve_sym_tridiag(T, rhs[:-1])

    # contract-level checks, still ValueErrors for generic callers
    with pytest.raises(ValueError):
        _ = solve_tridiagonal(M, T.diag, T.offdiag, rhs[:-1])
    with pytest.raises(InvalidDimension):
        _ = solve_tridiagonal(M + 1, T.diag, T.offdiag, rhs)
    with pytest.raises(InvalidDimension):
        _ = solve_tridiagonal(0, [], [], [])


@pytest.mark.parametrize(
    "diag, offdiag, row",
    [
        ([0.0, 1.0], [1.0], 0),
        ([1.0, 1.0, 3.0], [1.0, 1.0], 1),
    ],
)
def test_zero_pivot_raises(diag, offdiag, row) -> None:
    T = SymTridiag(diag=np.array(diag), offdiag=np.array(offdiag))
    with pytest.raises(SingularPivot) as ei:
        solve_sym_tridiag(T, np.ones(len(diag)))
    assert ei.value.row == row
    assert isinstance(ei.value, np.linalg.LinAlgError)


@pytest.mark.parametrize("M", [1, 2, 10, 50])
def test_sym_tridiag_mv_matches_dense(M: int) -> None:
    rng = np.random.default_rng(2024 + M)
    d = rng.normal(size=M)
    e = rng.normal(size=M - 1)
    u = rng.normal(size=M)

    y = sym_tridiag_mv(d, e, u)
    y_dense = sym_tridiag_to_dense(d, e) @ u

    np.testing.assert_allclose(y, y_dense, rtol=1e-12, atol=1e-12)


def test_from_dense_round_trip_and_rejections() -> None:
    rng = np.random.default_rng(11)
    T = random_spd_tridiag(rng, 6)
    A = T.to_dense()

    T2 = SymTridiag.from_dense(A)
    np.testing.assert_array_equal(T2.diag, T.diag)
    np.testing.assert_array_equal(T2.offdiag, T.offdiag)

    A_full = A.copy()
    A_full[0, 3] = A_full[3, 0] = 0.5
    with pytest.raises(InvalidDimension):
        SymTridiag.from_dense(A_full)

    A_asym = A.copy()
    A_asym[1, 0] += 1.0
    with pytest.raises(InvalidDimension):
        SymTridiag.from_dense(A_asym)

    with pytest.raises(InvalidDimension):
        SymTridiag.from_dense(np.ones((2, 3)))


def test_dense_and_banded_representations_agree() -> None:
    # Same system through from_dense and through explicit bands gives identical results
    h = 2.0 * np.pi / 9
    y = np.sin(np.arange(10) * h)
    T, rhs = natural_spline_system(y, h)

    x_bands = solve_tridiagonal(T.size, T.diag, T.offdiag, rhs)
    x_dense = solve_sym_tridiag(SymTridiag.from_dense(T.to_dense()), rhs)
    np.testing.assert_array_equal(x_bands, x_dense)
