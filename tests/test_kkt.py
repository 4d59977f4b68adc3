import numpy as np

from activeqp import ProblemDescriptor
from activeqp.kkt import is_kkt_optimal, kkt_residuals, solve_direction


def test_solve_direction_unconstrained_newton_step():
    H = np.array([[4.0, 1.0], [1.0, 3.0]])
    g = np.array([1.0, 2.0])
    sol = solve_direction(H, np.zeros((0, 2)), g)
    assert np.allclose(sol.direction, -np.linalg.solve(H, g))
    assert sol.multipliers.shape == (0,)


def test_solve_direction_respects_working_rows():
    H = np.eye(3)
    A_w = np.array([[1.0, 1.0, 1.0]])
    g = np.array([1.0, -2.0, 0.5])
    sol = solve_direction(H, A_w, g)
    assert np.allclose(A_w @ sol.direction, 0.0, atol=1e-12)
    # Stationarity of the subproblem: H p + A_wᵀ μ = -g.
    assert np.allclose(H @ sol.direction + A_w.T @ sol.multipliers, -g)


def test_solve_direction_singular_hessian_returns_least_norm():
    sol = solve_direction(np.zeros((2, 2)), np.zeros((0, 2)), np.array([1.0, 0.0]))
    assert np.all(np.isfinite(sol.direction))
    assert np.allclose(sol.direction, 0.0)


def test_solve_direction_dependent_rows_do_not_raise():
    H = np.eye(2)
    A_w = np.array([[1.0, 1.0], [1.0, 1.0]])
    g = np.array([1.0, -1.0])
    sol = solve_direction(H, A_w, g)
    assert np.allclose(sol.direction, [-1.0, 1.0])
    assert np.all(np.isfinite(sol.multipliers))
    assert np.allclose(sol.multipliers, 0.0, atol=1e-12)


def _small_problem():
    return ProblemDescriptor(
        H=np.eye(2),
        c=np.array([-1.0, -1.0]),
        A=np.array([[-1.0, -1.0], [1.0, 0.0]]),
        b=np.array([-1.0, 0.0]),
        I=np.array([True, True]),
    )


def test_kkt_residuals_at_optimum():
    problem = _small_problem()
    x = np.array([0.5, 0.5])
    # H x + c = Aᵀ λ  ->  [-0.5, -0.5] = λ0 * [-1, -1]
    lam = np.array([0.5, 0.0])
    residuals = kkt_residuals(problem, x, lam)
    assert residuals["primal_ineq"] <= 1e-12
    assert residuals["dual"] <= 1e-12
    assert residuals["complementary"] <= 1e-12
    assert is_kkt_optimal(problem, x, lam)


def test_kkt_detects_infeasibility():
    problem = _small_problem()
    x = np.array([1.0, 1.0])
    residuals = kkt_residuals(problem, x)
    assert residuals["primal_ineq"] > 0.5
    assert not is_kkt_optimal(problem, x)


def test_kkt_detects_negative_multiplier():
    problem = _small_problem()
    x = np.array([0.0, 0.5])
    lam = np.array([0.0, -1.0])
    residuals = kkt_residuals(problem, x, lam)
    assert residuals["dual_sign"] == 1.0
    assert not is_kkt_optimal(problem, x, lam)
