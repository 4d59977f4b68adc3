"""Tests for problem, option and result containers."""

import dataclasses

import numpy as np
import pytest

from activeqp import ProblemDescriptor, SolverOptions, StepLength
from activeqp.core import DEFAULT_ACTIVE_TOL


def _descriptor_inputs():
    H = np.array([[2.0, 0.5], [0.5, 1.0]])
    c = np.array([-1.0, 3.0])
    A = np.array([[1.0, 1.0], [1.0, 0.0], [0.0, -1.0]])
    b = np.array([1.0, 0.0, -4.0])
    I = np.array([False, True, True])
    return H, c, A, b, I


def test_problem_descriptor_reads_back_inputs():
    H, c, A, b, I = _descriptor_inputs()
    problem = ProblemDescriptor(H=H, c=c, A=A, b=b, I=I)
    assert np.array_equal(problem.H, H)
    assert np.array_equal(problem.c, c)
    assert np.array_equal(problem.A, A)
    assert np.array_equal(problem.b, b)
    assert np.array_equal(problem.I, I)
    assert problem.n == 2
    assert problem.m == 3


def test_problem_descriptor_does_not_symmetrize():
    H = np.array([[1.0, 2.0], [0.0, 1.0]])
    problem = ProblemDescriptor(H=H, c=np.zeros(2), A=np.zeros((0, 2)), b=np.zeros(0), I=np.zeros(0, dtype=bool))
    assert np.array_equal(problem.H, H)


def test_problem_descriptor_is_immutable():
    H, c, A, b, I = _descriptor_inputs()
    problem = ProblemDescriptor(H=H, c=c, A=A, b=b, I=I)
    with pytest.raises(dataclasses.FrozenInstanceError):
        problem.c = np.zeros(2)  # type: ignore[misc]
    with pytest.raises(ValueError):
        problem.b[0] = 10.0
    # Caller arrays are copied, so later mutation does not leak in.
    b[0] = 99.0
    assert problem.b[0] == 1.0


def test_problem_descriptor_index_partition():
    problem = ProblemDescriptor(*_descriptor_inputs())
    assert problem.equality_indices == (0,)
    assert problem.inequality_indices == (1, 2)


def test_problem_descriptor_objective_and_gradient():
    problem = ProblemDescriptor(*_descriptor_inputs())
    x = np.array([1.0, 2.0])
    expected = 0.5 * x @ problem.H @ x + problem.c @ x
    assert pytest.approx(expected) == problem.objective(x)
    assert np.allclose(problem.gradient(x), problem.H @ x + problem.c)


def test_problem_descriptor_feasibility():
    problem = ProblemDescriptor(*_descriptor_inputs())
    assert problem.is_feasible(np.array([0.5, 0.5]))
    assert not problem.is_feasible(np.array([1.0, 1.0]))  # equality violated
    assert not problem.is_feasible(np.array([-1.0, 2.0]))  # x1 >= 0 violated


def test_problem_descriptor_accepts_empty_constraints():
    problem = ProblemDescriptor(H=np.eye(2), c=np.ones(2), A=[], b=[], I=[])
    assert problem.A.shape == (0, 2)
    assert problem.m == 0


@pytest.mark.parametrize(
    "override, match",
    [
        ({"H": np.eye(3)}, "H must be square"),
        ({"A": np.ones((3, 3))}, "A must have shape"),
        ({"b": np.ones(2)}, "b must have 3 entries"),
        ({"I": np.ones(4, dtype=bool)}, "I must have 3 entries"),
        ({"c": np.ones((2, 1))}, "c must be a 1D vector"),
    ],
)
def test_problem_descriptor_dimension_mismatch(override, match):
    H, c, A, b, I = _descriptor_inputs()
    kwargs = {"H": H, "c": c, "A": A, "b": b, "I": I}
    kwargs.update(override)
    with pytest.raises(ValueError, match=match):
        ProblemDescriptor(**kwargs)


def test_problem_descriptor_convexity_check():
    H, c, A, b, I = _descriptor_inputs()
    assert ProblemDescriptor(H=H, c=c, A=A, b=b, I=I).is_convex()
    assert ProblemDescriptor(H=np.diag([1.0, 0.0]), c=c, A=A, b=b, I=I).is_convex()
    assert not ProblemDescriptor(H=np.diag([1.0, -1.0]), c=c, A=A, b=b, I=I).is_convex()


def test_solver_options_defaults():
    options = SolverOptions()
    assert options.p_tol > 0
    assert options.active_tol == pytest.approx(np.sqrt(np.finfo(float).eps))
    assert options.active_tol == DEFAULT_ACTIVE_TOL
    assert options.verbose is False
    assert options.max_iter is None


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"p_tol": 0.0}, "p_tol must be positive"),
        ({"active_tol": -1.0}, "active_tol must be positive"),
        ({"max_iter": 0}, "max_iter must be >= 1"),
    ],
)
def test_solver_options_validation(kwargs, match):
    with pytest.raises(ValueError, match=match):
        SolverOptions(**kwargs)


def test_step_length_defaults_to_no_blocking():
    step = StepLength(alpha=1.0)
    assert step.blocking == ()
