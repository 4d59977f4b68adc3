"""Pytest configuration and shared fixtures for activeqp tests.

This module provides:
- A deterministic numpy RNG fixture
- A factory for random convex problems with a known feasible start
"""

import os
from typing import Callable, Tuple

import numpy as np
import pytest

from activeqp import ProblemDescriptor


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the legacy numpy seed for reproducibility."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


RandomProblem = Callable[..., Tuple[ProblemDescriptor, np.ndarray]]


@pytest.fixture
def random_problem(rng: np.random.Generator) -> RandomProblem:
    """Factory for strictly convex problems together with a feasible start.

    The start ``x0`` satisfies every equality row exactly and the first
    ``n_tight`` inequality rows with equality; the remaining inequality rows
    have positive slack.
    """

    def _make(
        n: int = 4,
        n_eq: int = 1,
        n_ineq: int = 8,
        n_tight: int = 2,
    ) -> Tuple[ProblemDescriptor, np.ndarray]:
        m_half = rng.normal(size=(n, n))
        hessian = m_half @ m_half.T + 0.5 * np.eye(n)
        linear = 3.0 * rng.normal(size=n)
        x0 = rng.normal(size=n)

        a_mat = rng.normal(size=(n_eq + n_ineq, n))
        slack = np.concatenate(
            [np.zeros(n_eq), np.zeros(n_tight), rng.uniform(0.2, 1.5, size=n_ineq - n_tight)]
        )
        b_vec = a_mat @ x0 - slack
        flags = np.concatenate([np.zeros(n_eq, dtype=bool), np.ones(n_ineq, dtype=bool)])
        problem = ProblemDescriptor(H=hessian, c=linear, A=a_mat, b=b_vec, I=flags)
        return problem, x0

    return _make
