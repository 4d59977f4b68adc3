"""
Search direction of the equality-constrained subproblem.

At ``x_k`` with working set ``W_k`` the step ``p`` minimizes the quadratic
model ``½ pᵀ H p + gᵀ p`` subject to ``A_i p = 0`` for every ``i`` in
``W_k``, where ``g = H x_k + c``.
"""

from __future__ import annotations

import numpy as np

from .core import ProblemDescriptor
from .kkt import KKTSolution, solve_direction
from .working_set import WorkingSet


class StepComputer:
    """Computes working-set directions and decides when they vanish."""

    def __init__(self, problem: ProblemDescriptor, p_tol: float) -> None:
        self.problem = problem
        self.p_tol = float(p_tol)

    def compute_step(self, x: np.ndarray, working_set: WorkingSet) -> KKTSolution:
        gradient = self.problem.gradient(x)
        a_active = self.problem.A[list(working_set)]
        return solve_direction(self.problem.H, a_active, gradient)

    def is_zero(self, direction: np.ndarray) -> bool:
        # The pseudo-inverse rarely returns an exact zero vector.
        return bool(np.all(np.abs(direction) < self.p_tol))
