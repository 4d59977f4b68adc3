"""
Lagrange multipliers at a stationary point of the working-set subproblem.

When the working-set direction vanishes, ``x_k`` minimizes the objective over
the working-set rows and the multipliers solve ``A_Wᵀ λ = H x_k + c``.
Nonnegative multipliers on every inequality row certify optimality; a
negative one identifies a row whose removal lets the objective decrease.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .core import ProblemDescriptor
from .utils import orthogonal_lstsq
from .working_set import WorkingSet


@dataclass(frozen=True)
class MultiplierAnalysis:
    """
    Attributes:
        multipliers: One entry per working-set row, in working-set order.
        optimal: True if every inequality multiplier is nonnegative.
        leaving: Inequality row to drop when not optimal.
    """

    multipliers: np.ndarray
    optimal: bool
    leaving: Optional[int] = None


class MultiplierAnalyzer:
    """Optimality test and constraint-removal rule."""

    def __init__(self, problem: ProblemDescriptor) -> None:
        self.problem = problem

    def multipliers(self, x: np.ndarray, working_set: WorkingSet) -> np.ndarray:
        a_active = self.problem.A[list(working_set)]
        return orthogonal_lstsq(a_active.T, self.problem.gradient(x))

    def analyze(self, x: np.ndarray, working_set: WorkingSet) -> MultiplierAnalysis:
        lam = self.multipliers(x, working_set)
        # Equality multipliers are free in sign.
        ineq_pos = [pos for pos, idx in enumerate(working_set) if self.problem.I[idx]]
        if not ineq_pos or np.all(lam[ineq_pos] >= 0.0):
            return MultiplierAnalysis(multipliers=lam, optimal=True)
        # argmin returns the first minimizer, i.e. the lowest row index.
        pos = ineq_pos[int(np.argmin(lam[ineq_pos]))]
        return MultiplierAnalysis(multipliers=lam, optimal=False, leaving=working_set[pos])

    def full_multipliers(self, analysis: MultiplierAnalysis, working_set: WorkingSet) -> np.ndarray:
        """Scatter working-set multipliers into a length-``m`` vector."""
        full = np.zeros(self.problem.m)
        full[list(working_set)] = analysis.multipliers
        return full
