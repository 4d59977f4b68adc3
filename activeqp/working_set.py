"""Working-set bookkeeping for the active-set iteration."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .core import DEFAULT_ACTIVE_TOL, ProblemDescriptor

WorkingSet = Tuple[int, ...]


class WorkingSetTracker:
    """
    Determines which rows are tight at a point and maintains working sets.

    Working sets are represented as sorted tuples of row indices, so that
    membership order always matches the natural row order used for
    tie-breaking. Equality rows belong to every working set.
    """

    def __init__(self, problem: ProblemDescriptor, tol: float = DEFAULT_ACTIVE_TOL) -> None:
        self.problem = problem
        self.tol = float(tol)
        self._equalities = frozenset(problem.equality_indices)

    def active_constraints(self, x: np.ndarray) -> WorkingSet:
        """Return the rows with ``|A_i x - b_i| <= tol``."""
        res = self.problem.residuals(x)
        return tuple(int(i) for i in np.flatnonzero(np.abs(res) <= self.tol))

    def check_equalities(self, x: np.ndarray) -> WorkingSet:
        """
        Return the rows tight at ``x`` after asserting every equality is among them.

        Raises:
            ValueError: If an equality row does not hold at ``x``. This means
                the starting point is infeasible or the constraint data is
                inconsistent; the iteration cannot continue.
        """
        active = self.active_constraints(x)
        missing = sorted(self._equalities.difference(active))
        if missing:
            res = self.problem.residuals(x)[missing]
            raise ValueError(
                f"Equality constraints {missing} are not satisfied at the current iterate "
                f"(residuals {res.tolist()}, tolerance {self.tol:g}); "
                "the starting point must satisfy every equality row."
            )
        return active

    def initial(self, x: np.ndarray) -> WorkingSet:
        """Working set of the first iterate: every row tight at ``x``."""
        return self.check_equalities(x)

    def add(self, working_set: WorkingSet, index: int) -> WorkingSet:
        return tuple(sorted(set(working_set) | {int(index)}))

    def remove(self, working_set: WorkingSet, index: int) -> WorkingSet:
        if int(index) in self._equalities:
            raise ValueError(f"Equality constraint {index} cannot leave the working set.")
        return tuple(i for i in working_set if i != int(index))
