"""
Step-length ratio test.

Only inequality rows outside the working set with ``A_i p < 0`` can become
violated along ``p``. For each such row the step that makes it tight is

```
    α_i = (b_i - A_i x) / (A_i p)
```

and the step actually taken is ``α = min(1, min_i α_i)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .core import ProblemDescriptor, StepLength
from .working_set import WorkingSet


@dataclass(frozen=True)
class RatioTestResult:
    """
    Outcome of the ratio test.

    Attributes:
        step: Step length and blocking rows (sorted by ascending ratio).
        point: ``x + α p``.
        entering: Row that enters the working set, or ``None`` when the full
            step is taken.
    """

    step: StepLength
    point: np.ndarray
    entering: Optional[int]


class RatioTest:
    """Computes the largest feasible step along a direction."""

    def __init__(self, problem: ProblemDescriptor) -> None:
        self.problem = problem

    def candidates(
        self, x: np.ndarray, direction: np.ndarray, working_set: WorkingSet
    ) -> List[Tuple[float, int]]:
        """Return ``(α_i, i)`` for every inequality row that the direction approaches."""
        in_working = set(working_set)
        projections = self.problem.A @ direction
        slack = self.problem.b - self.problem.A @ x
        ratios = []
        for idx in self.problem.inequality_indices:
            if idx in in_working or projections[idx] >= 0.0:
                continue
            ratios.append((float(slack[idx] / projections[idx]), idx))
        return ratios

    def compute_step_length(
        self, x: np.ndarray, direction: np.ndarray, working_set: WorkingSet
    ) -> RatioTestResult:
        ratios = self.candidates(x, direction, working_set)
        # Tuples sort by ratio first and row index second.
        blocking = sorted(r for r in ratios if r[0] < 1.0)
        alpha = 1.0
        entering = None
        if blocking:
            # A row that is already marginally violated yields a tiny negative ratio.
            alpha = max(0.0, blocking[0][0])
            entering = blocking[0][1]
        point = x + alpha * direction
        step = StepLength(alpha=alpha, blocking=tuple(idx for _, idx in blocking))
        return RatioTestResult(step=step, point=point, entering=entering)
