"""
Karush-Kuhn-Tucker systems and diagnostics.

:func:`solve_direction` assembles and solves the augmented system of the
equality-constrained subproblem

```
    [ H    A_Wᵀ ] [ p ]   [ -g ]
    [ A_W   0   ] [ μ ] = [  0 ]
```

through the pseudo-inverse, so singular ``H`` or dependent working-set rows
yield the minimum-norm solution rather than an error.

:func:`kkt_residuals` measures how far a primal/dual pair is from satisfying
the first-order conditions ``H x + c = Aᵀ λ`` with ``λ_i >= 0`` on the
inequality rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .core import ProblemDescriptor
from .utils import generalized_solve


@dataclass(frozen=True)
class KKTSolution:
    """Primal step ``p`` and the multipliers ``μ`` of the working-set rows."""

    direction: np.ndarray
    multipliers: np.ndarray


def solve_direction(
    hessian: np.ndarray,
    a_active: np.ndarray,
    gradient: np.ndarray,
) -> KKTSolution:
    """
    Solve the KKT system of the working-set subproblem.

    Args:
        hessian: Quadratic term, shape ``(n, n)``.
        a_active: Working-set rows of the constraint matrix, shape ``(k, n)``;
            ``k`` may be zero.
        gradient: Objective gradient at the current point, shape ``(n,)``.

    Returns:
        The direction (first ``n`` components) and the multipliers of the
        working-set rows (last ``k`` components).
    """

    n = hessian.shape[0]
    k = a_active.shape[0]
    if k == 0:
        kkt_matrix = hessian
    else:
        kkt_matrix = np.block([[hessian, a_active.T], [a_active, np.zeros((k, k))]])
    rhs = np.concatenate([-gradient, np.zeros(k)])
    sol = generalized_solve(kkt_matrix, rhs)
    return KKTSolution(direction=sol[:n], multipliers=sol[n:])


def kkt_residuals(
    problem: ProblemDescriptor,
    x: np.ndarray,
    multipliers: Optional[np.ndarray] = None,
) -> Dict[str, float]:
    """
    Compute infinity norms of the KKT residuals at ``x``.

    Args:
        problem: The quadratic program.
        x: Primal point.
        multipliers: Length-``m`` multiplier vector in the convention
            ``H x + c = Aᵀ λ``. Defaults to zeros.

    Returns:
        Dictionary with keys ``primal_eq``, ``primal_ineq``, ``dual``,
        ``dual_sign`` and ``complementary``.
    """

    x = np.asarray(x, dtype=float).reshape(-1)
    lam = (
        np.zeros(problem.m)
        if multipliers is None
        else np.asarray(multipliers, dtype=float).reshape(-1)
    )
    res = problem.residuals(x)
    eq_rows = ~problem.I

    def _norm(values: np.ndarray) -> float:
        return float(np.max(np.abs(values))) if values.size else 0.0

    stationarity = problem.gradient(x) - problem.A.T @ lam
    return {
        "primal_eq": _norm(res[eq_rows]),
        "primal_ineq": _norm(np.minimum(res[problem.I], 0.0)),
        "dual": _norm(stationarity),
        "dual_sign": _norm(np.minimum(lam[problem.I], 0.0)),
        "complementary": _norm(lam[problem.I] * res[problem.I]),
    }


def is_kkt_optimal(
    problem: ProblemDescriptor,
    x: np.ndarray,
    multipliers: Optional[np.ndarray] = None,
    tol: float = 1e-6,
) -> bool:
    """
    Return True if all KKT residuals are below ``tol``.
    """

    residuals = kkt_residuals(problem, x, multipliers)
    return all(value <= tol for value in residuals.values())


__all__ = ["KKTSolution", "solve_direction", "kkt_residuals", "is_kkt_optimal"]
