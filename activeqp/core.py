"""
Core problem, option and result dataclasses for the active-set QP solver.

Problems are stated as

```
    minimize    ½ xᵀ H x + cᵀ x
    subject to  A_i · x  = b_i    for rows with I[i] == False (equalities)
                A_i · x >= b_i    for rows with I[i] == True  (inequalities)
```

so that a single constraint matrix carries both kinds of rows and the flag
vector ``I`` tells them apart. Row indices are zero-based throughout.

References:
    - Nocedal & Wright, *Numerical Optimization*, 2nd edition (2006), §16.5
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .utils import is_positive_semidefinite, quadratic_objective

DEFAULT_ACTIVE_TOL = float(np.sqrt(np.finfo(float).eps))


class Status(Enum):
    """Solution status for the active-set driver."""

    OPTIMAL = "optimal"
    MAX_ITER = "max_iter"


def _frozen(values, dtype) -> np.ndarray:
    arr = np.array(values, dtype=dtype, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class ProblemDescriptor:
    """
    Convex quadratic program with mixed equality and inequality rows.

    Values are stored verbatim as read-only float (and boolean) arrays; no
    symmetrization or scaling is applied. ``H`` should be symmetric positive
    semidefinite; :meth:`is_convex` checks this on demand.

    Attributes:
        H: Quadratic term, shape ``(n, n)``.
        c: Linear term, shape ``(n,)``.
        A: Constraint matrix, shape ``(m, n)``.
        b: Constraint bounds, shape ``(m,)``.
        I: Row flags, ``True`` for ``A_i x >= b_i`` and ``False`` for
            ``A_i x = b_i``.
    """

    H: np.ndarray
    c: np.ndarray
    A: np.ndarray
    b: np.ndarray
    I: np.ndarray

    def __post_init__(self) -> None:
        hessian = _frozen(self.H, float)
        linear = _frozen(self.c, float)
        n = linear.shape[0] if linear.ndim == 1 else -1
        if linear.ndim != 1:
            raise ValueError(f"c must be a 1D vector, got shape {linear.shape}.")
        if hessian.shape != (n, n):
            raise ValueError(
                f"H must be square and match the length of c ({n}), got shape {hessian.shape}."
            )

        constraints = np.array(self.A, dtype=float, copy=True)
        if constraints.size == 0:
            constraints = constraints.reshape(0, n)
        if constraints.ndim != 2 or constraints.shape[1] != n:
            raise ValueError(
                f"A must have shape (m, {n}), got shape {constraints.shape}."
            )
        constraints.setflags(write=False)
        m = constraints.shape[0]

        bounds = _frozen(np.reshape(self.b, -1), float)
        flags = _frozen(np.reshape(self.I, -1), bool)
        if bounds.shape != (m,):
            raise ValueError(f"b must have {m} entries to match A, got {bounds.shape[0]}.")
        if flags.shape != (m,):
            raise ValueError(f"I must have {m} entries to match A, got {flags.shape[0]}.")

        object.__setattr__(self, "H", hessian)
        object.__setattr__(self, "c", linear)
        object.__setattr__(self, "A", constraints)
        object.__setattr__(self, "b", bounds)
        object.__setattr__(self, "I", flags)

    @property
    def n(self) -> int:
        """Number of variables."""
        return self.c.shape[0]

    @property
    def m(self) -> int:
        """Number of constraint rows."""
        return self.A.shape[0]

    @property
    def equality_indices(self) -> Tuple[int, ...]:
        return tuple(int(i) for i in np.flatnonzero(~self.I))

    @property
    def inequality_indices(self) -> Tuple[int, ...]:
        return tuple(int(i) for i in np.flatnonzero(self.I))

    def objective(self, x: np.ndarray) -> float:
        """Return ``½ xᵀ H x + cᵀ x``."""
        return quadratic_objective(self.H, self.c, x)

    def gradient(self, x: np.ndarray) -> np.ndarray:
        """Return ``H x + c``."""
        return self.H @ np.asarray(x, dtype=float) + self.c

    def residuals(self, x: np.ndarray) -> np.ndarray:
        """Return ``A x - b``; feasible rows have zero (equality) or nonnegative entries."""
        return self.A @ np.asarray(x, dtype=float) - self.b

    def is_feasible(self, x: np.ndarray, tol: float = DEFAULT_ACTIVE_TOL) -> bool:
        res = self.residuals(x)
        eq_ok = np.all(np.abs(res[~self.I]) <= tol)
        ineq_ok = np.all(res[self.I] >= -tol)
        return bool(eq_ok and ineq_ok)

    def is_convex(self, tol: float = 1e-10) -> bool:
        """Return True if ``H`` is symmetric positive semidefinite within ``tol``."""
        return is_positive_semidefinite(self.H, tol=tol)


@dataclass(frozen=True)
class StepLength:
    """
    Step length taken on an iteration with a nonzero direction.

    Attributes:
        alpha: Step length in ``[0, 1]``.
        blocking: Indices of inequality rows whose ratio fell below one,
            sorted by ascending ratio. Only ``blocking[0]`` enters the
            working set.
    """

    alpha: float
    blocking: Tuple[int, ...] = ()


@dataclass(frozen=True)
class SolverOptions:
    """
    Configuration for :class:`~activeqp.engine.ActiveSetSolver`.

    Args:
        p_tol: A direction whose components are all smaller than ``p_tol`` in
            magnitude is treated as zero. Must be positive.
        active_tol: Tolerance for deciding that a row is tight at a point.
            Defaults to ``sqrt(machine epsilon)``.
        verbose: Emit an INFO record on termination.
        max_iter: Iteration cap applied by :func:`~activeqp.engine.active_set_qp`.
            ``None`` (the default) iterates until optimality is certified.
    """

    p_tol: float = 1e-10
    active_tol: float = DEFAULT_ACTIVE_TOL
    verbose: bool = False
    max_iter: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate SolverOptions invariants."""
        if not self.p_tol > 0:
            raise ValueError(f"p_tol must be positive, got {self.p_tol}.")
        if not self.active_tol > 0:
            raise ValueError(f"active_tol must be positive, got {self.active_tol}.")
        if self.max_iter is not None and self.max_iter < 1:
            raise ValueError(f"max_iter must be >= 1 or None, got {self.max_iter}.")


@dataclass
class OptimizeResult:
    """
    Solution container returned by :func:`~activeqp.engine.active_set_qp`.

    Attributes:
        x: Final iterate (the certified optimum when ``status`` is OPTIMAL).
        fun: Objective value at ``x``.
        status: Enumeration describing solver exit.
        message: Human-readable string explaining the status.
        nit: Number of iterations performed.
        primal_residual: Infinity norm of the primal infeasibility at ``x``.
        dual_residual: Infinity norm of the stationarity residual, if the
            multipliers are known.
        multipliers: Length-``m`` multiplier vector, zero for rows outside
            the final working set (``None`` unless OPTIMAL).
        working_set: Final working set.
    """

    x: np.ndarray
    fun: float
    status: Status
    message: str
    nit: int
    primal_residual: Optional[float] = None
    dual_residual: Optional[float] = None
    multipliers: Optional[np.ndarray] = None
    working_set: Tuple[int, ...] = field(default_factory=tuple)


__all__ = [
    "DEFAULT_ACTIVE_TOL",
    "Status",
    "ProblemDescriptor",
    "StepLength",
    "SolverOptions",
    "OptimizeResult",
]
