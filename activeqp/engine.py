"""
Primal active-set method for convex quadratic programs.

Implements the iteration of Nocedal & Wright (2006), Algorithm 16.3, for
problems with a strictly feasible starting point supplied by the caller:

1. Solve the working-set subproblem for a direction ``p_k``.
2. If ``p_k`` vanishes, compute multipliers. Stop when every inequality
   multiplier is nonnegative, otherwise drop the most negative one.
3. If ``p_k`` is nonzero, step as far as feasibility allows and add the first
   blocking row to the working set.

The solver keeps the whole trajectory (points, directions, step lengths and
working sets) so that it can be inspected after, or during, a solve.

Example:
    >>> import numpy as np
    >>> from activeqp import ActiveSetSolver, ProblemDescriptor
    >>> problem = ProblemDescriptor(
    ...     H=2 * np.eye(2),
    ...     c=np.array([-2.0, -5.0]),
    ...     A=np.array([[1.0, -2.0], [-1.0, -2.0], [-1.0, 2.0], [1.0, 0.0], [0.0, 1.0]]),
    ...     b=np.array([-2.0, -6.0, -2.0, 0.0, 0.0]),
    ...     I=np.ones(5, dtype=bool),
    ... )
    >>> solver = ActiveSetSolver(problem, np.array([2.0, 0.0]))
    >>> np.round(solver.solve(), 6)
    array([1.4, 1.7])
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from .core import OptimizeResult, ProblemDescriptor, SolverOptions, Status, StepLength
from .kkt import kkt_residuals
from .logging import get_logger, log_trace
from .multipliers import MultiplierAnalyzer
from .ratio import RatioTest
from .step import StepComputer
from .working_set import WorkingSet, WorkingSetTracker

logger = get_logger(__name__)


def _readonly(x: np.ndarray) -> np.ndarray:
    arr = np.array(x, dtype=float, copy=True)
    arr.setflags(write=False)
    return arr


class ActiveSetSolver:
    """
    Stateful active-set iteration over a single problem instance.

    The solver owns its history; the accessors return fresh lists of
    read-only arrays. There is no iteration cap or anti-cycling rule, so a
    degenerate problem may make :meth:`solve` loop forever. Callers needing a
    bound should call :meth:`advance` themselves or use :func:`active_set_qp`
    with ``SolverOptions(max_iter=...)``.

    Args:
        problem: The quadratic program.
        x0: Feasible starting point. Every equality row must hold at ``x0``.
        p_tol: Threshold below which a direction is treated as zero.
        verbose: Emit an INFO record reporting the iteration count on
            termination, even when activeqp logging is left at WARNING.
        options: Full configuration; overrides ``p_tol`` and ``verbose``.

    Raises:
        ValueError: If ``x0`` has the wrong length or violates an equality row.
    """

    def __init__(
        self,
        problem: ProblemDescriptor,
        x0: np.ndarray,
        p_tol: float = 1e-10,
        verbose: bool = False,
        options: Optional[SolverOptions] = None,
    ) -> None:
        self.problem = problem
        self.options = options if options is not None else SolverOptions(p_tol=p_tol, verbose=verbose)

        x0 = np.asarray(x0, dtype=float).reshape(-1)
        if x0.shape[0] != problem.n:
            raise ValueError(
                f"Starting point must have {problem.n} entries, got {x0.shape[0]}."
            )

        self._tracker = WorkingSetTracker(problem, tol=self.options.active_tol)
        self._step = StepComputer(problem, p_tol=self.options.p_tol)
        self._ratio = RatioTest(problem)
        self._analyzer = MultiplierAnalyzer(problem)

        self._points: List[np.ndarray] = [_readonly(x0)]
        self._working_sets: List[WorkingSet] = [self._tracker.initial(x0)]
        self._directions: List[np.ndarray] = []
        self._step_lengths: List[Optional[StepLength]] = []
        self._solution: Optional[np.ndarray] = None
        self._multipliers: Optional[np.ndarray] = None

    @property
    def terminated(self) -> bool:
        return self._solution is not None

    @property
    def iterations(self) -> int:
        """Number of completed iterations."""
        return len(self._directions)

    @property
    def solution(self) -> Optional[np.ndarray]:
        """Certified optimum, or ``None`` while the solver is running."""
        return self._solution

    @property
    def multipliers(self) -> Optional[np.ndarray]:
        """Length-``m`` multipliers at the optimum (zero off the final working set)."""
        return self._multipliers

    @property
    def points(self) -> List[np.ndarray]:
        return list(self._points)

    @property
    def directions(self) -> List[np.ndarray]:
        return list(self._directions)

    @property
    def step_lengths(self) -> List[Optional[StepLength]]:
        """Step lengths, ``None`` on iterations whose direction was zero."""
        return list(self._step_lengths)

    @property
    def working_sets(self) -> List[WorkingSet]:
        return list(self._working_sets)

    def objective_values(self) -> List[float]:
        return [self.problem.objective(x) for x in self._points]

    def advance(self) -> bool:
        """
        Perform exactly one iteration.

        Returns:
            True if this iteration certified optimality.

        Raises:
            RuntimeError: If the solver has already terminated.
            ValueError: If the new iterate violates an equality row.
        """
        if self.terminated:
            raise RuntimeError("advance() called after the active-set solver terminated.")

        k = self.iterations + 1
        x = self._points[-1]
        working_set = self._working_sets[-1]

        direction = self._step.compute_step(x, working_set).direction

        if self._step.is_zero(direction):
            analysis = self._analyzer.analyze(x, working_set)
            self._directions.append(_readonly(direction))
            self._step_lengths.append(None)
            if analysis.optimal:
                self._solution = x
                self._multipliers = _readonly(
                    self._analyzer.full_multipliers(analysis, working_set)
                )
                logger.debug("iteration %d: optimal, working set %s", k, working_set)
                if self.options.verbose:
                    log_trace(logger, "Active-set solve terminated after %d iterations.", k)
                return True
            next_point = x
            next_set = self._tracker.remove(working_set, analysis.leaving)
            logger.debug(
                "iteration %d: zero step, dropping row %d (multiplier %.3e)",
                k,
                analysis.leaving,
                float(analysis.multipliers[working_set.index(analysis.leaving)]),
            )
        else:
            outcome = self._ratio.compute_step_length(x, direction, working_set)
            self._tracker.check_equalities(outcome.point)
            self._directions.append(_readonly(direction))
            self._step_lengths.append(outcome.step)
            next_point = outcome.point
            next_set = working_set
            if outcome.entering is not None:
                next_set = self._tracker.add(working_set, outcome.entering)
            logger.debug(
                "iteration %d: alpha=%.6g, blocking %s", k, outcome.step.alpha, outcome.step.blocking
            )

        self._points.append(_readonly(next_point))
        self._working_sets.append(next_set)
        return False

    def solve(self) -> np.ndarray:
        """Advance until optimality is certified and return the optimum."""
        while not self.terminated:
            self.advance()
        return self._solution

    def result(self) -> OptimizeResult:
        """Summarize the current state as an :class:`OptimizeResult`."""
        x = self._points[-1]
        residuals = kkt_residuals(self.problem, x, self._multipliers)
        primal = max(residuals["primal_eq"], residuals["primal_ineq"])
        if self.terminated:
            return OptimizeResult(
                x=x,
                fun=self.problem.objective(x),
                status=Status.OPTIMAL,
                message="Optimality certified by nonnegative multipliers",
                nit=self.iterations,
                primal_residual=primal,
                dual_residual=residuals["dual"],
                multipliers=self._multipliers,
                working_set=self._working_sets[-1],
            )
        return OptimizeResult(
            x=x,
            fun=self.problem.objective(x),
            status=Status.MAX_ITER,
            message="Maximum iterations reached",
            nit=self.iterations,
            primal_residual=primal,
            working_set=self._working_sets[-1],
        )


def active_set_qp(
    problem: ProblemDescriptor,
    x0: np.ndarray,
    options: Optional[SolverOptions] = None,
) -> OptimizeResult:
    """
    Solve a convex quadratic program from a feasible starting point.

    Unlike :meth:`ActiveSetSolver.solve`, this driver honours
    ``options.max_iter`` and reports ``Status.MAX_ITER`` when the cap is hit.
    """

    options = options if options is not None else SolverOptions()
    solver = ActiveSetSolver(problem, x0, options=options)
    while not solver.terminated:
        if options.max_iter is not None and solver.iterations >= options.max_iter:
            logger.warning(
                "Active-set solve stopped at the iteration cap (%d) before certifying optimality.",
                options.max_iter,
            )
            break
        solver.advance()
    return solver.result()


__all__ = ["ActiveSetSolver", "active_set_qp"]
