"""activeqp - a primal active-set solver for small dense convex quadratic programs."""

__version__ = "0.1.0"

from . import core, engine, kkt, multipliers, problems, ratio, step, utils, working_set
from .core import OptimizeResult, ProblemDescriptor, SolverOptions, Status, StepLength
from .engine import ActiveSetSolver, active_set_qp
from .kkt import KKTSolution, is_kkt_optimal, kkt_residuals, solve_direction
from .logging import configure_logging, get_logger, log_trace, set_log_level
from .multipliers import MultiplierAnalysis, MultiplierAnalyzer
from .problems import (
    box_projection_example,
    equality_constrained_example,
    inequality_constrained_example,
)
from .ratio import RatioTest, RatioTestResult
from .step import StepComputer
from .working_set import WorkingSetTracker

__all__ = [
    "__version__",
    # Modules
    "core",
    "engine",
    "kkt",
    "multipliers",
    "problems",
    "ratio",
    "step",
    "utils",
    "working_set",
    # Core types
    "Status",
    "ProblemDescriptor",
    "StepLength",
    "SolverOptions",
    "OptimizeResult",
    # Components
    "KKTSolution",
    "solve_direction",
    "WorkingSetTracker",
    "StepComputer",
    "RatioTest",
    "RatioTestResult",
    "MultiplierAnalysis",
    "MultiplierAnalyzer",
    # Solver
    "ActiveSetSolver",
    "active_set_qp",
    # Diagnostics
    "kkt_residuals",
    "is_kkt_optimal",
    # Worked examples
    "equality_constrained_example",
    "inequality_constrained_example",
    "box_projection_example",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    "log_trace",
]
