"""
Limited-memory BFGS for unconstrained minimisation.

Provides the L-BFGS solver with a strong-Wolfe line search, capability
protocols for objectives and gradients, and iteration tracing.
"""

from .config import LBFGSConfig, LineSearchConfig
from .descent import SteepestDescentSolver
from .gradients import FiniteDifferenceGradient
from .history import CURVATURE_EPS, CurvatureHistory
from .lbfgs import LBFGSSolver, two_loop_direction
from .line_search import StrongWolfeLineSearch
from .logger import TraceLogger
from .problems import Quadratic, Rosenbrock
from .protocols import (
    CallableGradient,
    CallableObjective,
    GradientFunction,
    ObjectiveFunction,
    Optimizer,
    as_gradient,
    as_objective,
)
from .types import HistoryEntry, IterationRecord, OptimizeResult

__version__ = "0.1.0"

__all__ = [
    "LBFGSConfig",
    "LineSearchConfig",
    "SteepestDescentSolver",
    "FiniteDifferenceGradient",
    "CURVATURE_EPS",
    "CurvatureHistory",
    "LBFGSSolver",
    "two_loop_direction",
    "StrongWolfeLineSearch",
    "TraceLogger",
    "Quadratic",
    "Rosenbrock",
    "CallableGradient",
    "CallableObjective",
    "GradientFunction",
    "ObjectiveFunction",
    "Optimizer",
    "as_gradient",
    "as_objective",
    "HistoryEntry",
    "IterationRecord",
    "OptimizeResult",
]
