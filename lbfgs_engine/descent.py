"""Steepest descent behind the same Optimizer contract as LBFGSSolver."""

import logging
from typing import Callable, Optional

import numpy as np

from .config import LBFGSConfig
from .lbfgs import evaluate_gradient, validate_start
from .line_search import StrongWolfeLineSearch
from .protocols import GradientLike, ObjectiveLike, as_gradient, as_objective
from .types import IterationRecord, OptimizeResult

logger = logging.getLogger(__name__)


class SteepestDescentSolver:
    """Gradient descent with the strong-Wolfe line search.

    Takes an LBFGSConfig so the two solvers are interchangeable; ``m`` is
    ignored since no curvature history is kept.
    """

    def __init__(self, config: Optional[LBFGSConfig] = None):
        self.config = config if config is not None else LBFGSConfig()

    def optimize(
        self,
        init_x,
        objective: ObjectiveLike,
        gradient: GradientLike,
        *,
        callback: Optional[Callable[[IterationRecord], None]] = None,
    ) -> OptimizeResult:
        x = validate_start(init_x, objective, gradient)
        objective = as_objective(objective)
        gradient = as_gradient(gradient)
        cfg = self.config
        line_search = StrongWolfeLineSearch(cfg.line_search)

        grad = evaluate_gradient(gradient, x)
        for iteration in range(cfg.max_iterations):
            grad_norm = float(np.linalg.norm(grad))
            if grad_norm < cfg.tolerance:
                value = objective.compute_objective(x)
                logger.info("Steepest descent converged after %d iterations: f=%.6e", iteration, value)
                return OptimizeResult(value, x, True, iteration, grad_norm)

            direction = -grad
            step = line_search.search(x, direction, objective, gradient, grad)
            x = x + step * direction
            if callback is not None:
                callback(IterationRecord(iteration, grad_norm, float(step), float(grad @ direction), False, 0))
            grad = evaluate_gradient(gradient, x)

        value = objective.compute_objective(x)
        logger.info("Steepest descent stopped at max_iterations=%d: f=%.6e", cfg.max_iterations, value)
        return OptimizeResult(value, x, False, cfg.max_iterations, float(np.linalg.norm(grad)))
