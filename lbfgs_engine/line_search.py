"""
Backtracking line search under the strong Wolfe conditions.

Starting from ``initial_step_size`` the step is halved until both

    f(x + a d) <= f(x) + c1 a g^T d          (Armijo)
    g(x + a d)^T d >= c2 g^T d               (curvature)

hold. The search never fails: a non-descent direction gets the fixed
``fallback_step`` and an exhausted search returns the last step tried.
"""

import logging
from typing import Optional

import numpy as np

from .config import LineSearchConfig
from .protocols import GradientFunction, ObjectiveFunction

logger = logging.getLogger(__name__)


class StrongWolfeLineSearch:
    def __init__(self, config: Optional[LineSearchConfig] = None):
        self.config = config if config is not None else LineSearchConfig()

    def search(
        self,
        x: np.ndarray,
        direction: np.ndarray,
        objective: ObjectiveFunction,
        gradient: GradientFunction,
        current_grad: np.ndarray,
    ) -> float:
        """Return a step length along ``direction``; always positive."""
        cfg = self.config
        directional_derivative = float(current_grad @ direction)
        if directional_derivative >= 0:
            logger.debug(
                "Not a descent direction (g^T d = %.3e), using fallback step %.1e",
                directional_derivative,
                cfg.fallback_step,
            )
            return cfg.fallback_step

        alpha = cfg.initial_step_size
        current_value = objective.compute_objective(x)

        for _ in range(cfg.max_attempts):
            new_x = x + alpha * direction
            new_value = objective.compute_objective(new_x)

            if new_value <= current_value + cfg.c1 * alpha * directional_derivative:
                new_grad = gradient.compute_gradient(new_x)
                if float(new_grad @ direction) >= cfg.c2 * directional_derivative:
                    return alpha

            alpha *= cfg.shrink
            if alpha < cfg.min_step:
                break

        logger.debug("Line search exhausted, returning alpha=%.3e", alpha)
        return alpha
