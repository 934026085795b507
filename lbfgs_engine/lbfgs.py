# lbfgs_engine/lbfgs.py
# Limited Memory BFGS solver: two-loop direction, line search, curvature pair storage.
import logging
from typing import Callable, Optional

import numpy as np

from .config import LBFGSConfig
from .history import CurvatureHistory
from .line_search import StrongWolfeLineSearch
from .protocols import GradientFunction, GradientLike, ObjectiveLike, as_gradient, as_objective
from .types import IterationRecord, OptimizeResult

logger = logging.getLogger(__name__)


def two_loop_direction(grad: np.ndarray, history: CurvatureHistory) -> np.ndarray:
    """Return -H grad, with H the inverse-Hessian implied by ``history``.

    H0 = gamma I with gamma = (s^T y)/(y^T y) of the newest pair, or the
    identity when the history is empty.
    """
    q = grad.copy()
    alphas = []
    for entry in reversed(history):
        a = entry.rho * float(entry.s @ q)
        alphas.append(a)
        q = q - a * entry.y

    newest = history.newest
    if newest is None:
        r = q
    else:
        gamma = float(newest.s @ newest.y) / float(newest.y @ newest.y)
        r = gamma * q

    for entry, a in zip(history, reversed(alphas)):
        b = entry.rho * float(entry.y @ r)
        r = r + entry.s * (a - b)

    return -r


def validate_start(init_x, objective, gradient) -> np.ndarray:
    """Check optimize() arguments and return a private float copy of init_x."""
    if init_x is None:
        raise ValueError("Initial point cannot be None")
    if objective is None:
        raise ValueError("Objective function cannot be None")
    if gradient is None:
        raise ValueError("Gradient function cannot be None")
    x = np.array(init_x, dtype=float)
    if x.ndim != 1 or x.size == 0:
        raise ValueError(f"Initial point must be a non-empty 1-D vector, got shape {x.shape}")
    return x


def evaluate_gradient(gradient: GradientFunction, x: np.ndarray) -> np.ndarray:
    g = np.asarray(gradient.compute_gradient(x), dtype=float)
    if g.shape != x.shape:
        raise ValueError(f"Gradient shape {g.shape} does not match point shape {x.shape}")
    return g


class LBFGSSolver:
    """L-BFGS with a strong-Wolfe backtracking line search.

        >>> solver = LBFGSSolver(LBFGSConfig(m=5))
        >>> result = solver.optimize(x0, f, grad_f)
        >>> result.value, result.point

    The solver holds only immutable configuration; history and iterate
    live inside each optimize() call, so one instance can serve
    concurrent callers.

    A curvature pair that fails s^T y > 1e-10 is never stored. When that
    happens the remaining pairs are dropped as well and the next
    iteration starts again from steepest descent.
    """

    def __init__(
        self,
        config: Optional[LBFGSConfig] = None,
        line_search: Optional[StrongWolfeLineSearch] = None,
    ):
        self.config = config if config is not None else LBFGSConfig()
        self.line_search = line_search

    def _line_search_for(self, config: Optional[LBFGSConfig]) -> StrongWolfeLineSearch:
        # a per-call config carries its own line-search settings
        if config is not None:
            return StrongWolfeLineSearch(config.line_search)
        if self.line_search is not None:
            return self.line_search
        return StrongWolfeLineSearch(self.config.line_search)

    def new_history(self, cfg: LBFGSConfig) -> CurvatureHistory:
        """Fresh curvature buffer for one optimize() call."""
        return CurvatureHistory(cfg.m)

    def optimize(
        self,
        init_x,
        objective: ObjectiveLike,
        gradient: GradientLike,
        *,
        config: Optional[LBFGSConfig] = None,
        callback: Optional[Callable[[IterationRecord], None]] = None,
    ) -> OptimizeResult:
        """Minimise ``objective`` starting from ``init_x``.

        Args:
            init_x: Starting point (copied, never modified)
            objective: ObjectiveFunction or callable f(x) -> float
            gradient: GradientFunction or callable g(x) -> array
            config: Per-call override of the instance configuration. When given,
                its ``line_search`` settings win over a line search passed
                to the constructor.
            callback: Called with an IterationRecord after every iteration

        Returns:
            OptimizeResult; ``converged`` is False if max_iterations ran out

        Raises:
            ValueError: if any argument is None or init_x is not a 1-D vector
        """
        x = validate_start(init_x, objective, gradient)
        objective = as_objective(objective)
        gradient = as_gradient(gradient)
        cfg = config if config is not None else self.config
        line_search = self._line_search_for(config)

        history = self.new_history(cfg)
        grad = evaluate_gradient(gradient, x)

        for iteration in range(cfg.max_iterations):
            grad_norm = float(np.linalg.norm(grad))
            if grad_norm < cfg.tolerance:
                value = objective.compute_objective(x)
                logger.info(
                    "L-BFGS converged after %d iterations: f=%.6e |g|=%.3e",
                    iteration, value, grad_norm,
                )
                return OptimizeResult(
                    value=value, point=x, converged=True, iterations=iteration, grad_norm=grad_norm
                )

            direction = two_loop_direction(grad, history)
            step = line_search.search(x, direction, objective, gradient, grad)

            new_x = x + step * direction
            new_grad = evaluate_gradient(gradient, new_x)
            accepted = history.push(new_x - x, new_grad - grad)
            if not accepted and len(history):
                # restart: the next direction is -grad
                logger.debug(
                    "Curvature pair rejected at iteration %d, restarting from steepest descent",
                    iteration,
                )
                history.clear()

            if callback is not None:
                callback(
                    IterationRecord(
                        iteration=iteration,
                        grad_norm=grad_norm,
                        step_length=float(step),
                        directional_derivative=float(grad @ direction),
                        curvature_accepted=accepted,
                        history_size=len(history),
                    )
                )

            x = new_x
            grad = new_grad

        value = objective.compute_objective(x)
        grad_norm = float(np.linalg.norm(grad))
        logger.info(
            "L-BFGS stopped at max_iterations=%d: f=%.6e |g|=%.3e",
            cfg.max_iterations, value, grad_norm,
        )
        return OptimizeResult(
            value=value, point=x, converged=False, iterations=cfg.max_iterations, grad_norm=grad_norm
        )
