"""Finite-difference gradients for objectives without an analytic gradient."""

import numpy as np

from .protocols import ObjectiveLike, as_objective

SCHEMES = ("central", "forward")


class FiniteDifferenceGradient:
    """
    Approximate grad f(x) coordinate by coordinate.

    Parameters
    ----------
    objective : ObjectiveFunction or callable
        The function to differentiate.
    step : float
        Base increment; scaled by max(1, |x_i|) per coordinate.
    scheme : {"central", "forward"}
        Central differences cost 2n evaluations with O(h^2) error, forward
        differences n + 1 evaluations with O(h) error.
    """

    def __init__(self, objective: ObjectiveLike, step: float = 1e-6, scheme: str = "central"):
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}")
        if scheme not in SCHEMES:
            raise ValueError(f"Unknown scheme: {scheme!r}, expected one of {SCHEMES}")
        self.objective = as_objective(objective)
        self.step = float(step)
        self.scheme = scheme

    def compute_gradient(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        grad = np.empty_like(x)
        f = self.objective.compute_objective
        f0 = f(x) if self.scheme == "forward" else None
        for i in range(x.size):
            h = self.step * max(1.0, abs(x[i]))
            e = np.zeros_like(x)
            e[i] = h
            if self.scheme == "central":
                grad[i] = (f(x + e) - f(x - e)) / (2.0 * h)
            else:
                grad[i] = (f(x + e) - f0) / h
        return grad
