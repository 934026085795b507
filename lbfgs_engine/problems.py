"""Benchmark objectives implementing both capability protocols."""

from typing import Optional

import numpy as np


class Quadratic:
    """f(x) = x^T A x + b^T x + c, gradient (A + A^T) x + b."""

    def __init__(self, A, b=None, c: float = 0.0):
        self.A = np.atleast_2d(np.asarray(A, dtype=float))
        n = self.A.shape[0]
        if self.A.shape != (n, n):
            raise ValueError(f"A must be square, got shape {self.A.shape}")
        self.b = np.zeros(n) if b is None else np.asarray(b, dtype=float)
        if self.b.shape != (n,):
            raise ValueError(f"b must have length {n}, got shape {self.b.shape}")
        self.c = float(c)

    @property
    def dim(self) -> int:
        return self.A.shape[0]

    def compute_objective(self, x: np.ndarray) -> float:
        return float(x @ self.A @ x + self.b @ x + self.c)

    def compute_gradient(self, x: np.ndarray) -> np.ndarray:
        return (self.A + self.A.T) @ x + self.b

    def minimizer(self) -> np.ndarray:
        """Stationary point; unique minimum when A is positive definite."""
        return np.linalg.solve(self.A + self.A.T, -self.b)

    @classmethod
    def shifted(cls, center, scale: Optional[np.ndarray] = None) -> "Quadratic":
        """sum_i scale_i (x_i - center_i)^2, minimised at ``center``."""
        center = np.asarray(center, dtype=float)
        w = np.ones_like(center) if scale is None else np.asarray(scale, dtype=float)
        return cls(np.diag(w), b=-2.0 * w * center, c=float(np.sum(w * center**2)))


class Rosenbrock:
    """
    f(x, y) = (a - x)^2 + b (y - x^2)^2, minimum 0 at (a, a^2).
    """

    def __init__(self, a: float = 1.0, b: float = 100.0):
        self.a = float(a)
        self.b = float(b)

    def compute_objective(self, x: np.ndarray) -> float:
        u1, u2 = x
        return float((self.a - u1) ** 2 + self.b * (u2 - u1**2) ** 2)

    def compute_gradient(self, x: np.ndarray) -> np.ndarray:
        u1, u2 = x
        dm_du1 = -2.0 * (self.a - u1) - 4.0 * self.b * u1 * (u2 - u1**2)
        dm_du2 = 2.0 * self.b * (u2 - u1**2)
        return np.array([dm_du1, dm_du2])

    def minimizer(self) -> np.ndarray:
        return np.array([self.a, self.a**2])
