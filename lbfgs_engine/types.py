"""
Record types shared by the solvers.

HistoryEntry holds one curvature pair, OptimizeResult is what optimize()
hands back, and IterationRecord is what a callback sees after each step.
Array fields are stored as read-only copies.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

import numpy as np


def _frozen_array(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class HistoryEntry:
    s: np.ndarray  # x_{k+1} - x_k
    y: np.ndarray  # grad_{k+1} - grad_k
    rho: float  # 1 / (y^T s)

    def __post_init__(self):
        object.__setattr__(self, "s", _frozen_array(self.s))
        object.__setattr__(self, "y", _frozen_array(self.y))

    def __eq__(self, other):
        if not isinstance(other, HistoryEntry):
            return NotImplemented
        return (
            self.rho == other.rho
            and np.array_equal(self.s, other.s)
            and np.array_equal(self.y, other.y)
        )


@dataclass(frozen=True, eq=False)
class OptimizeResult:
    """Final value and point of an optimisation run.

    ``converged`` is False when the iteration budget ran out before the
    gradient norm dropped below tolerance; value/point are filled in the
    same way in both cases. ``point`` is read-only, and two results
    compare equal when every field matches elementwise.
    """

    value: float
    point: np.ndarray
    converged: bool = False
    iterations: int = 0
    grad_norm: float = float("nan")

    def __post_init__(self):
        object.__setattr__(self, "point", _frozen_array(self.point))

    def __eq__(self, other):
        if not isinstance(other, OptimizeResult):
            return NotImplemented
        return (
            (self.value, self.converged, self.iterations) == (other.value, other.converged, other.iterations)
            and np.array_equal([self.grad_norm], [other.grad_norm], equal_nan=True)
            and np.array_equal(self.point, other.point)
        )

    def as_tuple(self) -> Tuple[float, np.ndarray]:
        return self.value, self.point


@dataclass(frozen=True)
class IterationRecord:
    iteration: int
    grad_norm: float
    step_length: float
    directional_derivative: float
    curvature_accepted: bool
    history_size: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
