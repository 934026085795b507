"""
Protocol interfaces for objective, gradient and optimizer capabilities.
Callers may pass protocol objects or plain callables; the adapters below
give both the same shape so the solvers never need isinstance checks.
"""

from typing import Any, Callable, Protocol, Union, runtime_checkable

import numpy as np

from .types import OptimizeResult


@runtime_checkable
class ObjectiveFunction(Protocol):
    """Scalar objective f(x)."""

    def compute_objective(self, x: np.ndarray) -> float:
        ...


@runtime_checkable
class GradientFunction(Protocol):
    """Gradient of the objective; same length as x."""

    def compute_gradient(self, x: np.ndarray) -> np.ndarray:
        ...


class Optimizer(Protocol):
    """Anything that minimises an objective from a starting point."""

    def optimize(
        self,
        init_x: np.ndarray,
        objective: Any,
        gradient: Any,
    ) -> OptimizeResult:
        ...


# Adapter classes to wrap plain callables

class CallableObjective:
    """Adapter to make a plain ``f(x) -> float`` conform to ObjectiveFunction."""

    def __init__(self, fn: Callable[[np.ndarray], float]):
        self._fn = fn

    def compute_objective(self, x: np.ndarray) -> float:
        value = np.asarray(self._fn(x), dtype=float)
        if value.size != 1:
            raise TypeError(f"Objective must return a scalar, got shape {value.shape}")
        return float(value.item())

    def __repr__(self) -> str:
        return f"CallableObjective({self._fn!r})"


class CallableGradient:
    """Adapter to make a plain ``g(x) -> array`` conform to GradientFunction."""

    def __init__(self, fn: Callable[[np.ndarray], Any]):
        self._fn = fn

    def compute_gradient(self, x: np.ndarray) -> np.ndarray:
        return np.asarray(self._fn(x), dtype=float)

    def __repr__(self) -> str:
        return f"CallableGradient({self._fn!r})"


ObjectiveLike = Union[ObjectiveFunction, Callable[[np.ndarray], float]]
GradientLike = Union[GradientFunction, Callable[[np.ndarray], Any]]


def as_objective(obj: ObjectiveLike) -> ObjectiveFunction:
    if isinstance(obj, ObjectiveFunction):
        return obj
    if callable(obj):
        return CallableObjective(obj)
    raise TypeError(f"Objective must be callable or define compute_objective, got {type(obj).__name__}")


def as_gradient(obj: GradientLike) -> GradientFunction:
    if isinstance(obj, GradientFunction):
        return obj
    if callable(obj):
        return CallableGradient(obj)
    raise TypeError(f"Gradient must be callable or define compute_gradient, got {type(obj).__name__}")
