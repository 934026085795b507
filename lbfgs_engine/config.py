"""
Configuration dataclasses for the line search and the L-BFGS solver.

Both are frozen: a solver reads its configuration once at the start of
each optimize() call, and a per-call override never touches the instance.
"""

from dataclasses import dataclass, field, fields, replace as _replace
from typing import Any, Dict

MIN_TOLERANCE = 1e-12


@dataclass(frozen=True)
class LineSearchConfig:
    """Constants for the backtracking strong-Wolfe line search."""

    c1: float = 1e-4  # Armijo slope fraction
    c2: float = 0.9  # curvature slope fraction
    initial_step_size: float = 1.0
    max_attempts: int = 50
    shrink: float = 0.5  # backtracking factor
    min_step: float = 1e-10  # stop backtracking below this
    fallback_step: float = 1e-8  # returned for a non-descent direction

    def __post_init__(self):
        if not 0.0 < self.c1 < self.c2 < 1.0:
            raise ValueError(f"Line search requires 0 < c1 < c2 < 1, got c1={self.c1}, c2={self.c2}")
        if self.initial_step_size <= 0:
            raise ValueError(f"initial_step_size must be positive, got {self.initial_step_size}")
        if not 0.0 < self.shrink < 1.0:
            raise ValueError(f"shrink must lie in (0, 1), got {self.shrink}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LineSearchConfig":
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in valid_fields})


@dataclass(frozen=True)
class LBFGSConfig:
    """Configuration for the L-BFGS solver.

    Out-of-range values for ``m``, ``tolerance`` and ``max_iterations`` are
    clamped to their minimum rather than rejected.
    """

    m: int = 10  # history capacity
    tolerance: float = 1e-6  # gradient-norm stop threshold
    max_iterations: int = 1000
    line_search: LineSearchConfig = field(default_factory=LineSearchConfig)

    def __post_init__(self):
        # frozen, so go through object.__setattr__
        object.__setattr__(self, "m", max(1, int(self.m)))
        object.__setattr__(self, "tolerance", max(MIN_TOLERANCE, float(self.tolerance)))
        object.__setattr__(self, "max_iterations", max(1, int(self.max_iterations)))
        if isinstance(self.line_search, dict):
            object.__setattr__(self, "line_search", LineSearchConfig.from_dict(self.line_search))

    def replace(self, **changes) -> "LBFGSConfig":
        """Return a copy with ``changes`` applied."""
        return _replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a plain dictionary for serialization."""
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["line_search"] = self.line_search.to_dict()
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LBFGSConfig":
        """Create config from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in d.items() if k in valid_fields}
        return cls(**filtered)
