# lbfgs_engine/history.py
# Bounded store of L-BFGS curvature pairs.
from collections import deque
from typing import Iterator, Optional
import logging

import numpy as np

from .types import HistoryEntry

logger = logging.getLogger(__name__)

CURVATURE_EPS = 1e-10


class CurvatureHistory:
    """FIFO of (s, y, rho) pairs holding at most ``m`` entries.

    Iterates oldest to newest. A pair is only admitted when s^T y exceeds
    CURVATURE_EPS, so every stored rho is strictly positive.
    """

    def __init__(self, m: int = 10):
        if m < 1:
            raise ValueError(f"history capacity must be at least 1, got {m}")
        self.m = int(m)
        self._entries: deque = deque(maxlen=self.m)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __reversed__(self) -> Iterator[HistoryEntry]:
        return reversed(self._entries)

    @property
    def newest(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def push(self, s: np.ndarray, y: np.ndarray) -> bool:
        """Append the pair (s, y), evicting the oldest when full.

        Returns False and leaves the history untouched when the curvature
        condition fails.
        """
        sty = float(s @ y)
        if not sty > CURVATURE_EPS:
            logger.debug("Skipping curvature pair: s^T y = %.3e", sty)
            return False
        # deque(maxlen=m) drops the head on overflow
        self._entries.append(HistoryEntry(s=s, y=y, rho=1.0 / sty))
        return True

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> tuple:
        return tuple(self._entries)
