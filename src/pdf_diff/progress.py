"""Completion accounting for one run; owned by the coordinating thread only."""

from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def expected_operations(pages_a: int, pages_b: int, merge: bool = False, clean: bool = False) -> int:
    """One unit per page job, plus one for merging and one for cleaning."""
    total = max(pages_a, pages_b)
    if merge:
        total += 1
    if clean:
        total += 1
    return total


class ProgressTracker:
    def __init__(self, total: int, callback: Optional[ProgressCallback] = None):
        self.total = total
        self.completed = 0
        self._callback = callback

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 100.0
        return self.completed / self.total * 100

    def advance(self, label: str = "completed") -> float:
        if self.completed < self.total:
            self.completed += 1
        logger.info("%.2f%% %s", self.percent, label)
        if self._callback is not None:
            self._callback(self.completed, self.total)
        return self.percent
