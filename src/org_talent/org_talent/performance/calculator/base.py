from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...evaluations.model import SourceAverages


class PerformanceCalculator(ABC):
    """Calculator interface (Strategy Pattern for the performance axis)."""

    @abstractmethod
    def score(self, averages: SourceAverages) -> Optional[float]:
        """Performance in [1, 5], or ``None`` when no source has data."""
        raise NotImplementedError
