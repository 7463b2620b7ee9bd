from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...evaluations.model import EvaluationRecord


@dataclass(frozen=True)
class PotentialInputs:
    seniority: Optional[str]
    self_records: Sequence[EvaluationRecord] = field(default_factory=tuple)
    manager_records: Sequence[EvaluationRecord] = field(default_factory=tuple)
    peer_records: Sequence[EvaluationRecord] = field(default_factory=tuple)


class PotentialSignal(ABC):
    """Strategy Pattern: one independent factor of the potential estimate."""

    name: str = "signal"

    @abstractmethod
    def evaluate(self, inputs: PotentialInputs) -> Optional[float]:
        """Factor value, or ``None`` when this signal has nothing to say."""
        raise NotImplementedError
