from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.enums import EvaluationStatus, SourceType


@dataclass(frozen=True)
class EvaluationRecord:
    """Read-only evaluation row as stored for one (employee, rater, cycle)."""

    record_id: int
    employee_id: str
    rater_id: str
    cycle_id: str
    source_type: SourceType
    status: EvaluationStatus = EvaluationStatus.SUBMITTED
    criterion_scores: Mapping[str, int] = field(default_factory=dict)
    overall_score: Optional[float] = None

    @property
    def is_submitted(self) -> bool:
        return self.status == EvaluationStatus.SUBMITTED


@dataclass(frozen=True)
class SourceAverages:
    """One average per source; ``None`` means that source has no usable data."""

    self_avg: Optional[float] = None
    manager_avg: Optional[float] = None
    peer_avg: Optional[float] = None
    committee_avg: Optional[float] = None
    total_records: int = 0

    @property
    def has_performance_data(self) -> bool:
        return any(v is not None for v in (self.self_avg, self.manager_avg, self.peer_avg))
