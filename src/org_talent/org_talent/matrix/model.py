from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional, Sequence


@dataclass(frozen=True)
class GridCell:
    cell_id: int
    label: str
    color: str


@dataclass(frozen=True)
class EvaluationDetails:
    self_score: Optional[float]
    manager_score: Optional[float]
    peer_score: Optional[float]
    committee_score: Optional[float]
    total_evaluations: int

    def to_dict(self) -> dict:
        return {
            "self_assessment_score": self.self_score,
            "manager_assessment_score": self.manager_score,
            "assessment_360_score": self.peer_score,
            "committee_score": self.committee_score,
            "total_evaluations": self.total_evaluations,
        }


@dataclass(frozen=True)
class MatrixPosition:
    """Read-model: where one employee lands in the 9-box. Never persisted."""

    employee_id: str
    name: str
    job_title: Optional[str]
    business_unit: Optional[str]
    seniority: Optional[str]
    initials: str
    performance_score: float
    potential_score: float
    cell_id: int
    label: str
    color: str
    evaluation_details: Optional[EvaluationDetails] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "job_title": self.job_title,
            "business_unit": self.business_unit,
            "seniority": self.seniority,
            "initials": self.initials,
            "performance_score": self.performance_score,
            "potential_score": self.potential_score,
            "matrix_position": self.cell_id,
            "matrix_label": self.label,
            "matrix_color": self.color,
            "evaluation_details": self.evaluation_details.to_dict() if self.evaluation_details else None,
        }


@dataclass(frozen=True)
class MatrixStats:
    total_collaborators: int = 0
    category_distribution: Mapping[str, int] = field(default_factory=dict)
    business_unit_distribution: Mapping[str, int] = field(default_factory=dict)
    top_talents: int = 0
    low_performers: int = 0

    def to_dict(self) -> dict:
        return {
            "total_collaborators": self.total_collaborators,
            "category_distribution": dict(self.category_distribution),
            "business_unit_distribution": dict(self.business_unit_distribution),
            "top_talents": self.top_talents,
            "low_performers": self.low_performers,
        }


@dataclass(frozen=True)
class TalentMatrix:
    cycle: str
    positions: Sequence[MatrixPosition]
    stats: MatrixStats
    generated_at: datetime
    has_insufficient_data: bool = False
    message: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "cycle": self.cycle,
            "positions": [p.to_dict() for p in self.positions],
            "stats": self.stats.to_dict(),
            "generated_at": self.generated_at.isoformat(),
            "has_insufficient_data": self.has_insufficient_data,
        }
        if self.message:
            out["message"] = self.message
        return out
