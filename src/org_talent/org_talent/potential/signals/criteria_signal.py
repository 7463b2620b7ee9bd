from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ...common.score_utils import mean
from ...core.constants import DEFAULT_POTENTIAL_CRITERIA
from ...evaluations.model import EvaluationRecord
from .base import PotentialInputs, PotentialSignal

MANAGER_WEIGHT = 0.6
SELF_WEIGHT = 0.4


class CriteriaSignal(PotentialSignal):
    """Manager and self scores on the designated potential criteria.

    Each source contributes its weighted term only when it scored at least one of
    the criteria. The weights are not renormalised, so a self-only signal is
    ``self_avg * 0.4``.
    """

    name = "criteria"

    def __init__(self, criteria: Optional[Iterable[str]] = None):
        self._criteria = frozenset(criteria if criteria is not None else DEFAULT_POTENTIAL_CRITERIA)

    def _criteria_avg(self, records: Sequence[EvaluationRecord]) -> Optional[float]:
        return mean(
            score
            for r in records
            for criterion_id, score in r.criterion_scores.items()
            if criterion_id in self._criteria
        )

    def evaluate(self, inputs: PotentialInputs) -> Optional[float]:
        total = 0.0

        manager_avg = self._criteria_avg(inputs.manager_records)
        if manager_avg is not None:
            total += manager_avg * MANAGER_WEIGHT

        self_avg = self._criteria_avg(inputs.self_records)
        if self_avg is not None:
            total += self_avg * SELF_WEIGHT

        return total if total > 0 else None
