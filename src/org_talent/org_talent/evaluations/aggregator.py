from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

import structlog

from ..common.score_utils import mean
from ..core.enums import SourceType
from .model import EvaluationRecord, SourceAverages

logger = structlog.get_logger(__name__)


def group_by_source(records: Iterable[EvaluationRecord]) -> dict[SourceType, list[EvaluationRecord]]:
    grouped: dict[SourceType, list[EvaluationRecord]] = defaultdict(list)
    for r in records:
        grouped[r.source_type].append(r)
    return grouped


def overall_scores(records: Iterable[EvaluationRecord], *, submitted_only: bool = True) -> list[float]:
    return [
        float(r.overall_score)
        for r in records
        if r.overall_score is not None and (r.is_submitted or not submitted_only)
    ]


def select_self_record(records: Sequence[EvaluationRecord], *, warn: bool = True) -> Optional[EvaluationRecord]:
    """The one SELF record that counts for a cycle: the newest by record id."""
    if not records:
        return None
    latest = max(records, key=lambda r: r.record_id)
    if warn and len(records) > 1:
        # Only one self assessment per cycle is allowed; keep the newest.
        logger.warning(
            "evaluations.duplicate_self_assessment",
            employee_id=latest.employee_id,
            cycle_id=latest.cycle_id,
            count=len(records),
            kept_record_id=latest.record_id,
        )
    return latest


class EvaluationAggregator:
    """Reduce raw records of one employee/cycle to one average per source.

    No weighting happens here; each average is independent and may be ``None``.
    """

    def aggregate(self, records: Iterable[EvaluationRecord]) -> SourceAverages:
        records = list(records)
        grouped = group_by_source(records)

        self_record = select_self_record(grouped.get(SourceType.SELF, []))
        self_avg = mean(self_record.criterion_scores.values()) if self_record else None

        manager_avg = mean(
            score
            for r in grouped.get(SourceType.MANAGER, [])
            for score in r.criterion_scores.values()
        )

        peer_avg = mean(overall_scores(grouped.get(SourceType.PEER360, [])))
        committee_avg = mean(overall_scores(grouped.get(SourceType.COMMITTEE, []), submitted_only=False))

        return SourceAverages(
            self_avg=self_avg,
            manager_avg=manager_avg,
            peer_avg=peer_avg,
            committee_avg=committee_avg,
            total_records=len(records),
        )
