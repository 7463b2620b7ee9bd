from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.score_utils import mean, round_score
from ..core.enums import SourceType
from ..evaluations.aggregator import group_by_source, select_self_record
from ..evaluations.model import EvaluationRecord
from .signals.base import PotentialInputs, PotentialSignal
from .signals.consistency_signal import ConsistencySignal
from .signals.criteria_signal import CriteriaSignal
from .signals.seniority_signal import SenioritySignal


class PotentialEstimator:
    """Potential = mean of whichever signals produced a value.

    The seniority prior always answers, so the estimate is defined for everyone.
    """

    def __init__(
        self,
        signals: Optional[Sequence[PotentialSignal]] = None,
        *,
        potential_criteria: Optional[Iterable[str]] = None,
    ):
        self._signals = list(signals) if signals is not None else [
            SenioritySignal(),
            CriteriaSignal(potential_criteria),
            ConsistencySignal(),
        ]

    def factors(self, inputs: PotentialInputs) -> dict[str, float]:
        out: dict[str, float] = {}
        for signal in self._signals:
            value = signal.evaluate(inputs)
            if value is not None:
                out[signal.name] = float(value)
        return out

    def estimate(self, inputs: PotentialInputs) -> Optional[float]:
        avg = mean(self.factors(inputs).values())
        return round_score(avg) if avg is not None else None

    def estimate_from_records(self, *, seniority: Optional[str], records: Iterable[EvaluationRecord]) -> Optional[float]:
        grouped = group_by_source(records)
        self_record = select_self_record(grouped.get(SourceType.SELF, []), warn=False)
        return self.estimate(
            PotentialInputs(
                seniority=seniority,
                self_records=(self_record,) if self_record else (),
                manager_records=tuple(grouped.get(SourceType.MANAGER, [])),
                peer_records=tuple(grouped.get(SourceType.PEER360, [])),
            )
        )
