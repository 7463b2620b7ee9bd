from __future__ import annotations

from typing import Optional

from ...common.score_utils import population_variance
from ...evaluations.aggregator import overall_scores
from .base import PotentialInputs, PotentialSignal

# (max variance, factor); lower spread between peers reads as higher potential.
VARIANCE_BANDS = (
    (0.5, 4.5),
    (1.0, 4.0),
    (1.5, 3.5),
)
HIGH_VARIANCE_FACTOR = 3.0
MIN_PEER_RECORDS = 2


class ConsistencySignal(PotentialSignal):
    """Agreement between 360 ratings, from the population variance of overall scores."""

    name = "consistency"

    def evaluate(self, inputs: PotentialInputs) -> Optional[float]:
        scores = overall_scores(inputs.peer_records)
        if len(scores) < MIN_PEER_RECORDS:
            return None

        variance = population_variance(scores)
        for limit, factor in VARIANCE_BANDS:
            if variance <= limit:
                return factor
        return HIGH_VARIANCE_FACTOR
