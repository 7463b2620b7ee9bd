from __future__ import annotations

from typing import Optional

from ...common.score_utils import round_score
from ...evaluations.model import SourceAverages
from .base import PerformanceCalculator

BASE_WEIGHTS = {"self": 0.2, "manager": 0.5, "peer": 0.3}
# Used only when the manager average is missing.
NO_MANAGER_WEIGHTS = {"self": 0.4, "peer": 0.6}


class WeightedPerformanceCalculator(PerformanceCalculator):
    """Weighted mean of self/manager/peer averages.

    Missing sources drop both their term and their weight. Only a missing manager
    average switches to the redistributed weights; a missing self or peer
    average leaves the others' weights alone.
    """

    def score(self, averages: SourceAverages) -> Optional[float]:
        sources = {
            "self": averages.self_avg,
            "manager": averages.manager_avg,
            "peer": averages.peer_avg,
        }
        if all(v is None for v in sources.values()):
            return None

        weights = BASE_WEIGHTS if averages.manager_avg is not None else NO_MANAGER_WEIGHTS

        weighted_sum = 0.0
        weight_used = 0.0
        for name, weight in weights.items():
            value = sources[name]
            if value is None:
                continue
            weighted_sum += weight * value
            weight_used += weight

        return round_score(weighted_sum / weight_used)
