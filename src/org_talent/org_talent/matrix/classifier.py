from __future__ import annotations

from collections import Counter
from typing import Mapping, Sequence

from .model import GridCell, MatrixPosition, MatrixStats

LOW_LEVEL_MAX = 2.5
MEDIUM_LEVEL_MAX = 3.5

# (performance level, potential level) -> cell; 1 = low, 3 = high.
GRID: Mapping[tuple[int, int], GridCell] = {
    (3, 3): GridCell(1, "Estrelas", "#10b981"),
    (2, 3): GridCell(2, "Alto Potencial", "#3b82f6"),
    (1, 3): GridCell(3, "Enigmas", "#8b5cf6"),
    (3, 2): GridCell(4, "Alto Desempenho", "#22c55e"),
    (2, 2): GridCell(5, "Consistentes", "#eab308"),
    (1, 2): GridCell(6, "Questionáveis", "#f97316"),
    (3, 1): GridCell(7, "Especialistas", "#14b8a6"),
    (2, 1): GridCell(8, "Eficazes", "#f59e0b"),
    (1, 1): GridCell(9, "Insuficientes", "#ef4444"),
}
FALLBACK_CELL = GRID[(2, 2)]

TOP_TALENT_CELLS = frozenset({1, 2, 4})
LOW_PERFORMER_CELLS = frozenset({8, 9})

UNKNOWN_BUSINESS_UNIT = "Unknown"


def level_for(score: float) -> int:
    """Fixed thresholds, not relative to the population: <=2.5 low, <=3.5 medium."""
    if score <= LOW_LEVEL_MAX:
        return 1
    if score <= MEDIUM_LEVEL_MAX:
        return 2
    return 3


class MatrixClassifier:
    """Buckets (performance, potential) into the 9-box and summarises the result."""

    def __init__(self, grid: Mapping[tuple[int, int], GridCell] = GRID, *, fallback: GridCell = FALLBACK_CELL):
        self._grid = grid
        self._fallback = fallback

    def cell_for(self, performance: float, potential: float) -> GridCell:
        return self._grid.get((level_for(performance), level_for(potential)), self._fallback)

    @staticmethod
    def stats_for(positions: Sequence[MatrixPosition]) -> MatrixStats:
        categories = Counter(p.label for p in positions)
        units = Counter(p.business_unit or UNKNOWN_BUSINESS_UNIT for p in positions)
        return MatrixStats(
            total_collaborators=len(positions),
            category_distribution=dict(categories),
            business_unit_distribution=dict(units),
            top_talents=sum(1 for p in positions if p.cell_id in TOP_TALENT_CELLS),
            low_performers=sum(1 for p in positions if p.cell_id in LOW_PERFORMER_CELLS),
        )
