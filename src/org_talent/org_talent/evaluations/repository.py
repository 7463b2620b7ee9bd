from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import SourceType
from .model import EvaluationRecord


class EvaluationRepository(Protocol):
    """Read-only access to submitted and in-progress evaluations."""

    def list_for_employee(
        self,
        *,
        employee_id: str,
        cycle_id: str,
        source_types: Optional[Iterable[SourceType]] = None,
    ) -> Sequence[EvaluationRecord]:
        raise NotImplementedError

    def list_for_cycle(
        self,
        *,
        cycle_id: str,
        source_types: Optional[Iterable[SourceType]] = None,
    ) -> Sequence[EvaluationRecord]:
        raise NotImplementedError
