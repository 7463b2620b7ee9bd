from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..core.enums import EvaluationStatus, SourceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import EvaluationRecord
from .repository import EvaluationRepository


class MySQLEvaluationRepository(EvaluationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, where: str, params: tuple, source_types: Optional[Iterable[SourceType]]) -> list[EvaluationRecord]:
        types = [t.value for t in source_types] if source_types is not None else []
        if source_types is not None and not types:
            return []
        if types:
            where += f" AND ev.source_type IN ({in_clause(types)})"
            params = (*params, *types)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ev.evaluation_id, ev.employee_id, ev.rater_id, ev.cycle_id,
                       ev.source_type, ev.status, ev.overall_score
                FROM evaluations ev
                WHERE {where}
                ORDER BY ev.employee_id, ev.evaluation_id
                """,
                params,
            )
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["evaluation_id"]) for r in rows]
            cur.execute(
                f"""
                SELECT evaluation_id, criterion_id, score
                FROM evaluation_criterion_scores
                WHERE evaluation_id IN ({in_clause(ids)})
                """,
                tuple(ids),
            )
            scores: dict[int, dict[str, int]] = defaultdict(dict)
            for s in fetchall(cur):
                scores[int(s["evaluation_id"])][str(s["criterion_id"])] = int(s["score"])

        return [
            EvaluationRecord(
                record_id=int(r["evaluation_id"]),
                employee_id=str(r["employee_id"]),
                rater_id=str(r["rater_id"]),
                cycle_id=str(r["cycle_id"]),
                source_type=SourceType(r["source_type"]),
                status=EvaluationStatus(r["status"]),
                criterion_scores=scores.get(int(r["evaluation_id"]), {}),
                overall_score=float(r["overall_score"]) if r.get("overall_score") is not None else None,
            )
            for r in rows
        ]

    def list_for_employee(
        self,
        *,
        employee_id: str,
        cycle_id: str,
        source_types: Optional[Iterable[SourceType]] = None,
    ) -> Sequence[EvaluationRecord]:
        return self._query("ev.employee_id=%s AND ev.cycle_id=%s", (employee_id, cycle_id), source_types)

    def list_for_cycle(
        self,
        *,
        cycle_id: str,
        source_types: Optional[Iterable[SourceType]] = None,
    ) -> Sequence[EvaluationRecord]:
        return self._query("ev.cycle_id=%s", (cycle_id,), source_types)
