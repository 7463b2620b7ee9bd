from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Callable, Optional

import structlog

from ..common.score_utils import now_utc
from ..common.validators import require_cycle_id, require_entity_id
from ..core.enums import OrgRole, SourceType
from ..core.exceptions import NotFoundError
from ..database.connection import READ_COMMITTED, TransactionManager
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..evaluations.aggregator import EvaluationAggregator
from ..evaluations.model import EvaluationRecord
from ..evaluations.repository import EvaluationRepository
from ..performance.calculator.base import PerformanceCalculator
from ..performance.calculator.weighted_calculator import WeightedPerformanceCalculator
from ..potential.estimator import PotentialEstimator
from .classifier import MatrixClassifier
from .model import EvaluationDetails, MatrixPosition, MatrixStats, TalentMatrix

logger = structlog.get_logger(__name__)

MATRIX_ROLES = (OrgRole.COLLABORATOR, OrgRole.MANAGER, OrgRole.COMMITTEE)
INSUFFICIENT_DATA_MESSAGE = "No evaluations have been recorded for this cycle yet."


class TalentMatrixService:
    """Use case: build the 9-box talent matrix for one cycle.

    Pure function over a snapshot of the stores; nothing is persisted and the
    whole matrix is recomputed on every call.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        evaluations: EvaluationRepository,
        tx: TransactionManager,
        *,
        aggregator: Optional[EvaluationAggregator] = None,
        calculator: Optional[PerformanceCalculator] = None,
        estimator: Optional[PotentialEstimator] = None,
        classifier: Optional[MatrixClassifier] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._employees = employees
        self._evaluations = evaluations
        self._tx = tx
        self._aggregator = aggregator or EvaluationAggregator()
        self._calculator = calculator or WeightedPerformanceCalculator()
        self._estimator = estimator or PotentialEstimator()
        self._classifier = classifier or MatrixClassifier()
        self._clock = clock

    def compute_talent_matrix(self, cycle_id: str) -> TalentMatrix:
        cycle_id = require_cycle_id(cycle_id)

        # One connection for both reads so they see the same cycle snapshot.
        with self._tx.transaction(isolation_level=READ_COMMITTED, read_only=True):
            employees = self._employees.list_active_with_roles(MATRIX_ROLES)
            records = self._evaluations.list_for_cycle(cycle_id=cycle_id, source_types=list(SourceType))

        if not records:
            logger.info("talent_matrix.insufficient_data", cycle_id=cycle_id, employees=len(employees))
            return TalentMatrix(
                cycle=cycle_id,
                positions=[],
                stats=MatrixStats(),
                generated_at=self._clock(),
                has_insufficient_data=True,
                message=INSUFFICIENT_DATA_MESSAGE,
            )

        by_employee: dict[str, list[EvaluationRecord]] = defaultdict(list)
        for r in records:
            by_employee[r.employee_id].append(r)

        positions: list[MatrixPosition] = []
        for employee in employees:
            employee_records = by_employee.get(employee.employee_id)
            if not employee_records:
                continue
            position = self.position_for(employee, employee_records)
            if position is not None:
                positions.append(position)

        positions.sort(key=lambda p: (p.cell_id, -p.performance_score, -p.potential_score, p.name))
        stats = self._classifier.stats_for(positions)

        logger.info(
            "talent_matrix.computed",
            cycle_id=cycle_id,
            records=len(records),
            candidates=len(employees),
            positioned=len(positions),
            top_talents=stats.top_talents,
            low_performers=stats.low_performers,
        )
        return TalentMatrix(
            cycle=cycle_id,
            positions=positions,
            stats=stats,
            generated_at=self._clock(),
            has_insufficient_data=False,
        )

    def employee_position(self, employee_id: str, cycle_id: str) -> Optional[MatrixPosition]:
        """One employee's cell for ``cycle_id``; ``None`` when they have no scorable records."""

        employee_id = require_entity_id(employee_id, "Employee")
        cycle_id = require_cycle_id(cycle_id)

        with self._tx.transaction(isolation_level=READ_COMMITTED, read_only=True):
            employee = self._employees.get_by_id(employee_id)
            if not employee:
                raise NotFoundError(f"Employee {employee_id} not found")
            records = self._evaluations.list_for_employee(employee_id=employee_id, cycle_id=cycle_id)

        if not records:
            return None
        return self.position_for(employee, list(records))

    def position_for(self, employee: Employee, records: list[EvaluationRecord]) -> Optional[MatrixPosition]:
        """``None`` when no self/manager/peer source has data (committee alone is not scored)."""

        averages = self._aggregator.aggregate(records)
        performance = self._calculator.score(averages)
        if performance is None:
            return None

        potential = self._estimator.estimate_from_records(seniority=employee.seniority, records=records)
        if potential is None:
            return None

        cell = self._classifier.cell_for(performance, potential)
        return MatrixPosition(
            employee_id=employee.employee_id,
            name=employee.full_name,
            job_title=employee.job_title,
            business_unit=employee.business_unit,
            seniority=employee.seniority,
            initials=employee.initials,
            performance_score=performance,
            potential_score=potential,
            cell_id=cell.cell_id,
            label=cell.label,
            color=cell.color,
            evaluation_details=EvaluationDetails(
                self_score=averages.self_avg,
                manager_score=averages.manager_avg,
                peer_score=averages.peer_avg,
                committee_score=averages.committee_avg,
                total_evaluations=averages.total_records,
            ),
        )
