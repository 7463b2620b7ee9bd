from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .core.constants import DEFAULT_MAX_CASCADE_ROSTER, DEFAULT_ROSTER_BATCH_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .evaluations.aggregator import EvaluationAggregator
from .evaluations.mysql_evaluation_repository import MySQLEvaluationRepository
from .matrix.service import TalentMatrixService
from .potential.estimator import PotentialEstimator
from .projects.mysql_project_repository import MySQLProjectRoleRepository
from .projects.service import RoleAssignmentService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    projects_repo: MySQLProjectRoleRepository
    evaluations_repo: MySQLEvaluationRepository

    role_service: RoleAssignmentService
    matrix_service: TalentMatrixService


def build_container(
    *,
    db_config: dict,
    max_cascade_roster: int = DEFAULT_MAX_CASCADE_ROSTER,
    roster_batch_size: int = DEFAULT_ROSTER_BATCH_SIZE,
    potential_criteria: Optional[Iterable[str]] = None,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    employees_repo = MySQLEmployeeRepository(conn)
    projects_repo = MySQLProjectRoleRepository(conn)
    evaluations_repo = MySQLEvaluationRepository(conn)

    role_service = RoleAssignmentService(
        projects_repo,
        employees_repo,
        conn,
        max_cascade_roster=max_cascade_roster,
        roster_batch_size=roster_batch_size,
    )
    matrix_service = TalentMatrixService(
        employees_repo,
        evaluations_repo,
        conn,
        aggregator=EvaluationAggregator(),
        estimator=PotentialEstimator(potential_criteria=potential_criteria),
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        projects_repo=projects_repo,
        evaluations_repo=evaluations_repo,
        role_service=role_service,
        matrix_service=matrix_service,
    )
