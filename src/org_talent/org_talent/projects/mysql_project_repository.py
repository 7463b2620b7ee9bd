from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import ProjectRole
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Project, ProjectRoleAssignment
from .repository import ProjectRoleRepository


def _row_to_assignment(row: dict) -> ProjectRoleAssignment:
    return ProjectRoleAssignment(
        assignment_id=int(row["assignment_id"]),
        employee_id=str(row["employee_id"]),
        project_id=str(row["project_id"]),
        role=ProjectRole(row["role"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLProjectRoleRepository(ProjectRoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_project(self, project_id: str, *, for_update: bool = False) -> Optional[Project]:
        sql = "SELECT project_id, project_name, leader_id FROM projects WHERE project_id=%s"
        if for_update:
            sql += " FOR UPDATE"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (project_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Project(
                project_id=str(row["project_id"]),
                project_name=row["project_name"],
                leader_id=row.get("leader_id"),
            )

    def find_active_role_holder(self, project_id: str, role: ProjectRole) -> Optional[ProjectRoleAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_id, employee_id, project_id, role, is_active
                FROM project_roles
                WHERE project_id=%s AND role=%s AND is_active=1
                ORDER BY assignment_id
                LIMIT 1
                """,
                (project_id, role.value),
            )
            row = fetchone(cur)
            return _row_to_assignment(row) if row else None

    def list_active_members(self, project_id: str, *, role: ProjectRole = ProjectRole.COLLABORATOR) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT employee_id
                FROM project_roles
                WHERE project_id=%s AND role=%s AND is_active=1
                ORDER BY employee_id
                """,
                (project_id, role.value),
            )
            return [str(r["employee_id"]) for r in fetchall(cur)]

    def count_active_members(self, project_id: str, *, role: ProjectRole = ProjectRole.COLLABORATOR) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT employee_id) AS total
                FROM project_roles
                WHERE project_id=%s AND role=%s AND is_active=1
                """,
                (project_id, role.value),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def has_active_assignment(self, employee_id: str, project_id: str, role: ProjectRole) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found
                FROM project_roles
                WHERE employee_id=%s AND project_id=%s AND role=%s AND is_active=1
                LIMIT 1
                """,
                (employee_id, project_id, role.value),
            )
            return fetchone(cur) is not None

    def create_assignment(self, employee_id: str, project_id: str, role: ProjectRole) -> ProjectRoleAssignment:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO project_roles(employee_id, project_id, role, is_active)
                    VALUES(%s, %s, %s, 1)
                    """,
                    (employee_id, project_id, role.value),
                )
                assignment_id = int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError(f"Project {project_id} already has an active {role.value}") from e
            raise

        return ProjectRoleAssignment(
            assignment_id=assignment_id,
            employee_id=employee_id,
            project_id=project_id,
            role=role,
            is_active=True,
        )

    def set_project_leader(self, project_id: str, leader_id: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE projects SET leader_id=%s WHERE project_id=%s", (leader_id, project_id))
            return cur.rowcount > 0

    def list_project_roles(self, project_id: str) -> Sequence[ProjectRoleAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_id, employee_id, project_id, role, is_active
                FROM project_roles
                WHERE project_id=%s AND is_active=1
                ORDER BY FIELD(role, 'MANAGER', 'LEADER', 'COLLABORATOR'), employee_id
                """,
                (project_id,),
            )
            return [_row_to_assignment(r) for r in fetchall(cur)]
