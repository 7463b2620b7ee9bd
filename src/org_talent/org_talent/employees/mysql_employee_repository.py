from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Mapping, Optional, Sequence

from ..core.enums import OrgRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Employee
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = """
    e.employee_id, e.full_name, e.job_title, e.seniority, e.business_unit,
    e.is_active, e.manager_id, e.leader_id, e.mentor_id
"""


def _row_to_employee(row: dict, roles: Iterable[str] = (), *, reports=(), leadership=()) -> Employee:
    return Employee(
        employee_id=str(row["employee_id"]),
        full_name=row["full_name"],
        job_title=row.get("job_title"),
        seniority=row.get("seniority"),
        business_unit=row.get("business_unit"),
        is_active=bool(row.get("is_active", True)),
        roles=frozenset(OrgRole(r) for r in roles),
        manager_id=row.get("manager_id"),
        leader_id=row.get("leader_id"),
        mentor_id=row.get("mentor_id"),
        direct_reports=frozenset(reports),
        direct_leadership=frozenset(leadership),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _roles_for(self, cur, employee_ids: Sequence[str]) -> dict[str, list[str]]:
        out: dict[str, list[str]] = defaultdict(list)
        if not employee_ids:
            return out
        cur.execute(
            f"SELECT employee_id, role FROM employee_org_roles WHERE employee_id IN ({in_clause(employee_ids)})",
            tuple(employee_ids),
        )
        for r in fetchall(cur):
            out[str(r["employee_id"])].append(r["role"])
        return out

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees e WHERE e.employee_id=%s", (employee_id,))
            row = fetchone(cur)
            if not row:
                return None

            roles = self._roles_for(cur, [employee_id])

            cur.execute("SELECT employee_id FROM employees WHERE manager_id=%s", (employee_id,))
            reports = [str(r["employee_id"]) for r in fetchall(cur)]
            cur.execute("SELECT employee_id FROM employees WHERE leader_id=%s", (employee_id,))
            leadership = [str(r["employee_id"]) for r in fetchall(cur)]

            return _row_to_employee(row, roles.get(employee_id, ()), reports=reports, leadership=leadership)

    def get_many(self, employee_ids: Iterable[str]) -> Mapping[str, Employee]:
        ids = sorted({str(i) for i in employee_ids if i})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EMPLOYEE_COLUMNS} FROM employees e WHERE e.employee_id IN ({in_clause(ids)})",
                tuple(ids),
            )
            rows = fetchall(cur)
            roles = self._roles_for(cur, ids)
            return {str(r["employee_id"]): _row_to_employee(r, roles.get(str(r["employee_id"]), ())) for r in rows}

    def _set_pointer(self, column: str, employee_ids: Sequence[str], target_id: Optional[str]) -> int:
        if not employee_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {column}=%s WHERE employee_id IN ({in_clause(employee_ids)})",
                (target_id, *employee_ids),
            )
            return int(cur.rowcount)

    def set_manager(self, employee_ids: Sequence[str], manager_id: Optional[str]) -> int:
        return self._set_pointer("manager_id", employee_ids, manager_id)

    def set_leader(self, employee_ids: Sequence[str], leader_id: Optional[str]) -> int:
        return self._set_pointer("leader_id", employee_ids, leader_id)

    def list_active_with_roles(self, roles: Iterable[OrgRole]) -> Sequence[Employee]:
        wanted = [r.value for r in roles]
        if not wanted:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT DISTINCT {_EMPLOYEE_COLUMNS}
                FROM employees e
                JOIN employee_org_roles r ON r.employee_id = e.employee_id
                WHERE e.is_active = 1 AND r.role IN ({in_clause(wanted)})
                ORDER BY e.full_name, e.employee_id
                """,
                tuple(wanted),
            )
            rows = fetchall(cur)
            ids = [str(r["employee_id"]) for r in rows]
            role_map = self._roles_for(cur, ids)
            return [_row_to_employee(r, role_map.get(str(r["employee_id"]), ())) for r in rows]
