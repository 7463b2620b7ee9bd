from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ProjectRole


@dataclass(frozen=True)
class Project:
    project_id: str
    project_name: str
    leader_id: Optional[str] = None


@dataclass(frozen=True)
class ProjectRoleAssignment:
    """Domain entity: one employee's role inside one project."""

    assignment_id: int
    employee_id: str
    project_id: str
    role: ProjectRole
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "assignment_id": self.assignment_id,
            "employee_id": self.employee_id,
            "project_id": self.project_id,
            "role": self.role.value,
            "is_active": self.is_active,
        }
