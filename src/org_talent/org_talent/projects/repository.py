from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ProjectRole
from .model import Project, ProjectRoleAssignment


class ProjectRoleRepository(Protocol):
    """Repository interface for projects and their role table.

    The role table is the single source of truth for who manages/leads a project.
    """

    def get_project(self, project_id: str, *, for_update: bool = False) -> Optional[Project]:
        """``for_update`` locks the project row until the surrounding transaction ends."""
        raise NotImplementedError

    def find_active_role_holder(self, project_id: str, role: ProjectRole) -> Optional[ProjectRoleAssignment]:
        raise NotImplementedError

    def list_active_members(self, project_id: str, *, role: ProjectRole = ProjectRole.COLLABORATOR) -> Sequence[str]:
        raise NotImplementedError

    def count_active_members(self, project_id: str, *, role: ProjectRole = ProjectRole.COLLABORATOR) -> int:
        raise NotImplementedError

    def has_active_assignment(self, employee_id: str, project_id: str, role: ProjectRole) -> bool:
        raise NotImplementedError

    def create_assignment(self, employee_id: str, project_id: str, role: ProjectRole) -> ProjectRoleAssignment:
        """Raises ConflictError when the store rejects a second active MANAGER/LEADER."""
        raise NotImplementedError

    def set_project_leader(self, project_id: str, leader_id: Optional[str]) -> bool:
        raise NotImplementedError

    def list_project_roles(self, project_id: str) -> Sequence[ProjectRoleAssignment]:
        raise NotImplementedError
