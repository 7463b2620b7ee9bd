from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

import structlog

from ..common.validators import require_entity_id
from ..core.constants import DEFAULT_MAX_CASCADE_ROSTER, DEFAULT_ROSTER_BATCH_SIZE
from ..core.enums import ProjectRole
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.connection import READ_COMMITTED, SERIALIZABLE, TransactionManager
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import Project, ProjectRoleAssignment
from .repository import ProjectRoleRepository

logger = structlog.get_logger(__name__)

_ROLE_LABELS = {
    ProjectRole.MANAGER: "manager",
    ProjectRole.LEADER: "leader",
}


@dataclass(frozen=True)
class RoleAssignmentResult:
    assignment: ProjectRoleAssignment
    roster_size: int
    repointed: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "assignment": self.assignment.to_dict(),
            "roster_size": self.roster_size,
            "repointed": list(self.repointed),
        }


@dataclass(frozen=True)
class JoinResult:
    employee_id: str
    project_id: str
    manager_id: Optional[str]
    leader_id: Optional[str]

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "project_id": self.project_id,
            "manager_id": self.manager_id,
            "leader_id": self.leader_id,
        }


def _chunks(items: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


class RoleAssignmentService:
    """Use case: keep a project's manager/leader unique and the org graph consistent.

    Every write runs inside one transaction: the incumbent check, the new
    assignment and the roster cascade commit together or not at all.
    """

    def __init__(
        self,
        projects: ProjectRoleRepository,
        employees: EmployeeRepository,
        tx: TransactionManager,
        *,
        max_cascade_roster: int = DEFAULT_MAX_CASCADE_ROSTER,
        roster_batch_size: int = DEFAULT_ROSTER_BATCH_SIZE,
    ):
        self._projects = projects
        self._employees = employees
        self._tx = tx
        self._max_cascade_roster = int(max_cascade_roster)
        self._batch_size = max(1, int(roster_batch_size))

    def _require_project(self, project_id: str, *, for_update: bool = False) -> Project:
        project = self._projects.get_project(project_id, for_update=for_update)
        if not project:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def _conflict(self, project: Project, role: ProjectRole, incumbent_id: Optional[str]) -> ConflictError:
        label = _ROLE_LABELS[role]
        incumbent = self._employees.get_by_id(incumbent_id) if incumbent_id else None
        incumbent_name = incumbent.full_name if incumbent else incumbent_id
        if incumbent_name:
            message = f"Project {project.project_name} already has a {label}: {incumbent_name}"
        else:
            message = f"Project {project.project_name} already has a {label}"
        return ConflictError(message, incumbent_id=incumbent_id, incumbent_name=incumbent_name)

    def get_employee(self, employee_id: str) -> Employee:
        return self._require_employee(require_entity_id(employee_id, "Employee"))

    def list_project_roles(self, project_id: str) -> Sequence[ProjectRoleAssignment]:
        project_id = require_entity_id(project_id, "Project")
        self._require_project(project_id)
        return self._projects.list_project_roles(project_id)

    def assign_manager(self, *, project_id: str, candidate_id: str) -> RoleAssignmentResult:
        return self._assign_single_holder(project_id, candidate_id, ProjectRole.MANAGER)

    def assign_leader(self, *, project_id: str, candidate_id: str) -> RoleAssignmentResult:
        return self._assign_single_holder(project_id, candidate_id, ProjectRole.LEADER)

    def _assign_single_holder(self, project_id: str, candidate_id: str, role: ProjectRole) -> RoleAssignmentResult:
        project_id = require_entity_id(project_id, "Project")
        candidate_id = require_entity_id(candidate_id, "Employee")

        with self._tx.transaction(isolation_level=SERIALIZABLE):
            # Row lock serialises concurrent assignments for the same project.
            project = self._require_project(project_id, for_update=True)
            candidate = self._require_employee(candidate_id)
            if not candidate.is_active:
                raise ValidationError(f"Employee {candidate.full_name} is inactive")

            incumbent = self._projects.find_active_role_holder(project_id, role)
            if incumbent:
                raise self._conflict(project, role, incumbent.employee_id)

            roster_size = self._projects.count_active_members(project_id)
            if roster_size > self._max_cascade_roster:
                raise ValidationError(
                    f"Project {project.project_name} has {roster_size} collaborators; "
                    f"cascade limit is {self._max_cascade_roster}"
                )

            try:
                assignment = self._projects.create_assignment(candidate_id, project_id, role)
            except ConflictError:
                holder = self._projects.find_active_role_holder(project_id, role)
                raise self._conflict(project, role, holder.employee_id if holder else None) from None

            if role == ProjectRole.LEADER:
                self._projects.set_project_leader(project_id, candidate_id)

            repointed = self._rescan_roster(project_id, candidate_id, role)

        logger.info(
            "project_role.assigned",
            project_id=project_id,
            role=role.value,
            employee_id=candidate_id,
            roster_size=roster_size,
            repointed=len(repointed),
        )
        return RoleAssignmentResult(assignment=assignment, roster_size=roster_size, repointed=tuple(repointed))

    def _rescan_roster(self, project_id: str, holder_id: str, role: ProjectRole) -> list[str]:
        """Full rescan of the active collaborators, not an incremental diff.

        The holder was just checked to be active and is now the project's only
        active holder of ``role``, so any member pointing elsewhere (or nowhere)
        is stale.
        """
        members = [m for m in self._projects.list_active_members(project_id) if m != holder_id]
        repointed: list[str] = []

        for batch in _chunks(members, self._batch_size):
            by_id = self._employees.get_many(batch)
            stale = [m for m in batch if m in by_id and self._pointer(by_id[m], role) != holder_id]
            if not stale:
                continue
            self._set_pointer(stale, holder_id, role)
            repointed.extend(stale)

        return repointed

    @staticmethod
    def _pointer(employee: Employee, role: ProjectRole) -> Optional[str]:
        return employee.manager_id if role == ProjectRole.MANAGER else employee.leader_id

    def _set_pointer(self, employee_ids: Sequence[str], holder_id: str, role: ProjectRole) -> None:
        if role == ProjectRole.MANAGER:
            self._employees.set_manager(employee_ids, holder_id)
        else:
            self._employees.set_leader(employee_ids, holder_id)

    def on_collaborator_join(self, *, employee_id: str, project_id: str) -> JoinResult:
        employee_id = require_entity_id(employee_id, "Employee")
        project_id = require_entity_id(project_id, "Project")

        with self._tx.transaction(isolation_level=READ_COMMITTED):
            project = self._require_project(project_id)
            employee = self._require_employee(employee_id)
            return self._join(project, employee)

    def add_collaborator(self, *, employee_id: str, project_id: str) -> JoinResult:
        employee_id = require_entity_id(employee_id, "Employee")
        project_id = require_entity_id(project_id, "Project")

        with self._tx.transaction(isolation_level=READ_COMMITTED):
            project = self._require_project(project_id)
            employee = self._require_employee(employee_id)
            if not employee.is_active:
                raise ValidationError(f"Employee {employee.full_name} is inactive")

            if not self._projects.has_active_assignment(employee_id, project_id, ProjectRole.COLLABORATOR):
                self._projects.create_assignment(employee_id, project_id, ProjectRole.COLLABORATOR)
            return self._join(project, employee)

    def _current_holder(self, project: Project, role: ProjectRole) -> Optional[str]:
        if role == ProjectRole.LEADER and project.leader_id:
            return project.leader_id
        holder = self._projects.find_active_role_holder(project.project_id, role)
        return holder.employee_id if holder else None

    def _join(self, project: Project, employee: Employee) -> JoinResult:
        manager_id = self._current_holder(project, ProjectRole.MANAGER)
        leader_id = self._current_holder(project, ProjectRole.LEADER)
        holders = self._employees.get_many([h for h in (manager_id, leader_id) if h])

        for role, holder_id in ((ProjectRole.MANAGER, manager_id), (ProjectRole.LEADER, leader_id)):
            if not holder_id or holder_id == employee.employee_id:
                continue
            holder = holders.get(holder_id)
            if not holder or not holder.is_active:
                continue
            if self._pointer(employee, role) == holder_id:
                continue
            self._set_pointer([employee.employee_id], holder_id, role)

        logger.info(
            "project.collaborator_joined",
            project_id=project.project_id,
            employee_id=employee.employee_id,
            manager_id=manager_id,
            leader_id=leader_id,
        )
        return JoinResult(
            employee_id=employee.employee_id,
            project_id=project.project_id,
            manager_id=manager_id,
            leader_id=leader_id,
        )
