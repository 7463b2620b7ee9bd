from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..core.enums import OrgRole
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for the employee directory.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_many(self, employee_ids: Iterable[str]) -> Mapping[str, Employee]:
        """Employees by id; unknown ids are simply absent (no reciprocal sets loaded)."""
        raise NotImplementedError

    def set_manager(self, employee_ids: Sequence[str], manager_id: Optional[str]) -> int:
        raise NotImplementedError

    def set_leader(self, employee_ids: Sequence[str], leader_id: Optional[str]) -> int:
        raise NotImplementedError

    def list_active_with_roles(self, roles: Iterable[OrgRole]) -> Sequence[Employee]:
        raise NotImplementedError
