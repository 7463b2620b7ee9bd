from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from ..core.enums import OrgRole


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee in the directory.

    ``direct_reports`` / ``direct_leadership`` are derived from the other employees'
    ``manager_id`` / ``leader_id`` pointers; they are never written directly.
    """

    employee_id: str
    full_name: str
    seniority: Optional[str] = None
    business_unit: Optional[str] = None
    job_title: Optional[str] = None
    is_active: bool = True
    roles: FrozenSet[OrgRole] = field(default_factory=frozenset)
    manager_id: Optional[str] = None
    leader_id: Optional[str] = None
    mentor_id: Optional[str] = None
    direct_reports: FrozenSet[str] = field(default_factory=frozenset)
    direct_leadership: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def initials(self) -> str:
        parts = [p for p in self.full_name.split() if p]
        if not parts:
            return "?"
        if len(parts) == 1:
            return parts[0][:2].upper()
        return (parts[0][0] + parts[-1][0]).upper()

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.full_name,
            "job_title": self.job_title,
            "seniority": self.seniority,
            "business_unit": self.business_unit,
            "is_active": self.is_active,
            "roles": sorted(r.value for r in self.roles),
            "manager_id": self.manager_id,
            "leader_id": self.leader_id,
            "mentor_id": self.mentor_id,
            "direct_reports": sorted(self.direct_reports),
            "direct_leadership": sorted(self.direct_leadership),
        }
