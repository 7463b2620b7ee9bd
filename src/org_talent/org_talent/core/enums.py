from __future__ import annotations

from enum import Enum


class OrgRole(str, Enum):
    """Organisation-wide roles an employee may hold (several at once)."""

    COLLABORATOR = "collaborator"
    MANAGER = "manager"
    LEADER = "leader"
    MENTOR = "mentor"
    COMMITTEE = "committee"
    HR = "hr"
    ADMIN = "admin"


class ProjectRole(str, Enum):
    """Role of an employee inside a single project."""

    COLLABORATOR = "COLLABORATOR"
    MANAGER = "MANAGER"
    LEADER = "LEADER"


class SourceType(str, Enum):
    """Who authored an evaluation record."""

    SELF = "SELF"
    MANAGER = "MANAGER"
    PEER360 = "PEER360"
    COMMITTEE = "COMMITTEE"


class EvaluationStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
