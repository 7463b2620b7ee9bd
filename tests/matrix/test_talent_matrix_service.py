from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone

import pytest

from src.org_talent.org_talent.core.enums import EvaluationStatus, OrgRole, SourceType
from src.org_talent.org_talent.core.exceptions import NotFoundError, ValidationError
from src.org_talent.org_talent.employees.model import Employee
from src.org_talent.org_talent.evaluations.model import EvaluationRecord
from src.org_talent.org_talent.matrix.service import TalentMatrixService

FIXED_NOW = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)


class FakeEmployees:
    def __init__(self, employees):
        self._employees = employees
        self.roles_requested = None

    def get_by_id(self, employee_id):
        return next((e for e in self._employees if e.employee_id == employee_id), None)

    def list_active_with_roles(self, roles):
        self.roles_requested = set(roles)
        return [e for e in self._employees if e.is_active and e.roles & set(roles)]


class FakeEvaluations:
    def __init__(self, records):
        self._records = records

    def list_for_employee(self, *, employee_id, cycle_id, source_types=None):
        return [r for r in self._records if r.employee_id == employee_id and r.cycle_id == cycle_id]

    def list_for_cycle(self, *, cycle_id, source_types=None):
        wanted = set(source_types) if source_types is not None else set(SourceType)
        return [r for r in self._records if r.cycle_id == cycle_id and r.source_type in wanted]


class RecordingTx:
    def __init__(self):
        self.calls = []

    @contextmanager
    def transaction(self, *, isolation_level="READ COMMITTED", read_only=False):
        self.calls.append((isolation_level, read_only))
        yield self


_ids = iter(range(1, 10_000))


def rec(employee_id, source, *, scores=None, overall=None, cycle_id="2025.1"):
    return EvaluationRecord(
        record_id=next(_ids),
        employee_id=employee_id,
        rater_id="rater",
        cycle_id=cycle_id,
        source_type=source,
        status=EvaluationStatus.SUBMITTED,
        criterion_scores=scores or {},
        overall_score=overall,
    )


def emp(employee_id, name, *, seniority="senior", unit="Digital Products", roles=(OrgRole.COLLABORATOR,), active=True):
    return Employee(
        employee_id=employee_id,
        full_name=name,
        seniority=seniority,
        business_unit=unit,
        job_title="Engineer",
        is_active=active,
        roles=frozenset(roles),
    )


def build(employees, records):
    tx = RecordingTx()
    employees_repo = FakeEmployees(employees)
    svc = TalentMatrixService(employees_repo, FakeEvaluations(records), tx, clock=lambda: FIXED_NOW)
    return svc, tx, employees_repo


def test_empty_cycle_reports_insufficient_data():
    svc, _, _ = build([emp("e1", "Ana Lima")], [rec("e1", SourceType.SELF, scores={"a": 4}, cycle_id="2024.2")])

    matrix = svc.compute_talent_matrix("2025.1")

    assert matrix.has_insufficient_data is True
    assert list(matrix.positions) == []
    assert matrix.stats.total_collaborators == 0
    assert matrix.message
    assert matrix.to_dict()["has_insufficient_data"] is True


def test_employees_without_records_are_excluded_from_positions_and_stats():
    employees = [emp("e1", "Ana Lima"), emp("e2", "Bruno Reis")]
    records = [
        rec("e1", SourceType.SELF, scores={"a": 4}),
        rec("e1", SourceType.MANAGER, scores={"a": 3}),
        rec("e1", SourceType.PEER360, overall=5.0),
    ]
    svc, _, _ = build(employees, records)

    matrix = svc.compute_talent_matrix("2025.1")

    assert matrix.has_insufficient_data is False
    assert [p.employee_id for p in matrix.positions] == ["e1"]
    assert matrix.stats.total_collaborators == 1


def test_position_scores_and_cell():
    records = [
        rec("e1", SourceType.SELF, scores={"a": 4}),
        rec("e1", SourceType.MANAGER, scores={"a": 3}),
        rec("e1", SourceType.PEER360, overall=5.0),
    ]
    svc, _, _ = build([emp("e1", "Ana Lima", seniority="junior")], records)

    position = svc.compute_talent_matrix("2025.1").positions[0]

    assert position.performance_score == 3.8
    # junior prior only: one peer rating, no potential criteria
    assert position.potential_score == 4.5
    assert position.cell_id == 1
    assert position.label == "Estrelas"
    assert position.initials == "AL"
    assert position.evaluation_details.total_evaluations == 3


def test_committee_only_employee_has_no_position():
    employees = [emp("e1", "Ana Lima"), emp("e2", "Bruno Reis")]
    records = [
        rec("e1", SourceType.SELF, scores={"a": 2}),
        rec("e2", SourceType.COMMITTEE, overall=4.0),
    ]
    svc, _, _ = build(employees, records)

    matrix = svc.compute_talent_matrix("2025.1")

    assert [p.employee_id for p in matrix.positions] == ["e1"]
    assert matrix.has_insufficient_data is False


def test_only_collaborators_managers_and_committee_are_considered():
    employees = [
        emp("e1", "Ana Lima", roles=(OrgRole.MANAGER,)),
        emp("e2", "Bruno Reis", roles=(OrgRole.HR,)),
        emp("e3", "Carla Dias", active=False),
    ]
    records = [rec(e, SourceType.SELF, scores={"a": 3}) for e in ("e1", "e2", "e3")]
    svc, _, employees_repo = build(employees, records)

    matrix = svc.compute_talent_matrix("2025.1")

    assert [p.employee_id for p in matrix.positions] == ["e1"]
    assert employees_repo.roles_requested == {OrgRole.COLLABORATOR, OrgRole.MANAGER, OrgRole.COMMITTEE}


def test_reads_share_one_read_only_transaction():
    svc, tx, _ = build([emp("e1", "Ana Lima")], [rec("e1", SourceType.SELF, scores={"a": 3})])

    svc.compute_talent_matrix("2025.1")

    assert tx.calls == [("READ COMMITTED", True)]


def test_stats_and_ordering():
    employees = [
        emp("e1", "Ana Lima", seniority="junior", unit="Digital Products"),
        emp("e2", "Bruno Reis", seniority="staff", unit="Operations"),
        emp("e3", "Carla Dias", seniority="junior", unit="Operations"),
    ]
    records = [
        rec("e1", SourceType.MANAGER, scores={"a": 5}),
        rec("e2", SourceType.MANAGER, scores={"a": 1}),
        rec("e3", SourceType.MANAGER, scores={"a": 3}),
    ]
    svc, _, _ = build(employees, records)

    matrix = svc.compute_talent_matrix("2025.1")

    # e1: (5, 4.5) -> 1 ; e3: (3, 4.5) -> 2 ; e2: (1, 2.0) -> 9
    assert [(p.employee_id, p.cell_id) for p in matrix.positions] == [("e1", 1), ("e3", 2), ("e2", 9)]
    assert matrix.stats.top_talents == 2
    assert matrix.stats.low_performers == 1
    assert matrix.stats.business_unit_distribution == {"Digital Products": 1, "Operations": 2}
    assert matrix.generated_at == FIXED_NOW


def test_malformed_cycle_is_rejected():
    svc, tx, _ = build([], [])

    with pytest.raises(ValidationError):
        svc.compute_talent_matrix("")
    with pytest.raises(ValidationError):
        svc.compute_talent_matrix("2025-first")

    assert tx.calls == []


def test_employee_position_reads_only_that_employee():
    employees = [emp("e1", "Ana Lima", seniority="junior"), emp("e2", "Bruno Reis")]
    records = [
        rec("e1", SourceType.MANAGER, scores={"a": 5}),
        rec("e2", SourceType.MANAGER, scores={"a": 1}),
    ]
    svc, tx, _ = build(employees, records)

    position = svc.employee_position("e1", "2025.1")

    assert position.employee_id == "e1"
    assert position.cell_id == 1
    assert position.evaluation_details.total_evaluations == 1
    assert tx.calls == [("READ COMMITTED", True)]


def test_employee_position_without_records_or_unknown_employee():
    svc, _, _ = build([emp("e1", "Ana Lima")], [rec("e1", SourceType.SELF, scores={"a": 3}, cycle_id="2024.2")])

    assert svc.employee_position("e1", "2025.1") is None
    with pytest.raises(NotFoundError):
        svc.employee_position("ghost", "2025.1")
