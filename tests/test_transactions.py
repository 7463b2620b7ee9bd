from __future__ import annotations

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from src.org_talent.org_talent.core.enums import ProjectRole
from src.org_talent.org_talent.core.exceptions import ConflictError
from src.org_talent.org_talent.database.connection import DBConfig, DatabaseConnection
from src.org_talent.org_talent.database.mysql_base import db_cursor, is_duplicate_key
from src.org_talent.org_talent.projects.mysql_project_repository import MySQLProjectRoleRepository


class FakeCursor:
    def __init__(self, log, error=None):
        self._log = log
        self._error = error

    def execute(self, sql, params=None):
        self._log.append(("execute", sql))
        if self._error is not None:
            raise self._error
        self.lastrowid = 7

    def close(self):
        self._log.append(("cursor_close",))


class FakeConn:
    def __init__(self, log, error=None):
        self._log = log
        self._error = error

    def start_transaction(self, isolation_level=None, readonly=None):
        self._log.append(("start", isolation_level, readonly))

    def cursor(self, dictionary=True):
        return FakeCursor(self._log, self._error)

    def commit(self):
        self._log.append(("commit",))

    def rollback(self):
        self._log.append(("rollback",))

    def close(self):
        self._log.append(("close",))


@pytest.fixture()
def db(monkeypatch):
    log = []
    conn = DatabaseConnection(DBConfig(host="h", port=3306, user="u", password="p", database="d"))
    opened = []

    def fake_connect():
        opened.append(1)
        return FakeConn(log)

    monkeypatch.setattr(conn, "connect", fake_connect)
    return conn, log, opened


def test_repository_calls_share_the_transaction_connection(db):
    conn, log, opened = db

    with conn.transaction(isolation_level="SERIALIZABLE"):
        with db_cursor(conn) as (_, cur):
            cur.execute("SELECT 1")
        with db_cursor(conn) as (_, cur):
            cur.execute("SELECT 2")

    assert len(opened) == 1
    assert log[0] == ("start", "SERIALIZABLE", False)
    assert log.count(("commit",)) == 1
    assert log[-1] == ("close",)


def test_failure_inside_transaction_rolls_back(db):
    conn, log, _ = db

    with pytest.raises(RuntimeError):
        with conn.transaction():
            with db_cursor(conn) as (_, cur):
                cur.execute("UPDATE employees SET manager_id='x'")
            raise RuntimeError("boom")

    assert ("rollback",) in log
    assert ("commit",) not in log
    assert conn.active_connection() is None


def test_nested_transaction_joins_outer(db):
    conn, log, opened = db

    with conn.transaction():
        with conn.transaction(isolation_level="SERIALIZABLE"):
            with db_cursor(conn) as (_, cur):
                cur.execute("SELECT 1")

    assert len(opened) == 1
    assert log.count(("commit",)) == 1


def test_cursor_outside_transaction_commits_its_own_connection(db):
    conn, log, opened = db

    with db_cursor(conn) as (_, cur):
        cur.execute("SELECT 1")

    assert len(opened) == 1
    assert log == [("execute", "SELECT 1"), ("commit",), ("cursor_close",), ("close",)]


def _project_repo(monkeypatch, error=None):
    log = []
    conn = DatabaseConnection(DBConfig(host="h", port=3306, user="u", password="p", database="d"))
    monkeypatch.setattr(conn, "connect", lambda: FakeConn(log, error))
    return MySQLProjectRoleRepository(conn), log


def test_create_assignment_returns_inserted_row(monkeypatch):
    repo, log = _project_repo(monkeypatch)

    assignment = repo.create_assignment("e1", "p1", ProjectRole.MANAGER)

    assert assignment.assignment_id == 7
    assert assignment.role == ProjectRole.MANAGER
    assert ("commit",) in log


def test_duplicate_active_role_becomes_conflict(monkeypatch):
    duplicate = IntegrityError(msg="Duplicate entry 'p1-MANAGER'", errno=errorcode.ER_DUP_ENTRY)
    repo, log = _project_repo(monkeypatch, duplicate)

    with pytest.raises(ConflictError) as excinfo:
        repo.create_assignment("e2", "p1", ProjectRole.MANAGER)

    assert excinfo.value.__cause__ is duplicate
    assert ("rollback",) in log
    assert ("commit",) not in log


def test_other_integrity_errors_propagate_unchanged(monkeypatch):
    missing_fk = IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    repo, _ = _project_repo(monkeypatch, missing_fk)

    with pytest.raises(IntegrityError) as excinfo:
        repo.create_assignment("ghost", "p1", ProjectRole.MANAGER)

    assert excinfo.value is missing_fk
    assert not is_duplicate_key(missing_fk)
    assert is_duplicate_key(IntegrityError(errno=errorcode.ER_DUP_ENTRY))
