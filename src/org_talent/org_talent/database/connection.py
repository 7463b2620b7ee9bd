from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

import mysql.connector

SERIALIZABLE = "SERIALIZABLE"
READ_COMMITTED = "READ COMMITTED"


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class TransactionManager(Protocol):
    """What services need to run several repository calls atomically."""

    def transaction(self, *, isolation_level: str = READ_COMMITTED, read_only: bool = False):
        raise NotImplementedError


class DatabaseConnection(TransactionManager):
    """Singleton-like DB connection factory.

    Note: Outside a transaction we create short-lived connections per operation.
    Inside ``transaction()`` every repository call on the same thread shares one
    connection, so the whole unit commits or rolls back together.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def active_connection(self):
        return getattr(self._local, "conn", None)

    @contextmanager
    def transaction(self, *, isolation_level: str = READ_COMMITTED, read_only: bool = False) -> Iterator[object]:
        outer = self.active_connection()
        if outer is not None:
            # Nested use joins the outer unit of work.
            yield outer
            return

        conn = self.connect()
        try:
            conn.start_transaction(isolation_level=isolation_level, readonly=read_only)
            self._local.conn = conn
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise
        finally:
            self._local.conn = None
            conn.close()
