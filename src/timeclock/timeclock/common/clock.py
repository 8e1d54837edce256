from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .datetime_utils import now_local


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class LocalClock:
    """Wall clock of the application host."""

    def now(self) -> datetime:
        return now_local()


class DatabaseClock:
    """Server-verified time: asks MySQL instead of trusting the host clock."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def now(self) -> datetime:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT NOW()")
            (value,) = cur.fetchone()
            return value
