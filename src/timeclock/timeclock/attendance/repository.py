from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import DayLog


class DayLogRepository(Protocol):
    def get(self, employee_id: str, work_date: date) -> Optional[DayLog]:
        raise NotImplementedError

    def put(self, day_log: DayLog) -> None:
        """Insert or replace the whole day log (all four slots)."""

        raise NotImplementedError

    def list_between(self, employee_id: str, start: date, end: date) -> Sequence[DayLog]:
        raise NotImplementedError

    def provision(self, employee_ids: Iterable[str], work_date: date) -> int:
        """Create empty day logs where missing. Returns how many were created."""

        raise NotImplementedError
