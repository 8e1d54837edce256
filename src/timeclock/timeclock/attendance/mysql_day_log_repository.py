from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Iterable, Optional, Sequence

from ..common.datetime_utils import is_valid_time_string
from ..core.enums import PunchType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DayLog, PunchSlot
from .repository import DayLogRepository

logger = logging.getLogger(__name__)

_SLOT_COLUMNS = [c for pt in PunchType for c in (pt.value, f"{pt.value}_justification")]

_SELECT = f"SELECT employee_id, work_date, {', '.join(_SLOT_COLUMNS)} FROM day_logs"


def _normalize_time(value: Any, *, employee_id: str, work_date: date, column: str) -> Optional[str]:
    """Store boundary check: keep HH:MM[:SS] text, drop anything unreadable."""
    if value is None or value == "":
        return None
    text = str(value).strip()
    if not is_valid_time_string(text):
        logger.warning("Malformed %s=%r in day_logs (employee=%s date=%s)", column, value, employee_id, work_date)
        return None
    return text


def _row_to_day_log(r: Dict[str, Any]) -> DayLog:
    employee_id = str(r["employee_id"])
    work_date = r["work_date"]
    slots = {}
    for pt in PunchType:
        slots[pt.value] = PunchSlot(
            time=_normalize_time(r.get(pt.value), employee_id=employee_id, work_date=work_date, column=pt.value),
            justification=r.get(f"{pt.value}_justification") or None,
        )
    return DayLog(employee_id=employee_id, work_date=work_date, **slots)


class MySQLDayLogRepository(DayLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: str, work_date: date) -> Optional[DayLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE employee_id=%s AND work_date=%s", (employee_id, work_date))
            r = fetchone(cur)
            return _row_to_day_log(r) if r else None

    def put(self, day_log: DayLog) -> None:
        values: list[object] = []
        for pt in PunchType:
            slot = day_log.slot(pt)
            values += [slot.time, slot.justification]

        updates = ", ".join(f"{c}=VALUES({c})" for c in _SLOT_COLUMNS)
        placeholders = ",".join(["%s"] * (2 + len(_SLOT_COLUMNS)))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO day_logs(employee_id, work_date, {', '.join(_SLOT_COLUMNS)})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                (day_log.employee_id, day_log.work_date, *values),
            )

    def list_between(self, employee_id: str, start: date, end: date) -> Sequence[DayLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE employee_id=%s AND work_date BETWEEN %s AND %s ORDER BY work_date ASC",
                (employee_id, start, end),
            )
            return [_row_to_day_log(r) for r in fetchall(cur)]

    def provision(self, employee_ids: Iterable[str], work_date: date) -> int:
        created = 0
        with db_cursor(self._conn_factory) as (_, cur):
            for employee_id in employee_ids:
                cur.execute(
                    "INSERT IGNORE INTO day_logs(employee_id, work_date) VALUES(%s,%s)",
                    (employee_id, work_date),
                )
                created += cur.rowcount
        return created
