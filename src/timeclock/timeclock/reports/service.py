from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.engine import AttendanceEngine
from ..attendance.model import DayLog
from ..attendance.repository import DayLogRepository
from ..common.datetime_utils import days_of_month, is_valid_time_string, is_weekend
from ..core.constants import EMPTY_SLOT, JUSTIFIED_LABEL, WEEKEND_LABELS
from ..core.enums import PunchType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import MonthlyReport, ReportDay


def render_slot(day_log: Optional[DayLog], punch_type: PunchType) -> str:
    """Recorded time > justification marker > empty placeholder."""
    if day_log is None:
        return EMPTY_SLOT
    slot = day_log.slot(punch_type)
    if slot.time and is_valid_time_string(slot.time):
        return slot.time
    if slot.justification:
        return JUSTIFIED_LABEL
    return EMPTY_SLOT


class MonthlyReportService:
    def __init__(self, day_logs: DayLogRepository, employees: EmployeeRepository, engine: AttendanceEngine):
        self._day_logs = day_logs
        self._employees = employees
        self._engine = engine

    def build_monthly_report(self, employee_id: str, year: int, month: int) -> MonthlyReport:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        days = days_of_month(int(year), int(month))
        stored = {
            d.work_date: d for d in self._day_logs.list_between(employee_id, days[0], days[-1])
        }

        out: list[ReportDay] = []
        total = 0
        for day in days:
            out.append(self._build_day(day, stored.get(day)))
            total += out[-1].worked_seconds

        return MonthlyReport(
            employee_id=employee_id,
            year=int(year),
            month=int(month),
            days=out,
            total_seconds=total,
            employee=employee,
        )

    def build_many(self, employee_ids: Sequence[str], year: int, month: int) -> list[MonthlyReport]:
        return [self.build_monthly_report(eid, year, month) for eid in employee_ids]

    def _build_day(self, day: date, day_log: Optional[DayLog]) -> ReportDay:
        if is_weekend(day):
            label = WEEKEND_LABELS[day.weekday()]
            # Stored data on weekend dates never counts.
            return ReportDay(
                work_date=day,
                is_weekend=True,
                cells={pt: label for pt in PunchType},
                justifications={},
                worked_seconds=0,
            )

        justifications = {}
        if day_log is not None:
            justifications = {
                pt: day_log.slot(pt).justification for pt in PunchType if day_log.slot(pt).justification
            }
        return ReportDay(
            work_date=day,
            is_weekend=False,
            cells={pt: render_slot(day_log, pt) for pt in PunchType},
            justifications=justifications,
            worked_seconds=self._engine.calculate_daily_worked_seconds(day_log),
        )
