from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_duration
from ..core.enums import PunchType
from ..employees.model import Employee


@dataclass(frozen=True)
class ReportDay:
    """One calendar day of a monthly report, already rendered for display."""

    work_date: date
    is_weekend: bool
    cells: dict[PunchType, str]
    justifications: dict[PunchType, str]
    worked_seconds: int

    @property
    def worked_hours(self) -> str:
        return format_duration(self.worked_seconds)

    def to_row(self) -> dict:
        row = {"date": self.work_date.strftime("%Y-%m-%d")}
        for pt in PunchType:
            row[pt.value] = self.cells[pt]
        row["worked_hours"] = "" if self.is_weekend else self.worked_hours
        return row


@dataclass(frozen=True)
class MonthlyReport:
    employee_id: str
    year: int
    month: int
    days: list[ReportDay]
    total_seconds: int
    employee: Optional[Employee] = None

    @property
    def total_hours(self) -> str:
        return format_duration(self.total_seconds)

    @property
    def month_label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def header(self) -> dict:
        """Employee block printed above the table."""
        e = self.employee
        if not e:
            return {"name": "Not informed"}
        return {
            "name": e.name or "Not informed",
            "email": e.email or "Not informed",
            "address": e.address.one_line(),
            "sector": e.sector or "Not informed",
            "role": e.role or "Not informed",
            "status": e.status.value,
        }

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "month": self.month_label,
            "employee": self.header(),
            "days": [
                {**d.to_row(), "justifications": {pt.value: ref for pt, ref in d.justifications.items()}}
                for d in self.days
            ],
            "total_seconds": self.total_seconds,
            "total_hours": self.total_hours,
        }
