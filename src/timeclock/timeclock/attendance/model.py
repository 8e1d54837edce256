from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from ..core.enums import PunchType


@dataclass(frozen=True)
class PunchSlot:
    """One punch type of one day: a recorded time, a justification, or nothing."""

    time: Optional[str] = None
    justification: Optional[str] = None

    @property
    def is_filled(self) -> bool:
        return bool(self.time) or bool(self.justification)


@dataclass(frozen=True)
class DayLog:
    """Domain entity: the punches of one employee on one calendar date."""

    employee_id: str
    work_date: date
    morning_in: PunchSlot = field(default_factory=PunchSlot)
    morning_out: PunchSlot = field(default_factory=PunchSlot)
    afternoon_in: PunchSlot = field(default_factory=PunchSlot)
    afternoon_out: PunchSlot = field(default_factory=PunchSlot)

    @classmethod
    def empty(cls, employee_id: str, work_date: date) -> "DayLog":
        return cls(employee_id=employee_id, work_date=work_date)

    def slot(self, punch_type: PunchType) -> PunchSlot:
        return getattr(self, punch_type.value)

    def is_filled(self, punch_type: PunchType) -> bool:
        return self.slot(punch_type).is_filled

    def all_filled(self) -> bool:
        return all(self.is_filled(pt) for pt in PunchType)

    def with_slot(self, punch_type: PunchType, slot: PunchSlot) -> "DayLog":
        return replace(self, **{punch_type.value: slot})

    def with_time(self, punch_type: PunchType, value: str) -> "DayLog":
        return self.with_slot(punch_type, PunchSlot(time=value))

    def with_justification(self, punch_type: PunchType, file_ref: str) -> "DayLog":
        return self.with_slot(punch_type, PunchSlot(justification=file_ref))

    def to_dict(self) -> dict:
        out: dict = {"employee_id": self.employee_id, "date": self.work_date.strftime("%Y-%m-%d")}
        for pt in PunchType:
            s = self.slot(pt)
            out[pt.value] = s.time
            out[f"{pt.value}_justification"] = s.justification
        return out
