from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """The four daily clock events, in chronological order."""

    MORNING_IN = "morning_in"
    MORNING_OUT = "morning_out"
    AFTERNOON_IN = "afternoon_in"
    AFTERNOON_OUT = "afternoon_out"


class ClockKind(str, Enum):
    """Coarse action chosen by the UI; the exact punch type is inferred."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"

    @property
    def candidates(self) -> tuple[PunchType, ...]:
        if self is ClockKind.CLOCK_IN:
            return (PunchType.MORNING_IN, PunchType.AFTERNOON_IN)
        return (PunchType.MORNING_OUT, PunchType.AFTERNOON_OUT)


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class RejectionReason(str, Enum):
    """Why a punch attempt was refused."""

    WEEKEND_NOT_ALLOWED = "WEEKEND_NOT_ALLOWED"
    ALL_PUNCHES_RECORDED = "ALL_PUNCHES_RECORDED"
    OUTSIDE_WINDOW = "OUTSIDE_WINDOW"
