from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import is_weekend
from ..core.enums import ClockKind, PunchType
from ..core.exceptions import AllPunchesRecorded, OutsideWindow, PunchRejected, WeekendNotAllowed
from ..reports.calculator.base import WorkedTimeCalculator
from ..reports.calculator.half_day_calculator import HalfDayCalculator
from ..schedules.model import WorkdaySchedule
from .model import DayLog


class AttendanceEngine:
    """Punch-window rules and daily worked-time arithmetic.

    Pure logic: no store access and no clock of its own. `now` always comes
    from the caller.
    """

    def __init__(
        self,
        schedule: WorkdaySchedule,
        *,
        block_weekends: bool = True,
        calculator: Optional[WorkedTimeCalculator] = None,
    ):
        self._schedule = schedule
        self._block_weekends = bool(block_weekends)
        self._calculator = calculator or HalfDayCalculator()

    @property
    def schedule(self) -> WorkdaySchedule:
        return self._schedule

    @staticmethod
    def _candidates(kind: Optional[ClockKind]) -> Sequence[PunchType]:
        return kind.candidates if kind else tuple(PunchType)

    def next_expected_punch(
        self, day_log: Optional[DayLog], kind: Optional[ClockKind], now: datetime
    ) -> Optional[PunchType]:
        """First unfilled candidate whose window contains `now`, else None."""
        for punch_type in self._candidates(kind):
            if day_log is not None and day_log.is_filled(punch_type):
                continue
            if self._schedule.window_for(punch_type).contains(now):
                return punch_type
        return None

    def rejection_for(self, day_log: Optional[DayLog], kind: Optional[ClockKind], now: datetime) -> PunchRejected:
        """Explain why no punch type is available at `now`."""
        if self._block_weekends and is_weekend(now.date()):
            return WeekendNotAllowed()

        open_types = [pt for pt in self._candidates(kind) if day_log is None or not day_log.is_filled(pt)]
        if not open_types:
            return AllPunchesRecorded()

        # min() keeps the first (earliest) window on ties.
        nearest = min(
            (self._schedule.window_for(pt) for pt in open_types),
            key=lambda w: w.distance_minutes(now),
        )
        return OutsideWindow(nearest)

    def validate_punch(
        self, now: datetime, day_log: Optional[DayLog], kind: Optional[ClockKind] = None
    ) -> PunchType:
        if self._block_weekends and is_weekend(now.date()):
            raise WeekendNotAllowed()

        punch_type = self.next_expected_punch(day_log, kind, now)
        if punch_type is None:
            raise self.rejection_for(day_log, kind, now)
        return punch_type

    def calculate_daily_worked_seconds(self, day_log: Optional[DayLog]) -> int:
        if day_log is None:
            return 0
        return self._calculator.worked_seconds(day_log)
