from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterator, Mapping, Sequence

from ..common.datetime_utils import minute_of_day, parse_hhmm
from ..core.enums import PunchType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ScheduleWindow:
    """Allowed time of day for one punch type.

    Minute resolution, inclusive at both ends: a 12:10 end accepts 12:10:59.
    """

    punch_type: PunchType
    start: time
    end: time

    def contains(self, moment: time | datetime) -> bool:
        return minute_of_day(self.start) <= minute_of_day(moment) <= minute_of_day(self.end)

    def distance_minutes(self, moment: time | datetime) -> int:
        """Minutes between `moment` and the closest edge of the window (0 inside)."""
        m = minute_of_day(moment)
        if m < minute_of_day(self.start):
            return minute_of_day(self.start) - m
        if m > minute_of_day(self.end):
            return m - minute_of_day(self.end)
        return 0

    def label(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


class WorkdaySchedule:
    """The four ordered, non-overlapping windows of a working day."""

    def __init__(self, windows: Sequence[ScheduleWindow]):
        by_type = {w.punch_type: w for w in windows}
        if len(windows) != len(PunchType) or set(by_type) != set(PunchType):
            raise ValidationError("Exactly one window per punch type is required")

        ordered = [by_type[pt] for pt in PunchType]
        for w in ordered:
            if minute_of_day(w.start) > minute_of_day(w.end):
                raise ValidationError(f"Window for {w.punch_type.value} ends before it starts")
        for prev, cur in zip(ordered, ordered[1:]):
            if minute_of_day(cur.start) <= minute_of_day(prev.end):
                raise ValidationError(
                    f"Window for {cur.punch_type.value} overlaps or precedes {prev.punch_type.value}"
                )

        self._windows = {w.punch_type: w for w in ordered}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "WorkdaySchedule":
        """Build from settings, e.g. {"morning_in": ("07:40", "08:05"), ...}."""
        windows = []
        for key, bounds in mapping.items():
            try:
                punch_type = PunchType(key)
                start_s, end_s = bounds
                windows.append(ScheduleWindow(punch_type=punch_type, start=parse_hhmm(start_s), end=parse_hhmm(end_s)))
            except ValueError:
                raise ValidationError(f"Invalid schedule window: {key}={bounds!r}")
        return cls(windows)

    def window_for(self, punch_type: PunchType) -> ScheduleWindow:
        return self._windows[punch_type]

    def __iter__(self) -> Iterator[ScheduleWindow]:
        return iter(self._windows.values())

    def as_dict(self) -> dict:
        return {w.punch_type.value: w.label() for w in self}
