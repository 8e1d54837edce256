from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time

from ..core.constants import WEEKEND_LABELS
from ..core.exceptions import MalformedStoredTime, ValidationError

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month: {value!r} (expected YYYY-MM)")
    return parsed.year, parsed.month


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def time_to_seconds(value: object) -> int:
    """Seconds since midnight for an HH:MM[:SS] string.

    Raises MalformedStoredTime for anything else, including out-of-range parts.
    """
    if not isinstance(value, str):
        raise MalformedStoredTime(value)
    m = _TIME_RE.match(value.strip())
    if not m:
        raise MalformedStoredTime(value)
    hours, minutes = int(m.group(1)), int(m.group(2))
    seconds = int(m.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise MalformedStoredTime(value)
    return hours * 3600 + minutes * 60 + seconds


def is_valid_time_string(value: object) -> bool:
    try:
        time_to_seconds(value)
    except MalformedStoredTime:
        return False
    return True


def parse_hhmm(value: str) -> time:
    """Parse a configuration boundary like '07:40'."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def minute_of_day(t: time | datetime) -> int:
    return t.hour * 60 + t.minute


def format_clock_time(moment: datetime) -> str:
    return moment.strftime("%H:%M:%S")


def format_duration(total_seconds: int) -> str:
    """Render seconds as 'Xh Ym' (seconds are dropped)."""
    total_seconds = max(int(total_seconds), 0)
    return f"{total_seconds // 3600}h {(total_seconds % 3600) // 60}m"


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_LABELS


def days_of_month(year: int, month: int) -> list[date]:
    _, count = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, count + 1)]
