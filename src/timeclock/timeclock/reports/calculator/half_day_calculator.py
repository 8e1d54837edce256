from __future__ import annotations

import logging
from typing import Optional

from ...attendance.model import DayLog, PunchSlot
from ...common.datetime_utils import time_to_seconds
from ...core.enums import PunchType
from ...core.exceptions import MalformedStoredTime
from .base import WorkedTimeCalculator

logger = logging.getLogger(__name__)

HALF_DAYS = (
    (PunchType.MORNING_IN, PunchType.MORNING_OUT),
    (PunchType.AFTERNOON_IN, PunchType.AFTERNOON_OUT),
)


class HalfDayCalculator(WorkedTimeCalculator):
    """Standard rule: (morning out - in) + (afternoon out - in).

    A half-day counts only when both ends are real times; a justification,
    a gap or an unreadable value drops that half-day to 0. Negative spans are
    clamped to 0 and logged.
    """

    def worked_seconds(self, day_log: DayLog) -> int:
        total = 0
        for in_type, out_type in HALF_DAYS:
            start = self._seconds(day_log, in_type)
            end = self._seconds(day_log, out_type)
            if start is None or end is None:
                continue
            span = end - start
            if span < 0:
                logger.warning(
                    "Negative half-day for employee=%s date=%s (%s=%s, %s=%s); counting 0",
                    day_log.employee_id,
                    day_log.work_date,
                    in_type.value,
                    day_log.slot(in_type).time,
                    out_type.value,
                    day_log.slot(out_type).time,
                )
                continue
            total += span
        return total

    @staticmethod
    def _seconds(day_log: DayLog, punch_type: PunchType) -> Optional[int]:
        slot: PunchSlot = day_log.slot(punch_type)
        if not slot.time:
            return None
        try:
            return time_to_seconds(slot.time)
        except MalformedStoredTime as e:
            logger.warning(
                "Ignoring %s for employee=%s date=%s: %s", punch_type.value, day_log.employee_id, day_log.work_date, e
            )
            return None
