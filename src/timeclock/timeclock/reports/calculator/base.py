from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import DayLog


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked-time rules)."""

    @abstractmethod
    def worked_seconds(self, day_log: DayLog) -> int:
        raise NotImplementedError
