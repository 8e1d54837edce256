from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Optional

from ..common.clock import Clock, LocalClock
from ..common.datetime_utils import format_clock_time, is_valid_time_string
from ..common.validators import require_mapping, require_text
from ..core.enums import ClockKind, PunchType
from ..core.exceptions import AuthorizationError, NotFoundError, SlotAlreadyFilled, ValidationError
from ..employees.repository import EmployeeRepository
from ..uploads.store import UploadStore
from .engine import AttendanceEngine
from .model import DayLog, PunchSlot
from .repository import DayLogRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunchOutcome:
    punch_type: PunchType
    recorded_time: str
    day_log: DayLog


class AttendanceService:
    def __init__(
        self,
        day_logs: DayLogRepository,
        employees: EmployeeRepository,
        engine: AttendanceEngine,
        *,
        clock: Optional[Clock] = None,
        uploads: Optional[UploadStore] = None,
    ):
        self._day_logs = day_logs
        self._employees = employees
        self._engine = engine
        self._clock = clock or LocalClock()
        self._uploads = uploads

    @property
    def engine(self) -> AttendanceEngine:
        return self._engine

    def current_time(self) -> datetime:
        return self._clock.now()

    def _require_active(self, employee_id: str) -> None:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        if not employee.is_active:
            raise ValidationError("Employee is inactive")

    def get_day_log(self, employee_id: str, work_date: date) -> DayLog:
        return self._day_logs.get(employee_id, work_date) or DayLog.empty(employee_id, work_date)

    def punch(self, employee_id: str, kind: Optional[ClockKind], *, now: Optional[datetime] = None) -> PunchOutcome:
        """Clock in/out: infer the punch type, validate it and store the time."""
        now = now or self._clock.now()
        self._require_active(employee_id)

        day_log = self._day_logs.get(employee_id, now.date())
        punch_type = self._engine.validate_punch(now, day_log, kind)

        recorded = format_clock_time(now)
        day_log = self.record_punch(employee_id, now.date(), punch_type, recorded)
        logger.info("Punch %s=%s recorded for employee=%s", punch_type.value, recorded, employee_id)
        return PunchOutcome(punch_type=punch_type, recorded_time=recorded, day_log=day_log)

    def record_punch(self, employee_id: str, work_date: date, punch_type: PunchType, time_value: str) -> DayLog:
        """Write a time into an empty slot; a filled slot is left untouched."""
        day_log = self.get_day_log(employee_id, work_date)
        if day_log.is_filled(punch_type):
            logger.warning(
                "Refusing to overwrite %s for employee=%s date=%s", punch_type.value, employee_id, work_date
            )
            return day_log

        day_log = day_log.with_time(punch_type, time_value)
        self._day_logs.put(day_log)
        return day_log

    def record_justification(self, employee_id: str, work_date: date, punch_type: PunchType, file_ref: str) -> DayLog:
        day_log = self.get_day_log(employee_id, work_date)
        if day_log.is_filled(punch_type):
            raise SlotAlreadyFilled(punch_type)

        day_log = day_log.with_justification(punch_type, file_ref)
        self._day_logs.put(day_log)
        return day_log

    def submit_justification(
        self,
        employee_id: str,
        work_date: date,
        punch_type: PunchType,
        *,
        data: bytes,
        filename: str,
    ) -> DayLog:
        """Upload a justification document and attach it to the slot."""
        if self._uploads is None:
            raise ValidationError("Uploads are not configured")
        self._require_active(employee_id)

        # Checked before uploading so a refused slot leaves no stray file.
        if self.get_day_log(employee_id, work_date).is_filled(punch_type):
            raise SlotAlreadyFilled(punch_type)

        file_ref = self._uploads.upload_file(data, filename)
        return self.record_justification(employee_id, work_date, punch_type, file_ref)

    def correct_day_log(
        self,
        *,
        current_is_admin: bool,
        employee_id: str,
        work_date: date,
        times: Mapping[str, Optional[str]],
    ) -> DayLog:
        """Admin override of recorded times; bypasses the single-write rule."""
        if not current_is_admin:
            raise AuthorizationError("You do not have permission")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        times = require_mapping(times, "Day log")

        day_log = self.get_day_log(employee_id, work_date)
        for key, value in times.items():
            try:
                punch_type = PunchType(key)
            except ValueError:
                raise ValidationError(f"Unknown punch type: {key}")

            value = require_text(value, key).strip()
            if not value:
                day_log = day_log.with_slot(punch_type, PunchSlot(justification=day_log.slot(punch_type).justification))
                continue
            if not is_valid_time_string(value):
                raise ValidationError(f"Invalid time for {key}: {value!r} (expected HH:MM or HH:MM:SS)")
            day_log = day_log.with_time(punch_type, value)

        self._day_logs.put(day_log)
        logger.info("Day log corrected employee=%s date=%s fields=%s", employee_id, work_date, sorted(times))
        return day_log

    def provision_day_logs(self, work_date: date) -> int:
        ids = [e.employee_id for e in self._employees.list_all() if e.is_active]
        created = self._day_logs.provision(ids, work_date)
        logger.info("Provisioned %s day logs for %s (%s active employees)", created, work_date, len(ids))
        return created
