from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .attendance.engine import AttendanceEngine
from .attendance.mysql_day_log_repository import MySQLDayLogRepository
from .attendance.repository import DayLogRepository
from .attendance.service import AttendanceService
from .common.clock import Clock, DatabaseClock, LocalClock
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .identity.mysql_identity_provider import MySQLIdentityProvider
from .identity.provider import IdentityProvider
from .reports.service import MonthlyReportService
from .schedules.model import WorkdaySchedule
from .uploads.store import LocalUploadStore, UploadStore


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    day_logs_repo: DayLogRepository
    identity: IdentityProvider
    uploads: UploadStore
    clock: Clock
    engine: AttendanceEngine

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    report_service: MonthlyReportService


def wire(
    *,
    employees_repo: EmployeeRepository,
    day_logs_repo: DayLogRepository,
    identity: IdentityProvider,
    uploads: UploadStore,
    clock: Clock,
    schedule_windows: Mapping[str, Sequence[str]],
    block_weekends: bool = True,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services over whatever repositories the caller provides."""
    engine = AttendanceEngine(WorkdaySchedule.from_mapping(schedule_windows), block_weekends=block_weekends)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        day_logs_repo=day_logs_repo,
        identity=identity,
        uploads=uploads,
        clock=clock,
        engine=engine,
        auth_service=AuthService(identity, employees_repo),
        employee_service=EmployeeService(employees_repo, identity),
        attendance_service=AttendanceService(
            day_logs_repo,
            employees_repo,
            engine,
            clock=clock,
            uploads=uploads,
        ),
        report_service=MonthlyReportService(day_logs_repo, employees_repo, engine),
    )


def build_container(
    *,
    db_config: dict,
    schedule_windows: Mapping[str, Sequence[str]],
    block_weekends: bool = True,
    clock_source: str = "local",
    upload_dir: str = "instance/uploads",
    upload_base_url: str = "/uploads",
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    clock: Clock = DatabaseClock(conn) if clock_source == "database" else LocalClock()

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        day_logs_repo=MySQLDayLogRepository(conn),
        identity=MySQLIdentityProvider(conn),
        uploads=LocalUploadStore(upload_dir, base_url=upload_base_url),
        clock=clock,
        schedule_windows=schedule_windows,
        block_weekends=block_weekends,
        conn=conn,
    )
