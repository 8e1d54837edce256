from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

import pytest
from werkzeug.security import check_password_hash, generate_password_hash

from timeclock.attendance.engine import AttendanceEngine
from timeclock.attendance.model import DayLog
from timeclock.attendance.service import AttendanceService
from timeclock.container import wire
from timeclock.core.constants import DEFAULT_SCHEDULE_WINDOWS
from timeclock.core.enums import EmployeeStatus
from timeclock.core.exceptions import IdentityProviderError, StoreError
from timeclock.employees.model import Employee
from timeclock.employees.service import EmployeeService
from timeclock.identity.provider import Account
from timeclock.main import create_app
from timeclock.reports.service import MonthlyReportService
from timeclock.schedules.model import WorkdaySchedule


class InMemoryEmployees:
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: e.name)

    def create(self, employee: Employee) -> None:
        self._by_id[employee.employee_id] = employee

    def set_status(self, employee_id: str, status: EmployeeStatus) -> bool:
        if employee_id not in self._by_id:
            return False
        self._by_id[employee_id] = replace(self._by_id[employee_id], status=status)
        return True

    def update_fields(self, employee: Employee) -> bool:
        if employee.employee_id not in self._by_id:
            return False
        self._by_id[employee.employee_id] = employee
        return True


class InMemoryDayLogs:
    def __init__(self):
        self._by_key: dict[tuple[str, date], DayLog] = {}
        self.puts = 0
        self.fail_writes = False

    def get(self, employee_id: str, work_date: date) -> Optional[DayLog]:
        return self._by_key.get((employee_id, work_date))

    def put(self, day_log: DayLog) -> None:
        if self.fail_writes:
            raise StoreError()
        self.puts += 1
        self._by_key[(day_log.employee_id, day_log.work_date)] = day_log

    def list_between(self, employee_id: str, start: date, end: date):
        found = [d for (eid, day), d in self._by_key.items() if eid == employee_id and start <= day <= end]
        return sorted(found, key=lambda d: d.work_date)

    def provision(self, employee_ids, work_date: date) -> int:
        created = 0
        for eid in employee_ids:
            if (eid, work_date) not in self._by_key:
                self._by_key[(eid, work_date)] = DayLog.empty(eid, work_date)
                created += 1
        return created


class InMemoryIdentity:
    def __init__(self):
        self.accounts: dict[str, Account] = {}
        self._hashes: dict[str, str] = {}
        self._next = 0

    def create_account(self, *, email: str, password: str, display_name: str) -> Account:
        if any(a.email == email for a in self.accounts.values()):
            raise IdentityProviderError("An account with this email already exists")
        self._next += 1
        uid = f"uid{self._next}"
        self.accounts[uid] = Account(uid=uid, email=email, display_name=display_name)
        self._hashes[uid] = generate_password_hash(password)
        return self.accounts[uid]

    def disable_account(self, uid: str, *, disabled: bool) -> None:
        if uid not in self.accounts:
            raise IdentityProviderError("Account not found")
        self.accounts[uid] = replace(self.accounts[uid], disabled=disabled)

    def rename_account(self, uid: str, *, display_name: str) -> None:
        self.accounts[uid] = replace(self.accounts[uid], display_name=display_name)

    def change_email(self, uid: str, *, email: str) -> None:
        if any(a.email == email and a.uid != uid for a in self.accounts.values()):
            raise IdentityProviderError("An account with this email already exists")
        self.accounts[uid] = replace(self.accounts[uid], email=email)

    def verify_password(self, email: str, password: str) -> Optional[Account]:
        for uid, account in self.accounts.items():
            if account.email != email or account.disabled:
                continue
            if check_password_hash(self._hashes[uid], password):
                return account
        return None


class InMemoryUploads:
    def __init__(self):
        self.files: dict[str, bytes] = {}

    def upload_file(self, data: bytes, filename: str) -> str:
        ref = f"/uploads/{len(self.files) + 1}-{filename}"
        self.files[ref] = data
        return ref


class FixedClock:
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


@pytest.fixture
def fixed_now() -> datetime:
    # Tuesday, inside the morning-in window.
    return datetime(2024, 3, 5, 7, 50, 0)


@pytest.fixture
def schedule() -> WorkdaySchedule:
    return WorkdaySchedule.from_mapping(DEFAULT_SCHEDULE_WINDOWS)


@pytest.fixture
def engine(schedule) -> AttendanceEngine:
    return AttendanceEngine(schedule)


@pytest.fixture
def employee() -> Employee:
    return Employee(employee_id="e1", name="Ana Souza", email="ana@example.com", role="Analyst", sector="Finance")


@pytest.fixture
def employees_repo(employee) -> InMemoryEmployees:
    inactive = Employee(employee_id="e2", name="Bruno Lima", email="bruno@example.com", status=EmployeeStatus.INACTIVE)
    return InMemoryEmployees([employee, inactive])


@pytest.fixture
def day_logs() -> InMemoryDayLogs:
    return InMemoryDayLogs()


@pytest.fixture
def uploads() -> InMemoryUploads:
    return InMemoryUploads()


@pytest.fixture
def identity() -> InMemoryIdentity:
    return InMemoryIdentity()


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def attendance_service(day_logs, employees_repo, engine, clock, uploads) -> AttendanceService:
    return AttendanceService(day_logs, employees_repo, engine, clock=clock, uploads=uploads)


@pytest.fixture
def report_service(day_logs, employees_repo, engine) -> MonthlyReportService:
    return MonthlyReportService(day_logs, employees_repo, engine)


@pytest.fixture
def employee_service(employees_repo, identity) -> EmployeeService:
    return EmployeeService(employees_repo, identity)


@pytest.fixture
def container(employees_repo, day_logs, identity, uploads, clock):
    return wire(
        employees_repo=employees_repo,
        day_logs_repo=day_logs,
        identity=identity,
        uploads=uploads,
        clock=clock,
        schedule_windows=DEFAULT_SCHEDULE_WINDOWS,
    )


@pytest.fixture
def app(container, tmp_path):
    flask_app = create_app(container, settings_module="config.testing")
    flask_app.config["UPLOAD_DIR"] = str(tmp_path)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
