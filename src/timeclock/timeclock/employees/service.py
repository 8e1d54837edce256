from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import (
    normalize_cpf,
    optional_text,
    require_birth_date,
    require_email,
    require_mapping,
    require_min_length,
    require_non_empty,
    require_text,
)
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import EmployeeStatus
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..identity.provider import IdentityProvider
from .model import Address, Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

SORT_FIELDS = ("name", "email", "role", "sector")


def _matches(employee: Employee, needle: str) -> bool:
    return any(needle in (getattr(employee, f) or "").lower() for f in SORT_FIELDS)


def parse_birth_date(value: Any) -> date:
    """Accept a date, 'DD/MM/YYYY' (form input) or 'YYYY-MM-DD'."""
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    for fmt in ("%d/%m/%Y", "%Y-%m-%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValidationError("Birth date is not valid")


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    employee_id: str
    name: str
    is_admin: bool


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, identity: IdentityProvider, employees: EmployeeRepository):
        self._identity = identity
        self._employees = employees

    def authenticate(self, email: Any, password: Any) -> SessionUser:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid email or password")
        account = self._identity.verify_password(email.strip().lower(), password)
        if not account:
            raise AuthenticationError("Invalid email or password")

        employee = self._employees.get_by_id(account.uid)
        if not employee or not employee.is_active:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(employee_id=employee.employee_id, name=employee.name, is_admin=employee.is_admin)


class EmployeeService:
    """Use case: manage employees (admin) and proxy account operations."""

    def __init__(self, employees: EmployeeRepository, identity: IdentityProvider):
        self._employees = employees
        self._identity = identity

    def get(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(
        self,
        *,
        current_is_admin: bool,
        name: str,
        email: str,
        password: str,
        confirm_password: Optional[str] = None,
        birth_date: Any,
        cpf: Optional[str] = None,
        address: Optional[Mapping[str, Any]] = None,
        role: Optional[str] = None,
        sector: Optional[str] = None,
        is_admin: bool = False,
        today: Optional[date] = None,
    ) -> Employee:
        if not current_is_admin:
            raise AuthorizationError("You do not have permission")

        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if confirm_password is not None and password != confirm_password:
            raise ValidationError("Passwords do not match")
        born = require_birth_date(parse_birth_date(birth_date), today=today)
        cpf = normalize_cpf(cpf)
        role = optional_text(role, "Role")
        sector = optional_text(sector, "Sector")
        address = Address.from_dict(dict(require_mapping(address, "Address")))

        if self._employees.get_by_email(email):
            raise ValidationError("Email is already registered")

        account = self._identity.create_account(email=email, password=password, display_name=name)
        employee = Employee(
            employee_id=account.uid,
            name=name,
            email=email,
            is_admin=bool(is_admin),
            status=EmployeeStatus.ACTIVE,
            role=role,
            sector=sector,
            birth_date=born,
            cpf=cpf,
            address=address,
        )

        try:
            self._employees.create(employee)
        except DomainError:
            # Roster write failed after the account exists: lock the orphan account.
            logger.error("Roster insert failed for uid=%s; disabling its account", account.uid)
            self._identity.disable_account(account.uid, disabled=True)
            raise

        logger.info("Employee created uid=%s admin=%s", employee.employee_id, employee.is_admin)
        return employee

    def set_status(self, *, current_is_admin: bool, employee_id: str, disabled: bool) -> Employee:
        if not current_is_admin:
            raise AuthorizationError("You do not have permission")

        employee = self.get(employee_id)
        status = EmployeeStatus.INACTIVE if disabled else EmployeeStatus.ACTIVE
        self._employees.set_status(employee_id, status)
        self._identity.disable_account(employee_id, disabled=disabled)
        return replace(employee, status=status)

    def update_employee(self, *, current_is_admin: bool, employee_id: str, changes: Mapping[str, Any]) -> Employee:
        if not current_is_admin:
            raise AuthorizationError("You do not have permission")

        changes = require_mapping(changes, "Changes")
        current = self.get(employee_id)
        updated = current

        if "name" in changes:
            updated = replace(updated, name=require_non_empty(changes["name"], "Name"))
        if "email" in changes:
            email = require_email(changes["email"])
            other = self._employees.get_by_email(email)
            if other and other.employee_id != employee_id:
                raise ValidationError("Email is already registered")
            updated = replace(updated, email=email)
        if "birthDate" in changes:
            updated = replace(updated, birth_date=require_birth_date(parse_birth_date(changes["birthDate"])))
        if "cpf" in changes:
            updated = replace(updated, cpf=normalize_cpf(changes["cpf"]))
        if "role" in changes:
            updated = replace(updated, role=optional_text(changes["role"], "Role"))
        if "sector" in changes:
            updated = replace(updated, sector=optional_text(changes["sector"], "Sector"))
        if "isAdmin" in changes:
            if not isinstance(changes["isAdmin"], bool):
                raise ValidationError("isAdmin must be true or false")
            updated = replace(updated, is_admin=changes["isAdmin"])
        if "address" in changes:
            updated = replace(updated, address=Address.from_dict(require_mapping(changes["address"], "Address")))

        # Account first: a refused email change leaves the roster as it was.
        if updated.email != current.email:
            self._identity.change_email(employee_id, email=updated.email)
        if not self._employees.update_fields(updated):
            raise NotFoundError("Employee not found")
        if updated.name != current.name:
            self._identity.rename_account(employee_id, display_name=updated.name)
        return updated

    def list_split(
        self, *, query: Optional[str] = None, sort_by: str = "name"
    ) -> tuple[Sequence[Employee], Sequence[Employee]]:
        """(administrators, collaborators), optionally filtered and sorted.

        `query` matches name, email, role or sector, case-insensitively.
        """
        if sort_by not in SORT_FIELDS:
            raise ValidationError(f"Cannot sort by {sort_by!r} (expected one of {', '.join(SORT_FIELDS)})")

        needle = (query or "").strip().lower()
        everyone = [e for e in self._employees.list_all() if not needle or _matches(e, needle)]
        everyone.sort(key=lambda e: (getattr(e, sort_by) or "").lower())
        return [e for e in everyone if e.is_admin], [e for e in everyone if not e.is_admin]

    def is_admin_email(self, email: Any) -> bool:
        employee = self._employees.get_by_email(require_text(email, "Email").strip().lower())
        if not employee:
            raise NotFoundError("User not found")
        return employee.is_admin
