from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Address, Employee
from .repository import EmployeeRepository

_COLUMNS = (
    "employee_id, name, email, cpf, birth_date, role, sector, is_admin, status, "
    "street, number, complement, neighborhood, city, state, zip_code"
)


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        name=r["name"],
        email=r["email"],
        is_admin=bool(r.get("is_admin")),
        status=EmployeeStatus(r.get("status") or EmployeeStatus.ACTIVE.value),
        role=r.get("role"),
        sector=r.get("sector"),
        birth_date=r.get("birth_date"),
        cpf=r.get("cpf"),
        address=Address(
            street=r.get("street") or "",
            number=r.get("number") or "",
            complement=r.get("complement") or "",
            neighborhood=r.get("neighborhood") or "",
            city=r.get("city") or "",
            state=r.get("state") or "",
            zip_code=r.get("zip_code") or "",
        ),
    )


def _field_values(e: Employee) -> tuple:
    a = e.address
    return (
        e.name, e.email, e.cpf, e.birth_date, e.role, e.sector, int(e.is_admin), e.status.value,
        a.street, a.number, a.complement, a.neighborhood, a.city, a.state, a.zip_code,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name ASC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def create(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO employees({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (employee.employee_id, *_field_values(employee)),
            )

    def set_status(self, employee_id: str, status: EmployeeStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET status=%s WHERE employee_id=%s", (status.value, employee_id))
            return cur.rowcount > 0

    def update_fields(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, email=%s, cpf=%s, birth_date=%s, role=%s, sector=%s, is_admin=%s, status=%s,
                    street=%s, number=%s, complement=%s, neighborhood=%s, city=%s, state=%s, zip_code=%s
                WHERE employee_id=%s
                """,
                (*_field_values(employee), employee.employee_id),
            )
            # rowcount is 0 when nothing changed, so confirm existence separately.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM employees WHERE employee_id=%s", (employee.employee_id,))
            return fetchone(cur) is not None
