from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Address:
    street: str = ""
    number: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Address":
        data = data or {}
        return cls(
            street=str(data.get("street") or "").strip(),
            number=str(data.get("number") or "").strip(),
            complement=str(data.get("complement") or "").strip(),
            neighborhood=str(data.get("neighborhood") or "").strip(),
            city=str(data.get("city") or "").strip(),
            state=str(data.get("state") or "").strip(),
            zip_code=str(data.get("zipCode") or data.get("zip_code") or "").strip(),
        )

    def one_line(self) -> str:
        if not self.street:
            return "Not informed"
        complement = f" - {self.complement}" if self.complement else ""
        return (
            f"{self.street}, {self.number}{complement}, {self.neighborhood}, "
            f"{self.city} - {self.state}, ZIP: {self.zip_code}"
        )


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee (roster record).

    Note: Pure data object; the login account lives with the identity provider
    under the same id.
    """

    employee_id: str
    name: str
    email: str
    is_admin: bool = False
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    role: Optional[str] = None
    sector: Optional[str] = None
    birth_date: Optional[date] = None
    cpf: Optional[str] = None
    address: Address = field(default_factory=Address)

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "uid": self.employee_id,
            "name": self.name,
            "email": self.email,
            "isAdmin": self.is_admin,
            "status": self.status.value,
            "role": self.role,
            "sector": self.sector,
            "birthDate": self.birth_date.strftime("%Y-%m-%d") if self.birth_date else None,
            "cpf": self.cpf,
            "address": asdict(self.address),
        }
