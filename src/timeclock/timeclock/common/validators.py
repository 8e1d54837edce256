from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping, Optional

from ..core.constants import MAX_EMPLOYEE_AGE, MIN_EMPLOYEE_AGE
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_text(value: Any, field_name: str) -> str:
    """Accept only strings (or None, read as empty) from JSON input."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def optional_text(value: Any, field_name: str) -> Optional[str]:
    return require_text(value, field_name).strip() or None


def require_mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValidationError(f"{field_name} must be an object")
    return value


def require_non_empty(value: Any, field_name: str) -> str:
    value = require_text(value, field_name)
    if not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    value = require_text(value, field_name)
    if len(value) < min_len:
        raise ValidationError(f"{field_name} must have at least {min_len} characters")
    return value


def require_email(value: Any) -> str:
    value = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError("Email is not valid")
    return value


def require_birth_date(value: date, *, today: Optional[date] = None) -> date:
    today = today or date.today()
    age = today.year - value.year - ((today.month, today.day) < (value.month, value.day))
    if value >= today or not (MIN_EMPLOYEE_AGE <= age <= MAX_EMPLOYEE_AGE):
        raise ValidationError(
            f"Birth date must be valid and the employee between {MIN_EMPLOYEE_AGE} and {MAX_EMPLOYEE_AGE} years old"
        )
    return value


def normalize_cpf(value: Any) -> Optional[str]:
    """Format an 11-digit CPF as 000.000.000-00; empty input stays empty."""
    value = optional_text(value, "CPF")
    if not value:
        return None
    digits = re.sub(r"\D", "", value)
    if len(digits) != 11:
        raise ValidationError("CPF must have 11 digits")
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
