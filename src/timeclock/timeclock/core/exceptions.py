from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .enums import PunchType, RejectionReason

if TYPE_CHECKING:
    from ..schedules.model import ScheduleWindow


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PunchRejected(ValidationError):
    """A punch attempt that is refused for an expected, user-facing reason."""

    reason: RejectionReason


class WeekendNotAllowed(PunchRejected):
    reason = RejectionReason.WEEKEND_NOT_ALLOWED

    def __init__(self) -> None:
        super().__init__("Punches are not allowed on weekends")


class AllPunchesRecorded(PunchRejected):
    reason = RejectionReason.ALL_PUNCHES_RECORDED

    def __init__(self) -> None:
        super().__init__("All punches for this period are already recorded")


class OutsideWindow(PunchRejected):
    """Carries the nearest window so the message can tell the user when to come back."""

    reason = RejectionReason.OUTSIDE_WINDOW

    def __init__(self, window: "ScheduleWindow") -> None:
        self.window = window
        super().__init__(
            f"Outside the allowed time for {window.punch_type.value} "
            f"({window.start.strftime('%H:%M')}-{window.end.strftime('%H:%M')})"
        )


class SlotAlreadyFilled(DomainError):
    def __init__(self, punch_type: PunchType) -> None:
        self.punch_type = punch_type
        super().__init__(f"{punch_type.value} is already filled for this day")


class MalformedStoredTime(ValueError):
    """A stored time-of-day string that is not HH:MM[:SS]."""

    def __init__(self, value: Optional[str]) -> None:
        self.value = value
        super().__init__(f"Invalid stored time: {value!r}")


class StoreError(DomainError):
    """Persistence failure; the operation may be retried by the caller."""

    def __init__(self, message: str = "Operation failed, please retry") -> None:
        super().__init__(message)


class IdentityProviderError(DomainError):
    """Raised when the identity provider refuses or fails an account operation."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or record does not exist."""
