from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class Account:
    uid: str
    email: str
    display_name: str
    disabled: bool = False


class IdentityProvider(Protocol):
    """Login accounts. Only admin and auth flows call this, never the engine."""

    def create_account(self, *, email: str, password: str, display_name: str) -> Account:
        raise NotImplementedError

    def disable_account(self, uid: str, *, disabled: bool) -> None:
        raise NotImplementedError

    def rename_account(self, uid: str, *, display_name: str) -> None:
        raise NotImplementedError

    def change_email(self, uid: str, *, email: str) -> None:
        """Move the login email; refused when another account already uses it."""

        raise NotImplementedError

    def verify_password(self, email: str, password: str) -> Optional[Account]:
        """Return the account when the credentials match and it is enabled."""

        raise NotImplementedError
