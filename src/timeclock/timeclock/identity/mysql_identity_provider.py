from __future__ import annotations

import logging
import uuid
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import IdentityProviderError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .provider import Account, IdentityProvider

logger = logging.getLogger(__name__)


class MySQLIdentityProvider(IdentityProvider):
    """Accounts table with werkzeug password hashes; uid is an opaque hex id."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_account(self, *, email: str, password: str, display_name: str) -> Account:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT uid FROM accounts WHERE email=%s", (email,))
            if fetchone(cur):
                raise IdentityProviderError("An account with this email already exists")

            uid = uuid.uuid4().hex
            cur.execute(
                """
                INSERT INTO accounts(uid, email, display_name, password_hash, disabled)
                VALUES(%s,%s,%s,%s,0)
                """,
                (uid, email, display_name, generate_password_hash(password)),
            )
        logger.info("Account created uid=%s email=%s", uid, email)
        return Account(uid=uid, email=email, display_name=display_name)

    def disable_account(self, uid: str, *, disabled: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE accounts SET disabled=%s WHERE uid=%s", (int(disabled), uid))
            if cur.rowcount == 0:
                cur.execute("SELECT uid FROM accounts WHERE uid=%s", (uid,))
                if not fetchone(cur):
                    raise IdentityProviderError("Account not found")
        logger.info("Account uid=%s disabled=%s", uid, disabled)

    def rename_account(self, uid: str, *, display_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE accounts SET display_name=%s WHERE uid=%s", (display_name, uid))

    def change_email(self, uid: str, *, email: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT uid FROM accounts WHERE email=%s AND uid<>%s", (email, uid))
            if fetchone(cur):
                raise IdentityProviderError("An account with this email already exists")

            cur.execute("UPDATE accounts SET email=%s WHERE uid=%s", (email, uid))
            if cur.rowcount == 0:
                cur.execute("SELECT uid FROM accounts WHERE uid=%s", (uid,))
                if not fetchone(cur):
                    raise IdentityProviderError("Account not found")
        logger.info("Account uid=%s email changed", uid)

    def verify_password(self, email: str, password: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT uid, email, display_name, password_hash, disabled FROM accounts WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)

        if not row or row.get("disabled"):
            return None

        try:
            ok = check_password_hash(row["password_hash"], password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False
        if not ok:
            return None

        return Account(uid=row["uid"], email=row["email"], display_name=row["display_name"])
