from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    IdentityProviderError,
    NotFoundError,
    OutsideWindow,
    PunchRejected,
    SlotAlreadyFilled,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_error(message: str, status: int, **extra):
    return jsonify({"success": False, "message": message, **extra}), status


def json_body() -> dict:
    """Request JSON as a dict; a missing body reads as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return json_error("Please log in to continue", 401)
        if not session.get("is_admin"):
            return json_error("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper


def current_employee_id() -> str:
    return str(session["employee_id"])


def current_is_admin() -> bool:
    return bool(session.get("is_admin"))


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(PunchRejected)
    def _punch_rejected(e: PunchRejected):
        extra = {"reason": e.reason.value}
        if isinstance(e, OutsideWindow):
            extra["window"] = {
                "punch_type": e.window.punch_type.value,
                "start": e.window.start.strftime("%H:%M"),
                "end": e.window.end.strftime("%H:%M"),
            }
        return json_error(str(e), 409, **extra)

    @app.errorhandler(SlotAlreadyFilled)
    def _slot_filled(e: SlotAlreadyFilled):
        return json_error(str(e), 409, reason="SLOT_ALREADY_FILLED")

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        return json_error(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _unauthenticated(e: AuthenticationError):
        return json_error(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return json_error(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return json_error(str(e), 404)

    @app.errorhandler(StoreError)
    def _store_failed(e: StoreError):
        return json_error(str(e), 503)

    @app.errorhandler(IdentityProviderError)
    def _identity_failed(e: IdentityProviderError):
        logger.warning("Identity provider refused operation: %s", e)
        return json_error(str(e), 500)
