from __future__ import annotations

from flask import Flask, jsonify, request, send_from_directory

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_employee_id, current_is_admin, json_body, json_error, login_required
from ..core.enums import ClockKind, PunchType
from ..core.exceptions import ValidationError
from ..container import Container
from ..reports.service import render_slot


def _parse_kind(value):
    if value in (None, ""):
        return None
    try:
        return ClockKind(value)
    except ValueError:
        raise ValidationError(f"Unknown kind: {value!r} (expected clock_in or clock_out)")


def _parse_punch_type(value) -> PunchType:
    try:
        return PunchType(value)
    except ValueError:
        raise ValidationError(f"Unknown punch type: {value!r}")


def _parse_date(value: str):
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/time", methods=["GET"], endpoint="server_time")
    @login_required
    def server_time():
        now = service.current_time()
        return jsonify({"now": now.isoformat(timespec="seconds")})

    @app.route("/api/day-log/today", methods=["GET"], endpoint="day_log_today")
    @login_required
    def day_log_today():
        now = service.current_time()
        day_log = service.get_day_log(current_employee_id(), now.date())
        return jsonify(
            {
                "now": now.isoformat(timespec="seconds"),
                "entries": {pt.value: render_slot(day_log, pt) for pt in PunchType},
                "windows": service.engine.schedule.as_dict(),
            }
        )

    @app.route("/api/punch", methods=["POST"], endpoint="punch")
    @login_required
    def punch():
        data = json_body()
        outcome = service.punch(current_employee_id(), _parse_kind(data.get("kind")))
        return jsonify(
            {
                "success": True,
                "message": f"{outcome.punch_type.value} recorded at {outcome.recorded_time}",
                "punch_type": outcome.punch_type.value,
                "time": outcome.recorded_time,
                "day_log": outcome.day_log.to_dict(),
            }
        ), 201

    @app.route("/api/justifications", methods=["POST"], endpoint="justification_upload")
    @login_required
    def justification_upload():
        if "file" not in request.files:
            return json_error("Missing file", 400)

        upload = request.files["file"]
        work_date = _parse_date(request.form.get("date", ""))
        punch_type = _parse_punch_type(request.form.get("punch_type"))

        day_log = service.submit_justification(
            current_employee_id(),
            work_date,
            punch_type,
            data=upload.read(),
            filename=upload.filename or "",
        )
        return jsonify({"success": True, "day_log": day_log.to_dict()}), 201

    @app.route("/api/employees/<employee_id>/day-logs/<work_date>", methods=["PUT"], endpoint="day_log_correct")
    @admin_required
    def day_log_correct(employee_id: str, work_date: str):
        data = json_body()
        day_log = service.correct_day_log(
            current_is_admin=current_is_admin(),
            employee_id=employee_id,
            work_date=_parse_date(work_date),
            times=data,
        )
        return jsonify({"success": True, "day_log": day_log.to_dict()})

    @app.route("/uploads/<path:name>", methods=["GET"], endpoint="uploaded_file")
    @login_required
    def uploaded_file(name: str):
        return send_from_directory(app.config["UPLOAD_DIR"], name)
