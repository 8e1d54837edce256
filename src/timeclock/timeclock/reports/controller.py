from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_year_month
from ..common.http import admin_required, current_employee_id, current_is_admin, json_body, json_error, login_required
from ..container import Container
from .export import reports_to_csv


def _requested_month(container: Container, data: Optional[dict] = None) -> tuple[int, int]:
    """`month=YYYY-MM` from the query or body, else the current month by the app clock."""
    value = request.args.get("month") or (data or {}).get("month")
    if not value:
        now = container.clock.now()
        return now.year, now.month
    return parse_year_month(value)


def register(app: Flask, container: Container) -> None:
    def _csv_response(payload: bytes, filename: str):
        return app.response_class(
            payload,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/employees/<employee_id>/report", methods=["GET"], endpoint="employee_report")
    @login_required
    def employee_report(employee_id: str):
        if employee_id != current_employee_id() and not current_is_admin():
            return json_error("You do not have permission", 403)

        year, month = _requested_month(container)
        report = container.report_service.build_monthly_report(employee_id, year, month)
        return jsonify(report.to_dict())

    @app.route("/api/employees/<employee_id>/report.csv", methods=["GET"], endpoint="employee_report_csv")
    @login_required
    def employee_report_csv(employee_id: str):
        if employee_id != current_employee_id() and not current_is_admin():
            return json_error("You do not have permission", 403)

        year, month = _requested_month(container)
        report = container.report_service.build_monthly_report(employee_id, year, month)
        return _csv_response(reports_to_csv([report]), f"report_{employee_id}_{report.month_label}.csv")

    @app.route("/api/reports/export", methods=["POST"], endpoint="reports_export")
    @admin_required
    def reports_export():
        data = json_body()
        raw_ids = data.get("employee_ids")
        if not isinstance(raw_ids, list) or not raw_ids:
            return json_error("Select at least one employee", 400)
        employee_ids = [str(i) for i in raw_ids]

        year, month = _requested_month(container, data)
        reports = container.report_service.build_many(employee_ids, year, month)
        return _csv_response(reports_to_csv(reports), f"reports_{year:04d}-{month:02d}.csv")
