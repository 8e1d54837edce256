from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.http import admin_required, current_employee_id, current_is_admin, json_body, json_error, login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email"), data.get("password"))

        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["employee_id"] = s_user.employee_id
        session["name"] = s_user.name
        session["is_admin"] = s_user.is_admin
        return jsonify({"success": True, "user": {"uid": s_user.employee_id, "name": s_user.name, "isAdmin": s_user.is_admin}})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    # Called by the login screen before a session exists.
    @app.route("/", methods=["POST"], endpoint="admin_lookup")
    def admin_lookup():
        email = json_body().get("email")
        if not email:
            return json_error("Email is required", 400)
        return jsonify({"isAdmin": container.employee_service.is_admin_email(email)})

    @app.route("/create-user", methods=["POST"], endpoint="create_user")
    @admin_required
    def create_user():
        data = json_body()
        employee = container.employee_service.create_employee(
            current_is_admin=current_is_admin(),
            name=data.get("displayName") or data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            confirm_password=data.get("confirmPassword"),
            birth_date=data.get("birthDate"),
            cpf=data.get("cpf"),
            address=data.get("address"),
            role=data.get("role"),
            sector=data.get("sector"),
            is_admin=data.get("isAdmin") is True,
        )
        return jsonify({"message": "User created", "user": employee.to_dict()}), 201

    @app.route("/toggle-user-status", methods=["POST"], endpoint="toggle_user_status")
    @admin_required
    def toggle_user_status():
        data = json_body()
        uid = data.get("uid")
        disabled = data.get("disabled")
        if not uid or not isinstance(disabled, bool):
            return json_error("uid and disabled (true/false) are required", 400)

        employee = container.employee_service.set_status(
            current_is_admin=current_is_admin(), employee_id=str(uid), disabled=disabled
        )
        return jsonify(
            {
                "message": f"User {'deactivated' if disabled else 'activated'}",
                "user": employee.to_dict(),
            }
        )

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @admin_required
    def employees_list():
        admins, collaborators = container.employee_service.list_split(
            query=request.args.get("q"),
            sort_by=request.args.get("sort", "name"),
        )
        return jsonify(
            {
                "administrators": [e.to_dict() for e in admins],
                "collaborators": [e.to_dict() for e in collaborators],
            }
        )

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="employee_detail")
    @login_required
    def employee_detail(employee_id: str):
        if employee_id != current_employee_id() and not current_is_admin():
            return json_error("You do not have permission", 403)
        return jsonify(container.employee_service.get(employee_id).to_dict())

    @app.route("/api/employees/<employee_id>", methods=["PATCH"], endpoint="employee_update")
    @admin_required
    def employee_update(employee_id: str):
        employee = container.employee_service.update_employee(
            current_is_admin=current_is_admin(), employee_id=employee_id, changes=json_body()
        )
        return jsonify({"success": True, "user": employee.to_dict()})
