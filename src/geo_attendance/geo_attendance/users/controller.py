from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.datetime_utils import parse_iso_date
from ..common.serializers import to_json
from ..common.web import admin_required, current_role, current_user_id, json_body, login_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        # Email lookup only; this is not an authentication mechanism.
        data = json_body()
        user = container.user_service.find_by_email(str(data.get("email", "")))

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["role"] = user.role.value

        app.logger.info("User %s logged in", user.user_id)
        return jsonify({"success": True, "user": to_json(user)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(to_json(container.user_service.get_user(current_user_id())))

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        return jsonify([to_json(u) for u in container.user_service.list_users()])

    @app.route("/api/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = json_body()
        try:
            role = Role(data.get("role", Role.EMPLOYEE.value))
        except ValueError:
            raise ValidationError("Invalid role")

        join_date = parse_iso_date(data["join_date"]) if data.get("join_date") else None
        user = container.user_service.create_user(
            current_role=current_role(),
            name=str(data.get("name", "")),
            email=str(data.get("email", "")),
            role=role,
            department=str(data.get("department", "")),
            designation=str(data.get("designation", "")),
            base_salary=data.get("base_salary", 0),
            join_date=join_date,
        )
        return jsonify({"success": True, "user": to_json(user)}), 201
