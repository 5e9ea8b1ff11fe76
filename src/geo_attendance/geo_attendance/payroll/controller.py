from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import to_json
from ..common.web import admin_required, current_role, current_user_id, json_body, login_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def _slip_request() -> tuple[int, str]:
    data = json_body()
    try:
        user_id = int(data["user_id"])
    except (KeyError, TypeError, ValueError):
        raise ValidationError("user_id is required")
    month = str(data.get("month") or "")
    if not month:
        raise ValidationError("month is required (YYYY-MM)")
    return user_id, month


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/preview", methods=["POST"], endpoint="payroll_preview")
    @admin_required
    def payroll_preview():
        user_id, month = _slip_request()
        slip = container.payroll_service.preview_slip(current_role=current_role(), user_id=user_id, month=month)
        return jsonify({"success": True, "slip": to_json(slip)})

    @app.route("/api/payroll/slips", methods=["POST"], endpoint="payroll_generate")
    @admin_required
    def payroll_generate():
        user_id, month = _slip_request()
        slip = container.payroll_service.generate_slip(current_role=current_role(), user_id=user_id, month=month)
        return jsonify({"success": True, "slip": to_json(slip)}), 201

    @app.route("/api/payroll/slips", methods=["GET"], endpoint="payroll_slips")
    @login_required
    def payroll_slips():
        # Admin sees every slip; everyone else only their own.
        if current_role() == Role.ADMIN:
            user_id = request.args.get("user_id", type=int)
        else:
            user_id = current_user_id()
        slips = container.payroll_service.list_slips(user_id)
        month = request.args.get("month")
        if month:
            slips = [s for s in slips if s.month == month]
        return jsonify([to_json(s) for s in slips])
