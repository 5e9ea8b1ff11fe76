from __future__ import annotations

from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AlreadyCheckedOutError,
    AuthorizationError,
    DomainError,
    DuplicateRecordError,
    LocationUnavailableError,
    NotCheckedInError,
    RecordNotFoundError,
    UserNotFoundError,
    ValidationError,
)

ERROR_STATUS: dict[type, int] = {
    ValidationError: 400,
    AuthorizationError: 403,
    RecordNotFoundError: 404,
    UserNotFoundError: 404,
    NotCheckedInError: 409,
    AlreadyCheckedOutError: 409,
    DuplicateRecordError: 409,
    LocationUnavailableError: 422,
}


def status_for(error: DomainError) -> int:
    for kind in type(error).__mro__:
        if kind in ERROR_STATUS:
            return ERROR_STATUS[kind]
    return 400


def error_response(error: DomainError):
    return jsonify({"success": False, "error": type(error).__name__, "message": str(error)}), status_for(error)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
