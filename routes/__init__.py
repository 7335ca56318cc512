"""Shared helpers for route blueprints."""

from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, g, jsonify
from flask_wtf.csrf import validate_csrf
from wtforms.validators import ValidationError

__all__ = ["json_error", "requires_permission", "validate_request_csrf"]

logger = logging.getLogger(__name__)


def json_error(message: str, *, status: int = 400, errors: dict | None = None):
    """Return a JSON error response."""
    payload: dict[str, object] = {"success": False, "message": message}
    if errors:
        payload["errors"] = errors
    return jsonify(payload), status


def validate_request_csrf(token: str | None) -> tuple[bool, str | None]:
    """Validate CSRF tokens supplied with JSON payloads."""
    if not current_app.config.get("WTF_CSRF_ENABLED", True):
        return True, None
    if not token:
        return False, "The CSRF token is missing."
    try:
        validate_csrf(token)
    except ValidationError:
        return (
            False,
            "The CSRF token is invalid or has expired. Please refresh and try again.",
        )
    return True, None


def requires_permission(permission: str):
    """Require the logged-in User to hold ``permission`` for the route.

    Usage:
        @projects_bp.route("/", methods=["GET"])
        @requires_permission("ROLE_PROJECT_LIST")
        def list_projects():
            ...

    Answers 401 when nobody is logged in and 403 when the permission is missing.
    """

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = getattr(g, "user", None)
            if user is None:
                return json_error("Authentication required.", status=401)
            if not user.has_permission(permission):
                logger.info("User %s denied %s", user.id, permission)
                return json_error("You do not have access to this resource.", status=403)
            return f(*args, **kwargs)

        return decorated_function

    return decorator
