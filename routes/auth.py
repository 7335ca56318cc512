"""Session login for API clients."""
from __future__ import annotations

import logging

from flask import Blueprint, g, jsonify, request, session
from flask_wtf.csrf import generate_csrf

from forms import LoginForm
from models.user import User
from routes import json_error, validate_request_csrf

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def authenticate_user(username, password):
    user = User.query.filter_by(username=username).first()
    if user and user.is_active and user.check_password(password):
        session["user_id"] = user.id
        return user
    return None


@auth_bp.route("/csrf", methods=["GET"])
def csrf_token():
    """Return a CSRF token for subsequent JSON writes."""

    return jsonify({"success": True, "csrf_token": generate_csrf()})


@auth_bp.route("/login", methods=["POST"])
def login():
    payload = request.get_json(silent=True) or {}
    csrf_valid, csrf_message = validate_request_csrf(payload.get("csrf_token"))
    if not csrf_valid:
        return json_error(csrf_message or "Invalid CSRF token.")

    form = LoginForm(formdata=None, meta={"csrf": False})
    form.process(
        data={
            "username": (payload.get("username") or "").strip(),
            "password": payload.get("password") or "",
        }
    )
    if not form.validate():
        return json_error("Username and password are required.", errors=form.errors)

    user = authenticate_user(form.username.data, form.password.data)
    if user is None:
        logger.info("Failed login for %s", form.username.data)
        return json_error("Invalid username or password.", status=401)
    return jsonify({"success": True, "user": user.to_dict()})


@auth_bp.route("/logout", methods=["POST"])
def logout():
    session.pop("user_id", None)
    g.user = None
    return jsonify({"success": True})


@auth_bp.route("/me", methods=["GET"])
def me():
    if g.user is None:
        return json_error("Authentication required.", status=401)
    return jsonify({"success": True, "user": g.user.to_dict()})
