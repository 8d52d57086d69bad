"""/api/auth routes handling login, signup, logout and the current session."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, jsonify, request

from course_portal.services import auth_service
from course_portal.utils.auth import client_store, portal_settings, require_session

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@bp.post("/login")
def login():
    """Authenticate with email and password and start a session."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    email = str(payload.get("email") or "")
    password = str(payload.get("password") or "")

    user, redirect = auth_service.login(client_store(), portal_settings(), email, password)
    return jsonify(user=user.to_public(), **redirect.to_dict()), 200


@bp.post("/signup")
def signup():
    """Create an account and log it in."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}

    user, redirect = auth_service.signup(
        client_store(),
        name=str(payload.get("name") or ""),
        email=str(payload.get("email") or ""),
        password=str(payload.get("password") or ""),
        confirm_password=str(payload.get("confirmPassword") or ""),
    )
    return jsonify(user=user.to_public(), **redirect.to_dict()), 201


@bp.post("/logout")
def logout():
    redirect = auth_service.logout(client_store())
    return jsonify(**redirect.to_dict()), 200


@bp.get("/session")
def get_session_info():
    """Return the logged-in user of the calling client."""
    user, error_response = require_session(client_store())
    if error_response is not None:
        return error_response

    return jsonify(user=user.to_public()), 200
