"""/api/admin routes for access codes, admin accounts and statistics."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, jsonify, request

from course_portal.services import access_code_service, admin_service
from course_portal.utils.auth import client_store, portal_settings, require_admin

bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _code_payload(code) -> Dict[str, Any]:
    data = code.to_dict()
    data["statusLabel"] = access_code_service.format_status(code.status)
    return data


@bp.get("/stats")
def get_stats():
    """Get dashboard statistics."""
    store = client_store()
    _, error_response = require_admin(store)
    if error_response is not None:
        return error_response

    return jsonify(admin_service.dashboard_stats(store)), 200


@bp.get("/codes")
def list_codes():
    """List all access codes, newest first."""
    store = client_store()
    _, error_response = require_admin(store)
    if error_response is not None:
        return error_response

    codes = access_code_service.list_codes(store)
    return jsonify(codes=[_code_payload(code) for code in codes], total_count=len(codes)), 200


@bp.post("/codes")
def generate_code():
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    store = client_store()
    _, error_response = require_admin(store)
    if error_response is not None:
        return error_response

    code = access_code_service.generate_code(store, payload.get("course"))
    return jsonify(code=_code_payload(code), message=f"Access code generated: {code.code}"), 201


@bp.delete("/codes/<code_id>")
def delete_code(code_id: str):
    store = client_store()
    _, error_response = require_admin(store)
    if error_response is not None:
        return error_response

    access_code_service.delete_code(store, code_id)
    return jsonify(message="Code deleted successfully"), 200


@bp.get("/admins")
def list_admins():
    store = client_store()
    _, error_response = require_admin(store)
    if error_response is not None:
        return error_response

    return jsonify(admins=admin_service.list_admins(store, portal_settings())), 200


@bp.post("/admins")
def add_admin():
    """Promote an existing user to admin."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    store = client_store()
    _, error_response = require_admin(store)
    if error_response is not None:
        return error_response

    user = admin_service.promote_to_admin(store, str(payload.get("email") or ""))
    return jsonify(user=user.to_public(), message=f"User {user.email} has been made an admin!"), 200


@bp.delete("/admins/<path:email>")
def remove_admin(email: str):
    """Revoke admin rights; the acting admin and the superuser are refused."""
    store = client_store()
    acting, error_response = require_admin(store)
    if error_response is not None:
        return error_response

    user = admin_service.demote_admin(store, portal_settings(), email, acting.email)
    return jsonify(user=user.to_public(), message=f"Admin {user.email} has been removed"), 200
