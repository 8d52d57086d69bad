"""/api/courses and /api/access-codes routes for picking and unlocking courses."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from course_portal.services import access_code_service, course_service
from course_portal.utils.auth import client_store, portal_settings, require_session

bp = Blueprint("courses", __name__, url_prefix="/api")


@bp.get("/courses")
def list_courses():
    store = client_store()
    user, error_response = require_session(store)
    if error_response is not None:
        return error_response

    return jsonify(
        courses=course_service.list_courses(user, portal_settings()),
        selectedCourse=course_service.get_selected_course(store),
    ), 200


@bp.post("/courses/select")
def select_course():
    """Remember the chosen course; free courses are unlocked immediately."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    store = client_store()
    _, error_response = require_session(store)
    if error_response is not None:
        return error_response

    redirect = course_service.select_course(store, portal_settings(), str(payload.get("course") or ""))
    return jsonify(**redirect.to_dict()), 200


@bp.post("/access-codes/verify")
def verify_access_code():
    """Redeem an access code for the selected course.

    Accepts either ``code`` as one string or ``digits`` as a list of
    single-character fields. The course defaults to the stored selection.
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    store = client_store()
    _, error_response = require_session(store)
    if error_response is not None:
        return error_response

    entered = payload.get("digits")
    if not isinstance(entered, list):
        entered = str(payload.get("code") or "")
    course = payload.get("course") or course_service.get_selected_course(store)

    code, user, redirect = access_code_service.verify_code(store, entered, course)
    current_app.logger.info("Course %s unlocked for client %s", code.course.value, store.namespace)
    return jsonify(user=user.to_public(), course=code.course.value, **redirect.to_dict()), 200
