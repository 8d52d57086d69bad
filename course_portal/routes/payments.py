"""/api/payments routes producing WhatsApp payment links."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, jsonify, request

from course_portal.services import course_service, payment_service
from course_portal.utils.auth import client_store, portal_settings

bp = Blueprint("payments", __name__, url_prefix="/api/payments")


@bp.post("/link")
def payment_link():
    """Return the WhatsApp link for the selected course and payment method."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    method = str(payload.get("method") or "")
    course = payload.get("course") or course_service.get_selected_course(client_store())

    url = payment_service.build_payment_link(portal_settings(), method, course)
    return jsonify(url=url, method=method, course=course), 200
