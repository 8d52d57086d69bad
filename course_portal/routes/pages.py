"""/api/pages routes telling the front-end whether a page may be displayed."""

from __future__ import annotations

from flask import Blueprint, jsonify

from course_portal.services import navigation_service
from course_portal.utils.auth import client_store, portal_settings

bp = Blueprint("pages", __name__, url_prefix="/api/pages")


@bp.get("/<path:page>/guard")
def guard(page: str):
    redirect = navigation_service.guard_page(client_store(), page, portal_settings())
    if redirect is None:
        return jsonify(allowed=True, page=navigation_service.normalize_page(page)), 200
    return jsonify(allowed=False, **redirect.to_dict()), 200
