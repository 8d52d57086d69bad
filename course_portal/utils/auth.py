"""Request helpers for store resolution and session checks."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from flask import Flask, current_app, jsonify, request

from course_portal import database
from course_portal.config import Settings
from course_portal.errors import NotAuthenticated, NotAuthorized, PortalError
from course_portal.models import User
from course_portal.services import user_service
from course_portal.storage import KeyValueStore, MemoryStore, MongoStore

CLIENT_HEADER = "X-Client-Id"

# Requests that may write to the store; only these seed defaults.
SEEDING_METHODS = ("POST", "PUT", "PATCH", "DELETE")


def portal_settings() -> Settings:
    return current_app.config["PORTAL_SETTINGS"]


def client_store() -> KeyValueStore:
    """Return the key-value store namespace of the calling client."""
    namespace = request.headers.get(CLIENT_HEADER, "").strip() or "default"
    if portal_settings().enable_mongodb:
        return MongoStore(database.get_storage_collection(), namespace)
    return MemoryStore(namespace)


def error_response(error: PortalError, **extra: Any):
    return jsonify(error=error.message, code=error.code, **extra), error.status_code


def require_session(store: KeyValueStore) -> Tuple[Optional[User], Optional[Any]]:
    """Return the session user of ``store`` or a 401 response."""
    user = user_service.get_current_user(store)
    if user is None:
        return None, error_response(NotAuthenticated(), redirect="login.html")
    return user, None


def require_admin(store: KeyValueStore) -> Tuple[Optional[User], Optional[Any]]:
    """Return the session user if they are an admin, or an error response."""
    user, error = require_session(store)
    if error is not None:
        return None, error
    if not user.is_admin:
        return None, error_response(NotAuthorized(), redirect="courses.html")
    return user, None


def register_store_seeding(app: Flask) -> None:
    """Attach a before-request handler that seeds defaults before a client's first write.

    Reads never touch the store, so unknown clients leave nothing behind.
    """

    @app.before_request  # pragma: no cover - trivial wiring
    def _seed_store() -> None:
        if request.path.startswith("/api/") and request.method in SEEDING_METHODS:
            user_service.seed_defaults(client_store(), portal_settings())
