"""Blueprint registration helper."""

from __future__ import annotations

from flask import Flask, jsonify

from course_portal.errors import PortalError, StorageUnavailable
from course_portal.utils.auth import error_response

from .admin import bp as admin_bp
from .auth import bp as auth_bp
from .courses import bp as courses_bp
from .pages import bp as pages_bp
from .payments import bp as payments_bp


def register_routes(app: Flask) -> None:
    """Register all application blueprints on the provided Flask app."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(courses_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(payments_bp)

    @app.errorhandler(PortalError)
    def handle_portal_error(error: PortalError):
        if isinstance(error, StorageUnavailable):
            app.logger.warning("Storage unavailable: %s", error.__cause__ or error)
            return error_response(error, redirect="login.html")
        return error_response(error)

    @app.get("/")
    def index():
        return jsonify(message="Hello from the Course Portal API"), 200
