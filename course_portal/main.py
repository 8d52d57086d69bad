"""Flask application setup and blueprint wiring."""

from __future__ import annotations

import atexit
import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS
from pymongo.errors import PyMongoError

from course_portal import database
from course_portal.config import Settings
from course_portal.routes import register_routes
from course_portal.utils.auth import register_store_seeding


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Configure and return the Flask application instance."""
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    settings = settings or Settings.from_env()
    app.config["PORTAL_SETTINGS"] = settings

    logging.basicConfig(level=logging.INFO)

    register_store_seeding(app)
    register_routes(app)

    if settings.enable_mongodb:
        try:
            database.create_indexes()
            app.logger.info("MongoDB indexes created successfully")
        except PyMongoError as e:
            app.logger.warning(f"Failed to create MongoDB indexes: {e}")
        atexit.register(database.close_mongo_connection)
    if not settings.superuser_enabled:
        app.logger.warning("SUPERUSER_PASSWORD is not set; superuser login is disabled")

    return app
