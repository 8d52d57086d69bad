"""Shared pytest fixtures for stores, settings and the Flask app."""

from __future__ import annotations

import sys
from pathlib import Path

import mongomock
import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from course_portal import database, storage  # noqa: E402
from course_portal.config import Settings  # noqa: E402
from course_portal.main import create_app  # noqa: E402
from course_portal.services import user_service  # noqa: E402

SUPERUSER_EMAIL = "root@portal.test"
SUPERUSER_PASSWORD = "s3cret"


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch: pytest.MonkeyPatch):
    """Provide an isolated in-memory MongoDB database for each test."""
    test_db_name = "test_course_portal"
    monkeypatch.setenv("ENABLE_MONGODB", "true")
    monkeypatch.setenv("MONGODB_DATABASE", test_db_name)

    client = mongomock.MongoClient()
    db = client[test_db_name]

    monkeypatch.setattr(database, "get_mongo_client", lambda: client)
    monkeypatch.setattr(database, "get_database", lambda: db)

    yield db

    client.drop_database(test_db_name)
    storage.local_stores.clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        enable_mongodb=True,
        superuser_email=SUPERUSER_EMAIL,
        superuser_password=SUPERUSER_PASSWORD,
    )


@pytest.fixture(params=["memory", "mongo"])
def store(request, mongo_db, settings):
    """A seeded store, once per backend."""
    if request.param == "memory":
        kv = storage.MemoryStore("test-client", backing={})
    else:
        kv = storage.MongoStore(database.get_storage_collection(), "test-client")
    user_service.seed_defaults(kv, settings)
    return kv


@pytest.fixture
def app(settings):
    flask_app = create_app(settings)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
