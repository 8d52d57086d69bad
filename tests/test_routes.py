"""End-to-end tests of the JSON API through the Flask test client."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from course_portal import storage  # noqa: E402
from course_portal.config import Settings  # noqa: E402
from course_portal.main import create_app  # noqa: E402

CLIENT = {"X-Client-Id": "browser-1"}


def post(client, url, payload=None, headers=CLIENT):
    return client.post(url, json=payload or {}, headers=headers)


def test_purchase_flow_across_roles(client):
    response = post(client, "/api/auth/signup", {
        "name": "A", "email": "a@x.com", "password": "p", "confirmPassword": "p",
    })
    assert response.status_code == 201
    assert response.get_json()["redirect"] == "courses.html"
    assert "password" not in response.get_json()["user"]

    response = post(client, "/api/courses/select", {"course": "Digital Marketing"})
    assert response.get_json()["redirect"] == "access-code.html"

    # Only admins may mint codes.
    assert post(client, "/api/admin/codes", {"course": "Digital Marketing"}).status_code == 403

    post(client, "/api/auth/login", {"email": "root@portal.test", "password": "s3cret"})
    response = post(client, "/api/admin/codes", {"course": "Digital Marketing"})
    assert response.status_code == 201
    code = response.get_json()["code"]
    assert code["status"] == "active"
    assert code["statusLabel"] == "Active"

    post(client, "/api/auth/login", {"email": "a@x.com", "password": "p"})
    guard = client.get("/api/pages/digital-marketing.html/guard", headers=CLIENT).get_json()
    assert guard["allowed"] is False
    assert guard["redirect"] == "access-code.html"

    response = post(client, "/api/access-codes/verify", {"digits": list(code["code"].lower())})
    assert response.status_code == 200
    body = response.get_json()
    assert body["redirect"] == "digital-marketing.html"
    assert body["user"]["courses"] == ["Digital Marketing"]

    response = post(client, "/api/access-codes/verify", {"code": code["code"]})
    assert response.status_code == 409
    assert response.get_json()["code"] == "AlreadyUsed"

    guard = client.get("/api/pages/digital-marketing.html/guard", headers=CLIENT).get_json()
    assert guard == {"allowed": True, "page": "digital-marketing.html"}

    post(client, "/api/auth/login", {"email": "root@portal.test", "password": "s3cret"})
    stats = client.get("/api/admin/stats", headers=CLIENT).get_json()
    assert stats == {"total_users": 2, "total_codes": 1, "used_codes": 1}

    codes = client.get("/api/admin/codes", headers=CLIENT).get_json()
    assert codes["codes"][0]["userEmail"] == "a@x.com"
    response = client.delete(f"/api/admin/codes/{code['id']}", headers=CLIENT)
    assert response.status_code == 200
    assert client.get("/api/admin/codes", headers=CLIENT).get_json()["total_count"] == 0


def test_login_errors_are_json(client):
    response = post(client, "/api/auth/login", {"email": "john@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid email or password!", "code": "InvalidCredentials"}


def test_session_endpoint_and_logout(client):
    response = client.get("/api/auth/session", headers=CLIENT)
    assert response.status_code == 401
    assert response.get_json()["redirect"] == "login.html"

    post(client, "/api/auth/login", {"email": "john@example.com", "password": "password123"})
    assert client.get("/api/auth/session", headers=CLIENT).get_json()["user"]["name"] == "John Doe"

    response = post(client, "/api/auth/logout")
    assert response.get_json()["redirect"] == "index.html"
    assert client.get("/api/auth/session", headers=CLIENT).status_code == 401


def test_clients_have_separate_stores(client):
    post(client, "/api/auth/signup", {
        "name": "A", "email": "a@x.com", "password": "p", "confirmPassword": "p",
    })

    other = {"X-Client-Id": "browser-2"}
    assert client.get("/api/auth/session", headers=other).status_code == 401
    response = post(client, "/api/auth/login", {"email": "a@x.com", "password": "p"}, headers=other)
    assert response.status_code == 401


def test_admin_management_endpoints(client):
    post(client, "/api/auth/login", {"email": "root@portal.test", "password": "s3cret"})

    response = post(client, "/api/admin/admins", {"email": "nope@x.com"})
    assert response.status_code == 404
    assert response.get_json()["code"] == "UserNotFound"

    response = post(client, "/api/admin/admins", {"email": "john@example.com"})
    assert response.status_code == 200
    admins = client.get("/api/admin/admins", headers=CLIENT).get_json()["admins"]
    assert [a["email"] for a in admins] == ["john@example.com"]

    response = client.delete("/api/admin/admins/root@portal.test", headers=CLIENT)
    assert response.status_code == 400
    assert response.get_json()["code"] == "SelfDemotion"

    response = client.delete("/api/admin/admins/john@example.com", headers=CLIENT)
    assert response.status_code == 200
    assert client.get("/api/admin/admins", headers=CLIENT).get_json()["admins"] == []


def test_free_course_and_payment_link(client):
    post(client, "/api/auth/login", {"email": "john@example.com", "password": "password123"})

    response = post(client, "/api/courses/select", {"course": "Data Science Fundamentals"})
    assert response.get_json()["redirect"] == "data-science.html"

    courses = client.get("/api/courses", headers=CLIENT).get_json()
    assert courses["selectedCourse"] == "Data Science Fundamentals"

    post(client, "/api/courses/select", {"course": "YouTube Automation"})
    response = post(client, "/api/payments/link", {"method": "Naira"})
    body = response.get_json()
    assert body["course"] == "YouTube Automation"
    assert body["url"].startswith("https://wa.me/2347048929112?text=")


def test_corrupt_session_reports_storage_unavailable(client, mongo_db):
    post(client, "/api/auth/login", {"email": "john@example.com", "password": "password123"})
    mongo_db.local_storage.update_one(
        {"namespace": "browser-1", "key": "currentUser"},
        {"$set": {"value": "{oops"}},
    )

    response = client.get("/api/auth/session", headers=CLIENT)
    assert response.status_code == 503
    assert response.get_json()["redirect"] == "login.html"

    guard = client.get("/api/pages/courses.html/guard", headers=CLIENT).get_json()
    assert guard["allowed"] is False
    assert guard["redirect"] == "login.html"


def test_memory_backend_when_mongodb_disabled(mongo_db):
    app = create_app(Settings(enable_mongodb=False))
    client = app.test_client()

    response = post(client, "/api/auth/signup", {
        "name": "M", "email": "m@x.com", "password": "p", "confirmPassword": "p",
    }, headers={"X-Client-Id": "mem"})

    assert response.status_code == 201
    assert "currentUser" in storage.local_stores["mem"]
    assert mongo_db.local_storage.count_documents({}) == 0


def test_anonymous_reads_leave_no_store_behind(mongo_db):
    memory_client = create_app(Settings(enable_mongodb=False)).test_client()
    mongo_client = create_app(Settings(enable_mongodb=True)).test_client()

    for index in range(20):
        headers = {"X-Client-Id": f"visitor-{index}"}
        for flask_client in (memory_client, mongo_client):
            assert flask_client.get("/api/auth/session", headers=headers).status_code == 401
            assert flask_client.get("/api/courses", headers=headers).status_code == 401
            guard = flask_client.get("/api/pages/courses.html/guard", headers=headers).get_json()
            assert guard["allowed"] is False

    assert storage.local_stores == {}
    assert mongo_db.local_storage.count_documents({}) == 0


def test_malformed_code_record_reports_storage_unavailable(client, mongo_db):
    post(client, "/api/auth/login", {"email": "root@portal.test", "password": "s3cret"})
    mongo_db.local_storage.update_one(
        {"namespace": "browser-1", "key": "accessCodes"},
        {"$set": {"value": '[{"id": "c1", "code": "ABCDEFGH", "course": "Web Design", "status": "active"}]'}},
    )

    response = client.get("/api/admin/stats", headers=CLIENT)
    assert response.status_code == 503
    assert response.get_json()["code"] == "StorageUnavailable"
    assert response.get_json()["redirect"] == "login.html"


def test_null_fields_are_treated_as_blank(client):
    response = post(client, "/api/auth/signup", {
        "name": "N", "email": None, "password": "p", "confirmPassword": "p",
    })
    assert response.status_code == 400
    assert response.get_json()["code"] == "MissingFields"

    response = post(client, "/api/auth/login", {"email": None, "password": None})
    assert response.status_code == 401

    post(client, "/api/auth/login", {"email": "root@portal.test", "password": "s3cret"})
    response = post(client, "/api/admin/admins", {"email": None})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Please enter an email address!"


def test_create_app_builds_storage_index(mongo_db):
    create_app(Settings(enable_mongodb=True))

    assert "namespace_1_key_1" in mongo_db.local_storage.index_information()
