from __future__ import annotations

import pytest

from models import db
from models.admin_users import AdminUser


def test_login_sets_cookie_and_records_login(cookie_client, make_admin):
    admin = make_admin(email="lead@example.edu", password="hunter22")

    response = cookie_client.post("/api/auth/admin-login", json={"email": "Lead@Example.edu", "password": "hunter22"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["user"]["email"] == "lead@example.edu"
    assert "admin_token=" in response.headers["Set-Cookie"]
    assert "HttpOnly" in response.headers["Set-Cookie"]

    refreshed = db.session.get(AdminUser, admin.id)
    db.session.refresh(refreshed)
    assert refreshed.login_count == 1
    assert refreshed.last_login is not None


def test_login_cookie_opens_section_admin_routes(cookie_client, make_admin):
    make_admin(email="lead@example.edu", password="hunter22")
    cookie_client.post("/api/auth/admin-login", json={"email": "lead@example.edu", "password": "hunter22"})

    check = cookie_client.get("/api/auth/check-auth")

    assert check.status_code == 200
    assert check.get_json()["authenticated"] is True
    assert cookie_client.get("/api/section-admin/semesters").status_code == 200


@pytest.mark.parametrize(
    "payload, status",
    [
        ({}, 400),
        ({"email": "lead@example.edu"}, 400),
        ({"email": "lead@example.edu", "password": "wrong"}, 401),
        ({"email": "nobody@example.edu", "password": "hunter22"}, 401),
    ],
)
def test_login_failures(cookie_client, make_admin, payload, status):
    make_admin(email="lead@example.edu", password="hunter22")

    response = cookie_client.post("/api/auth/admin-login", json=payload)

    assert response.status_code == status
    assert "Set-Cookie" not in response.headers


def test_inactive_admin_cannot_log_in(cookie_client, make_admin):
    make_admin(email="gone@example.edu", password="hunter22", is_active=False)

    response = cookie_client.post("/api/auth/admin-login", json={"email": "gone@example.edu", "password": "hunter22"})

    assert response.status_code == 401


def test_logout_clears_cookie(cookie_client, make_admin):
    make_admin(email="lead@example.edu", password="hunter22")
    cookie_client.post("/api/auth/admin-login", json={"email": "lead@example.edu", "password": "hunter22"})

    response = cookie_client.post("/api/auth/logout")

    assert response.get_json() == {"success": True, "message": "Logged out successfully"}
    assert cookie_client.get("/api/auth/check-auth").status_code == 401


def test_signup_creates_section_admin(cookie_client):
    response = cookie_client.post(
        "/api/auth/section-admin-signup",
        json={"name": "Rahim", "email": "Rahim@Example.edu", "section": "63_G", "password": "secret1"},
    )

    assert response.status_code == 200
    user = response.get_json()["user"]
    assert user["role"] == "section_admin"
    assert user["department"] == "63_G"
    assert user["email"] == "rahim@example.edu"
    assert cookie_client.get("/api/section-admin/semesters").status_code == 200


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"name": "R", "email": "r@example.edu", "section": "63_G"}, "All fields are required"),
        ({"name": "Rahim", "email": "not-an-email", "section": "63_G", "password": "secret1"}, "valid email"),
        ({"name": "Rahim", "email": "r@example.edu", "section": "63-g", "password": "secret1"}, "Section must be"),
        ({"name": "Rahim", "email": "r@example.edu", "section": "63_G", "password": "123"}, "at least 6"),
        ({"name": "R", "email": "r@example.edu", "section": "63_G", "password": "secret1"}, "Name must be"),
    ],
)
def test_signup_validation(cookie_client, payload, message):
    response = cookie_client.post("/api/auth/section-admin-signup", json=payload)

    assert response.status_code == 400
    assert message in response.get_json()["error"]


def test_signup_rejects_duplicate_email(cookie_client, make_admin):
    make_admin(email="taken@example.edu")

    response = cookie_client.post(
        "/api/auth/section-admin-signup",
        json={"name": "Rahim", "email": "taken@example.edu", "section": "63_G", "password": "secret1"},
    )

    assert response.status_code == 400
    assert "already exists" in response.get_json()["error"]
