from __future__ import annotations

import datetime

import jwt
import pytest

from utils import utils as guard_module


class _NoDatabase:
    @property
    def query(self):
        raise AssertionError("the guard touched the database")


def test_missing_cookie_is_rejected_before_any_lookup(client, monkeypatch):
    monkeypatch.setattr(guard_module, "AdminUser", _NoDatabase())

    response = client.get("/api/section-admin/semesters")

    assert response.status_code == 401
    assert response.get_json() == {"error": "No token provided"}


def test_garbage_token_is_rejected(client):
    response = client.get("/api/section-admin/semesters", headers={"Cookie": "admin_token=not-a-jwt"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "Invalid token"


def test_expired_token_is_rejected(app, client, make_admin):
    admin = make_admin()
    token = jwt.encode(
        {
            "user_id": admin.id,
            "exp": datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(minutes=5),
        },
        app.config["JWT_SECRET"],
        algorithm="HS256",
    )

    response = client.get("/api/section-admin/semesters", headers={"Cookie": f"admin_token={token}"})

    assert response.status_code == 401


def test_token_signed_with_another_secret_is_rejected(client, make_admin):
    admin = make_admin()
    token = jwt.encode({"user_id": admin.id}, "some-other-secret", algorithm="HS256")

    response = client.get("/api/section-admin/semesters", headers={"Cookie": f"admin_token={token}"})

    assert response.status_code == 401


def test_inactive_admin_is_rejected(client, make_admin, auth_headers):
    admin = make_admin(is_active=False)

    response = client.get("/api/section-admin/semesters", headers=auth_headers(admin))

    assert response.status_code == 401
    assert response.get_json()["error"] == "User not found or inactive"


def test_role_outside_admin_set_is_forbidden(client, make_admin, auth_headers):
    admin = make_admin(role="student")

    response = client.get("/api/section-admin/semesters", headers=auth_headers(admin))

    assert response.status_code == 403
    assert response.get_json()["error"] == "Insufficient permissions"


@pytest.mark.parametrize("role", ["section_admin", "admin", "super_admin"])
def test_admin_roles_are_allowed(client, make_admin, auth_headers, role):
    admin = make_admin(role=role)

    response = client.get("/api/section-admin/semesters", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.get_json() == {"semesters": []}


@pytest.mark.parametrize(
    "method, path",
    [
        ("post", "/api/section-admin/semesters"),
        ("get", "/api/section-admin/semesters/some-id"),
        ("put", "/api/section-admin/semesters/some-id"),
        ("delete", "/api/section-admin/semesters/some-id"),
        ("get", "/api/section-admin/courses"),
        ("post", "/api/section-admin/topics"),
        ("delete", "/api/section-admin/study-tools?id=x"),
    ],
)
def test_every_section_admin_route_requires_the_cookie(client, method, path):
    response = getattr(client, method)(path, json={})

    assert response.status_code == 401
