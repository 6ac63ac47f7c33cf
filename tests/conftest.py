from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import create_app
from models import db
from models.admin_users import AdminUser
from utils.tokens import get_admin_token


@pytest.fixture()
def app():
    application = create_app("testing")
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    # explicit Cookie headers only; a cookie jar would overwrite them
    return app.test_client(use_cookies=False)


@pytest.fixture()
def cookie_client(app):
    return app.test_client()


@pytest.fixture()
def make_admin(app):
    counter = {"value": 0}

    def _make_admin(role="section_admin", department="63_A", is_active=True, email=None, password="secret123"):
        counter["value"] += 1
        admin = AdminUser(
            email=email or f"admin{counter['value']}@example.edu",
            full_name=f"Admin {counter['value']}",
            role=role,
            department=department,
            is_active=is_active,
        )
        admin.set_password(password)
        db.session.add(admin)
        db.session.commit()
        return admin

    return _make_admin


@pytest.fixture()
def auth_headers(app):
    def _auth_headers(admin):
        return {"Cookie": f"admin_token={get_admin_token(admin)}"}

    return _auth_headers


@pytest.fixture()
def admin_headers(make_admin, auth_headers):
    return auth_headers(make_admin())


@pytest.fixture()
def nested_payload():
    return {
        "semester": {"title": "Fall 2025", "section": "63_A"},
        "courses": [
            {
                "title": "Data Structures",
                "course_code": "CSE-201",
                "teacher_name": "Dr. X",
                "topics": [
                    {
                        "title": "Arrays",
                        "slides": [{"title": "S1", "google_drive_url": "https://drive.google.com/file/d/abc"}],
                        "videos": [],
                    }
                ],
                "study_resources": [
                    {"title": "Syllabus", "type": "syllabus", "content_url": "text", "description": "..."}
                ],
            }
        ],
    }
