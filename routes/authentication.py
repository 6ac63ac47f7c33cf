import logging

from flask import Blueprint, request, jsonify, make_response
from sqlalchemy.exc import IntegrityError
from models.admin_users import AdminUser
from models import db
from classes.errors import ValidationError
from classes.validators import validate_email, validate_section_format
from utils.tokens import get_admin_token, set_admin_cookie, clear_admin_cookie
from utils.utils import authorize_section_admin

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth_bp', __name__)


def _login_response(admin):
    response = make_response(jsonify({
        "success": True,
        "user": {
            "id": admin.id,
            "email": admin.email,
            "full_name": admin.full_name,
            "role": admin.role,
            "department": admin.department
        }
    }))
    return set_admin_cookie(response, get_admin_token(admin))


def _record_login(admin):
    admin.last_login = db.func.now()
    admin.login_count = (admin.login_count or 0) + 1
    db.session.commit()


# Login
@auth_bp.route('/admin-login', methods=['POST'])
def admin_login():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "Email and password are required"}), 400

    admin = AdminUser.query.filter_by(email=email, is_active=True).first()

    if not admin or not admin.check_password(password):
        logger.info("Failed admin login for %s", email)
        return jsonify({"error": "Invalid credentials"}), 401

    _record_login(admin)
    logger.info("Admin %s logged in (%s)", admin.email, admin.role)

    return _login_response(admin)


# Section admin self-registration
@auth_bp.route('/section-admin-signup', methods=['POST'])
def section_admin_signup():
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    section = (data.get("section") or "").strip()
    password = data.get("password") or ""

    if not name or not email or not section or not password:
        raise ValidationError("All fields are required: name, email, section, and password")
    if not validate_email(email):
        raise ValidationError("Please enter a valid email address")
    if not validate_section_format(section):
        raise ValidationError("Section must be in format '{batch}_{section_letter}' (e.g., '63_G')")
    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters long")
    if len(name) < 2:
        raise ValidationError("Name must be at least 2 characters long")

    if AdminUser.query.filter_by(email=email).first():
        raise ValidationError("An account with this email already exists")

    admin = AdminUser(
        email=email,
        full_name=name,
        role="section_admin",
        department=section,
        is_active=True,
        login_count=0
    )
    admin.set_password(password)

    try:
        db.session.add(admin)
        db.session.flush()
        _record_login(admin)
    except IntegrityError:
        db.session.rollback()
        raise ValidationError("An account with this email already exists")

    logger.info("Section admin %s registered for section %s", admin.email, section)
    return _login_response(admin)


# Logout
@auth_bp.route('/logout', methods=['POST'])
def logout():
    response = make_response(jsonify({"success": True, "message": "Logged out successfully"}))
    return clear_admin_cookie(response)


# Auth Check
@auth_bp.route('/check-auth', methods=['GET'])
def check_auth():
    admin = authorize_section_admin()
    return jsonify({"authenticated": True, "user": admin.to_dict()}), 200
