import logging
from functools import wraps

from flask import current_app, g, request

from classes.errors import AuthenticationError, AuthorizationError
from models.admin_users import AdminUser, SECTION_ADMIN_ROLES
from utils.tokens import decode_jwt

logger = logging.getLogger(__name__)


def authorize_section_admin():
    """Resolve the admin behind the `admin_token` cookie or raise.

    Missing, invalid or expired tokens and unknown or inactive accounts raise
    AuthenticationError; a role outside SECTION_ADMIN_ROLES raises
    AuthorizationError. No database access happens before the token verifies.
    """
    token = request.cookies.get(current_app.config["ADMIN_COOKIE_NAME"])
    if not token:
        logger.info("No admin token on %s %s", request.method, request.path)
        raise AuthenticationError("No token provided")

    payload = decode_jwt(token)
    if not payload:
        raise AuthenticationError("Invalid token")

    user_id = payload.get("user_id")
    admin = AdminUser.query.filter_by(id=str(user_id), is_active=True).first() if user_id else None
    if not admin:
        raise AuthenticationError("User not found or inactive")

    if admin.role not in SECTION_ADMIN_ROLES:
        logger.warning("Admin %s with role %r denied on %s", admin.email, admin.role, request.path)
        raise AuthorizationError("Insufficient permissions")

    g.admin = admin
    return admin


def section_admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        authorize_section_admin()
        return f(*args, **kwargs)

    return decorated_function


def scoped_section(admin):
    """Section a section admin is restricted to, or None when unrestricted.

    Scoping is off unless ENFORCE_SECTION_SCOPE is set.
    """
    if not current_app.config.get("ENFORCE_SECTION_SCOPE"):
        return None
    if admin is None or admin.role != "section_admin":
        return None
    return admin.department or None


def check_section_access(admin, section, action="manage content in"):
    scope = scoped_section(admin)
    if scope and section != scope:
        raise AuthorizationError(f"You can only {action} your assigned section")
