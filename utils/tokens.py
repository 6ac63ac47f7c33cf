import datetime
import logging

import jwt
from flask import current_app, g

logger = logging.getLogger(__name__)


def _secret():
    return current_app.config["JWT_SECRET"]


def get_jwt_token(user_data):
    """Generate JWT token with user payload"""
    if not user_data:
        raise ValueError("User data must be provided to generate JWT token")

    hours = current_app.config.get("JWT_EXPIRATION_HOURS", 24)
    expiration = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=hours)
    payload = {"exp": expiration, **user_data}

    return jwt.encode(payload, _secret(), algorithm="HS256")


def get_admin_token(admin):
    return get_jwt_token({
        "user_id": admin.id,
        "email": admin.email,
        "role": admin.role,
        "department": admin.department,
    })


def decode_jwt(token):
    """Decode and validate JWT token and store its payload in `g`."""
    try:
        payload = jwt.decode(token, _secret(), algorithms=["HS256"])
        g.user = payload
        return payload
    except jwt.ExpiredSignatureError:
        logger.info("Token expired")
        return None
    except jwt.InvalidTokenError:
        logger.warning("Invalid token provided")
        return None


def set_admin_cookie(response, token):
    config = current_app.config
    response.set_cookie(
        config["ADMIN_COOKIE_NAME"], token,
        httponly=True,
        secure=config["ADMIN_COOKIE_SECURE"],
        samesite=config["ADMIN_COOKIE_SAMESITE"],
        path="/",
        max_age=config.get("JWT_EXPIRATION_HOURS", 24) * 3600,
    )
    return response


def clear_admin_cookie(response):
    config = current_app.config
    response.set_cookie(
        config["ADMIN_COOKIE_NAME"], "",
        httponly=True,
        secure=config["ADMIN_COOKIE_SECURE"],
        samesite=config["ADMIN_COOKIE_SAMESITE"],
        path="/",
        max_age=0,
    )
    return response
