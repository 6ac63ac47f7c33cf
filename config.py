import os
from urllib.parse import urlparse
from sqlalchemy.pool import QueuePool
import pymysql
pymysql.install_as_MySQLdb()


def _flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _normalize_db_url(raw_db_url):
    if raw_db_url.startswith("mysql://"):
        raw_db_url = raw_db_url.replace("mysql://", "mysql+pymysql://", 1)
    elif raw_db_url.startswith("postgres://"):
        raw_db_url = raw_db_url.replace("postgres://", "postgresql://", 1)

    parsed_url = urlparse(raw_db_url)
    if parsed_url.scheme.startswith("sqlite"):
        return raw_db_url
    return f"{parsed_url.scheme}://{parsed_url.netloc}{parsed_url.path}"


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'change_this_secret_key')
    JWT_SECRET = os.getenv('JWT_SECRET', SECRET_KEY)
    JWT_EXPIRATION_HOURS = int(os.getenv('JWT_EXPIRATION_HOURS', '24'))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": QueuePool,
        "pool_size": 5,
        "max_overflow": 2,
        "pool_timeout": 10
    }

    ADMIN_COOKIE_NAME = "admin_token"
    ADMIN_COOKIE_SECURE = _flag("ADMIN_COOKIE_SECURE", os.getenv('FLASK_ENV', 'production').lower() == 'production')
    ADMIN_COOKIE_SAMESITE = os.getenv("ADMIN_COOKIE_SAMESITE", "Lax")

    CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if origin.strip()]

    # seconds; 0 turns the public read cache off
    CONTENT_CACHE_TTL = int(os.getenv("CONTENT_CACHE_TTL", "300"))

    # Section admins see every section unless this is switched on
    ENFORCE_SECTION_SCOPE = _flag("ENFORCE_SECTION_SCOPE")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevConfig(Config):
    """Development Configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = _normalize_db_url(
        os.getenv('DATABASE_URL') or os.getenv('SQLALCHEMY_DATABASE_URI', 'mysql+pymysql://root:@localhost/course_portal')
    )


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET = 'test-jwt-secret'
    ADMIN_COOKIE_SECURE = False
    ENFORCE_SECTION_SCOPE = False


class ProdConfig(Config):
    """Production Configuration"""
    DEBUG = False

    raw_db_url = os.getenv('DATABASE_URL') or os.getenv('SQLALCHEMY_DATABASE_URI')

    if raw_db_url:
        SQLALCHEMY_DATABASE_URI = _normalize_db_url(raw_db_url)
    else:
        SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
        SQLALCHEMY_ENGINE_OPTIONS = {}


ENV = os.getenv('FLASK_ENV', 'production').lower()

config_dict = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": ProdConfig
}

CurrentConfig = config_dict.get(ENV, ProdConfig)
