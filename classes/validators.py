import re

from classes.errors import ValidationError

SECTION_PATTERN = re.compile(r"^\d{2,3}_[A-Z]$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
GOOGLE_URL_PATTERN = re.compile(r"^https://[a-z0-9.-]+\.google\.com/.*")
YOUTUBE_URL_PATTERN = re.compile(r"^https://(www\.)?youtube\.com/watch\?v=.*|^https://youtu\.be/.*")
BATCH_PATTERN = re.compile(r"^\d+$")


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(data, *fields, message=None):
    """Raise ValidationError naming every missing field."""
    if not isinstance(data, dict):
        raise ValidationError(message or f"Missing required fields: {', '.join(fields)}")
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")


def validate_section_format(section):
    return bool(section) and SECTION_PATTERN.match(section) is not None


def validate_email(email):
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def validate_batch(batch):
    return bool(batch) and BATCH_PATTERN.match(batch) is not None


def is_google_drive_url(url):
    return bool(url) and GOOGLE_URL_PATTERN.match(url) is not None


def is_youtube_url(url):
    return bool(url) and YOUTUBE_URL_PATTERN.match(url) is not None
