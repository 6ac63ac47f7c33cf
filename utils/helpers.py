from datetime import date, datetime


def format_datetime(datetime_obj):
    """Format datetime to a readable string."""
    if not datetime_obj:
        return None
    return datetime_obj.strftime('%Y-%m-%d %H:%M:%S')


def format_date(date_obj):
    if not date_obj:
        return None
    return date_obj.strftime('%Y-%m-%d')


def parse_date(value):
    """Parse a 'YYYY-MM-DD' form value. Empty values become None."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()


def first_present(data, *keys, default=None):
    """Return the first truthy value among `keys` in `data`."""
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return default


def bool_or_default(value, default=True):
    """Mirror the admin form's `value ?? default`: only a missing/null value takes the default."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def apply_updates(instance, data, fields):
    """Copy the keys of `data` that appear in `fields` onto the model instance."""
    changed = []
    for field in fields:
        if field in data:
            setattr(instance, field, data[field])
            changed.append(field)
    return changed
