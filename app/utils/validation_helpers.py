from datetime import datetime


def to_naive_local(value: datetime) -> datetime:
    """Bookings are stored as naive local time; convert aware datetimes accordingly."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value
