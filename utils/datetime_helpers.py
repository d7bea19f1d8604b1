"""Timezone-aware date/time helpers for the hotel application."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app, has_app_context


DEFAULT_TIMEZONE = 'Asia/Kolkata'


def get_timezone() -> ZoneInfo:
    """Get the configured timezone (default outside an app context)."""
    tz_name = DEFAULT_TIMEZONE
    if has_app_context():
        tz_name = current_app.config.get('TIMEZONE', DEFAULT_TIMEZONE)
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def now_iso() -> str:
    """Current timestamp as an ISO-8601 string (naive, configured timezone)."""
    now = get_now()
    return now.replace(tzinfo=None).isoformat(timespec='seconds')


def parse_datetime(value) -> datetime:
    """
    Parse a date, datetime or ISO-8601 string into a naive datetime.

    Dates become midnight. Values carrying an offset (or a trailing 'Z')
    are converted to hotel local time before the offset is dropped, so
    stored values from different sources compare consistently.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not value or not isinstance(value, str):
        raise ValueError(f'Invalid date: {value!r}')

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f'Invalid date: {value!r}')
    return _to_local_naive(parsed)


def _to_local_naive(value: datetime) -> datetime:
    """Naive hotel-local datetime; naive input is taken as local already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(get_timezone()).replace(tzinfo=None)


def parse_date(value) -> date:
    """Parse a date, datetime or ISO string into a date."""
    return parse_datetime(value).date()
