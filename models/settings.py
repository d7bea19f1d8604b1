"""
Settings data access functions.
Settings are JSON documents stored under a key ('hotel', 'notifications').
"""

from typing import Any, Dict

from database import get_db
from database.records import decode_json, encode_json
from database.seed import DEFAULT_HOTEL_SETTINGS, DEFAULT_NOTIFICATION_SETTINGS
from utils.datetime_helpers import now_iso


HOTEL_SETTINGS_KEY = 'hotel'
NOTIFICATION_SETTINGS_KEY = 'notifications'

DEFAULTS = {
    HOTEL_SETTINGS_KEY: DEFAULT_HOTEL_SETTINGS,
    NOTIFICATION_SETTINGS_KEY: DEFAULT_NOTIFICATION_SETTINGS,
}


def get_settings(key: str) -> Dict[str, Any]:
    """
    Get a settings document merged over its defaults.

    Args:
        key: Settings document key

    Returns:
        Settings dict (defaults for fields never saved)
    """
    db = get_db()
    row = db.execute('SELECT value FROM settings WHERE key = ?', (key,)).fetchone()
    stored = decode_json(row['value'], {}) if row else {}
    return {**DEFAULTS.get(key, {}), **stored}


def update_settings(key: str, values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge values into a settings document and save it.
    Unknown keys are ignored for documents with defaults.

    Returns:
        The saved settings document
    """
    if key not in DEFAULTS:
        raise ValueError(f'Unknown settings: {key}')

    allowed = DEFAULTS[key].keys()
    current = get_settings(key)
    current.update({k: v for k, v in values.items() if k in allowed})

    db = get_db()
    db.execute('''
        INSERT INTO settings (key, value, updated_at) VALUES (?, ?, ?)
        ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
    ''', (key, encode_json(current), now_iso()))
    db.commit()
    return current


def get_hotel_settings() -> Dict[str, Any]:
    return get_settings(HOTEL_SETTINGS_KEY)


def update_hotel_settings(values: Dict[str, Any]) -> Dict[str, Any]:
    if 'name' in values and not str(values['name'] or '').strip():
        raise ValueError('Hotel name is required')
    for field in ('tax_rate', 'service_fee'):
        if field in values and values[field] not in (None, ''):
            if float(values[field]) < 0:
                raise ValueError(f'{field.replace("_", " ").capitalize()} cannot be negative')
    return update_settings(HOTEL_SETTINGS_KEY, values)


def get_notification_settings() -> Dict[str, Any]:
    return get_settings(NOTIFICATION_SETTINGS_KEY)


def update_notification_settings(values: Dict[str, Any]) -> Dict[str, Any]:
    return update_settings(NOTIFICATION_SETTINGS_KEY, {k: bool(v) for k, v in values.items()})
