"""
Miscellaneous utility helper functions.
Provides common functionality used across the application.
"""

import os
import random
import string

from utils.datetime_helpers import get_now


TRUTHY_VALUES = ('1', 'true', 'yes', 'on')


def generate_unique_code(prefix: str = '', length: int = 8) -> str:
    """
    Generate a random uppercase alphanumeric code (promo codes, file names).

    Args:
        prefix: Optional prefix (e.g., 'PROMO')
        length: Length of random part

    Returns:
        Code string
    """
    random_part = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))

    if prefix:
        return f'{prefix}-{random_part}'

    return random_part


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename for safe file uploads.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename with a timestamp and random suffix
    """
    if not filename:
        filename = 'image'

    name, ext = os.path.splitext(filename)

    # Keep alphanumerics, dash and underscore
    safe_name = ''.join(c if c.isalnum() or c in '-_' else '_' for c in name)[:100]

    timestamp = get_now().strftime('%Y%m%d_%H%M%S')
    suffix = generate_unique_code(length=4).lower()

    return f'{safe_name}_{timestamp}_{suffix}{ext.lower()}'


def get_file_extension(filename: str) -> str:
    """Extension without dot (lowercase)."""
    if not filename:
        return ''

    return os.path.splitext(filename)[1][1:].lower()


def allowed_file(filename: str, allowed_extensions) -> bool:
    """
    Check if file extension is allowed.

    Args:
        filename: Filename to check
        allowed_extensions: Set of allowed extensions

    Returns:
        True if extension is allowed
    """
    return get_file_extension(filename) in allowed_extensions


def parse_bool(value) -> bool:
    """Interpret query-string/form/JSON values such as 'true', '1', True."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_VALUES


def confirmation_given(request) -> bool:
    """
    True when a destructive request carries confirm=true, either in the
    query string or in the JSON body.
    """
    if parse_bool(request.args.get('confirm')):
        return True
    body = request.get_json(silent=True) or {}
    return isinstance(body, dict) and parse_bool(body.get('confirm'))
