"""
User model and data access functions.
Handles authentication, guest profiles, and Flask-Login integration.
"""

from typing import Any, Dict, List, Optional

from werkzeug.security import generate_password_hash, check_password_hash

from database import get_db
from database.records import row_to_dict, build_update
from utils.datetime_helpers import now_iso


ROLES = ('user', 'admin')
LOYALTY_LEVELS = ('bronze', 'silver', 'gold', 'platinum')

JSON_FIELDS = {'preferences': {}}
BOOL_FIELDS = ('is_vip', 'active')


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        """
        Initialize User from database row.

        Args:
            user_dict: Dictionary with user data from database
        """
        self.id = user_dict['id']
        self.email = user_dict['email']
        self.display_name = user_dict.get('display_name')
        self.role = user_dict.get('role', 'user')
        self.photo_url = user_dict.get('photo_url')
        self.active = user_dict.get('active', True)
        self.created_at = user_dict.get('created_at')
        self.last_login = user_dict.get('last_login')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return bool(self.active)

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    @property
    def is_admin(self):
        return self.role == 'admin'

    def get_id(self):
        """Required by Flask-Login. Returns user ID as unicode string."""
        return str(self.id)


def _to_user(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, JSON_FIELDS, BOOL_FIELDS)


def public_profile(user_dict: dict) -> dict:
    """User dict without the password hash, safe to serialize."""
    if user_dict is None:
        return None
    return {key: value for key, value in user_dict.items() if key != 'password_hash'}


def get_user_by_id(user_id: int) -> Optional[Dict[str, Any]]:
    """
    Get user by ID.

    Args:
        user_id: User ID

    Returns:
        User dict or None if not found
    """
    db = get_db()
    row = db.execute('SELECT * FROM users WHERE id = ?', (user_id,)).fetchone()
    return _to_user(row)


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """
    Get user by email (case-insensitive).

    Args:
        email: Email to search for

    Returns:
        User dict or None if not found
    """
    db = get_db()
    row = db.execute('SELECT * FROM users WHERE lower(email) = lower(?)', (email.strip(),)).fetchone()
    return _to_user(row)


def get_users_by_ids(user_ids) -> Dict[int, Dict[str, Any]]:
    """Batch-load users, returning a mapping of id -> user dict."""
    ids = sorted({uid for uid in user_ids if uid is not None})
    if not ids:
        return {}

    placeholders = ','.join('?' * len(ids))
    db = get_db()
    rows = db.execute(f'SELECT * FROM users WHERE id IN ({placeholders})', ids).fetchall()
    return {row['id']: _to_user(row) for row in rows}


def get_all_users(role: str = None, active_only: bool = False) -> List[Dict[str, Any]]:
    """
    Get all users, newest first.

    Args:
        role: Only users with this role ('user' for guests)
        active_only: If True, only return active users

    Returns:
        List of user dicts
    """
    query = 'SELECT * FROM users WHERE 1=1'
    params = []

    if role:
        query += ' AND role = ?'
        params.append(role)
    if active_only:
        query += ' AND active = 1'

    query += ' ORDER BY created_at DESC, id DESC'

    db = get_db()
    rows = db.execute(query, params).fetchall()
    return [_to_user(row) for row in rows]


def create_user(email: str, password: str, display_name: str = None, role: str = 'user') -> int:
    """
    Create new user with hashed password.

    Args:
        email: Unique email
        password: Plain text password (will be hashed)
        display_name: Name shown on the site
        role: 'user' or 'admin'

    Returns:
        New user ID

    Raises:
        ValueError: If the role is unknown or the email is taken
    """
    if role not in ROLES:
        raise ValueError(f'Invalid role: {role}')
    if get_user_by_email(email):
        raise ValueError('Email already registered')

    timestamp = now_iso()
    db = get_db()
    cursor = db.execute('''
        INSERT INTO users (email, password_hash, display_name, role, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
    ''', (email.strip().lower(), generate_password_hash(password), display_name, role,
          timestamp, timestamp))

    db.commit()
    return cursor.lastrowid


def update_user(user_id: int, **kwargs) -> bool:
    """
    Update user fields.

    Args:
        user_id: User ID to update
        **kwargs: Profile fields (display_name, photo_url, phone, address,
                  date_of_birth, nationality, preferences, loyalty_status,
                  is_vip, notes, total_bookings, total_spent, last_stay_date,
                  active)

    Returns:
        True if updated successfully
    """
    allowed_fields = ['display_name', 'photo_url', 'phone', 'address', 'date_of_birth',
                      'nationality', 'preferences', 'loyalty_status', 'is_vip', 'notes',
                      'total_bookings', 'total_spent', 'last_stay_date', 'active']

    if 'loyalty_status' in kwargs and kwargs['loyalty_status'] not in LOYALTY_LEVELS:
        raise ValueError(f'Invalid loyalty status: {kwargs["loyalty_status"]}')

    updates, values = build_update(allowed_fields, kwargs,
                                   json_fields=('preferences',), bool_fields=BOOL_FIELDS)
    if not updates:
        return False

    updates.append('updated_at = ?')
    values.extend([now_iso(), user_id])

    db = get_db()
    cursor = db.execute(f'UPDATE users SET {", ".join(updates)} WHERE id = ?', values)
    db.commit()

    return cursor.rowcount > 0


def update_password(user_id: int, new_password: str) -> bool:
    """
    Update user password.

    Args:
        user_id: User ID
        new_password: New plain text password (will be hashed)

    Returns:
        True if updated successfully
    """
    db = get_db()
    cursor = db.execute('''
        UPDATE users SET password_hash = ?, updated_at = ? WHERE id = ?
    ''', (generate_password_hash(new_password), now_iso(), user_id))

    db.commit()
    return cursor.rowcount > 0


def deactivate_user(user_id: int) -> bool:
    """
    Soft delete user (set active = 0). Bookings keep their user reference.

    Returns:
        True if deactivated
    """
    return update_user(user_id, active=False)


def update_last_login(user_id: int) -> None:
    """Update last login timestamp."""
    db = get_db()
    db.execute('UPDATE users SET last_login = ? WHERE id = ?', (now_iso(), user_id))
    db.commit()


def check_password(user_dict: dict, password: str) -> bool:
    """
    Verify password against stored hash.

    Args:
        user_dict: User dictionary with password_hash
        password: Plain text password to check

    Returns:
        True if password matches
    """
    return check_password_hash(user_dict['password_hash'], password)
