"""
Contact message model and data access functions.
Messages come from the public contact form and are handled in the admin inbox.
"""

from typing import Any, Dict, List, Optional

from database import get_db
from database.records import row_to_dict
from utils.datetime_helpers import now_iso
from utils.validators import validate_email, validate_phone


MESSAGE_STATUSES = ('unread', 'read', 'replied', 'archived')
MESSAGE_PRIORITIES = ('low', 'medium', 'high')

BOOL_FIELDS = ('is_starred',)


def _to_message(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, bool_fields=BOOL_FIELDS)


def get_all_messages() -> List[Dict[str, Any]]:
    """Get all messages, newest first."""
    db = get_db()
    rows = db.execute('SELECT * FROM messages ORDER BY created_at DESC, id DESC').fetchall()
    return [_to_message(row) for row in rows]


def get_message_by_id(message_id: int) -> Optional[Dict[str, Any]]:
    db = get_db()
    row = db.execute('SELECT * FROM messages WHERE id = ?', (message_id,)).fetchone()
    return _to_message(row)


def create_message(name: str, email: str, message: str, subject: str = None,
                   phone: str = None, priority: str = 'medium') -> int:
    """
    Store a contact form submission as an unread message.

    Returns:
        New message ID

    Raises:
        ValueError: Missing name/message, invalid email or phone
    """
    if not (name or '').strip():
        raise ValueError('Name is required')
    if not validate_email(email):
        raise ValueError('A valid email is required')
    if phone and not validate_phone(phone):
        raise ValueError('Invalid phone number')
    if not (message or '').strip():
        raise ValueError('Message is required')
    if priority not in MESSAGE_PRIORITIES:
        raise ValueError(f'Invalid priority: {priority}')

    db = get_db()
    cursor = db.execute('''
        INSERT INTO messages (name, email, phone, subject, message, status, priority,
                              is_starred, created_at)
        VALUES (?, ?, ?, ?, ?, 'unread', ?, 0, ?)
    ''', (name.strip(), email.strip(), phone, subject, message.strip(), priority, now_iso()))
    db.commit()
    return cursor.lastrowid


def _update(message_id: int, assignments: str, params: tuple) -> bool:
    db = get_db()
    cursor = db.execute(f'UPDATE messages SET {assignments} WHERE id = ?', (*params, message_id))
    db.commit()
    return cursor.rowcount > 0


def mark_as_read(message_id: int) -> bool:
    """
    Mark an unread message as read. read_at is only set the first time;
    replied/archived messages keep their status.
    """
    return _update(message_id,
                   "status = CASE WHEN status = 'unread' THEN 'read' ELSE status END, "
                   "read_at = COALESCE(read_at, ?)",
                   (now_iso(),))


def reply_to_message(message_id: int, reply: str) -> bool:
    """Store reply text and mark the message replied. No email is sent."""
    if not (reply or '').strip():
        raise ValueError('Reply text is required')
    timestamp = now_iso()
    return _update(message_id,
                   "reply = ?, status = 'replied', replied_at = ?, read_at = COALESCE(read_at, ?)",
                   (reply.strip(), timestamp, timestamp))


def toggle_star(message_id: int) -> Optional[bool]:
    """
    Flip the starred flag.

    Returns:
        New flag value, or None if the message does not exist
    """
    message = get_message_by_id(message_id)
    if not message:
        return None
    new_value = not message['is_starred']
    _update(message_id, 'is_starred = ?', (1 if new_value else 0,))
    return new_value


def archive_message(message_id: int) -> bool:
    return _update(message_id, "status = 'archived'", ())


def set_message_priority(message_id: int, priority: str) -> bool:
    if priority not in MESSAGE_PRIORITIES:
        raise ValueError(f'Invalid priority: {priority}')
    return _update(message_id, 'priority = ?', (priority,))


def delete_message(message_id: int) -> bool:
    db = get_db()
    cursor = db.execute('DELETE FROM messages WHERE id = ?', (message_id,))
    db.commit()
    return cursor.rowcount > 0


def count_messages_by_status(messages: List[Dict[str, Any]]) -> Dict[str, int]:
    """Inbox counters: one entry per status plus 'starred' and 'total'."""
    counts = {status: 0 for status in MESSAGE_STATUSES}
    for message in messages:
        counts[message['status']] = counts.get(message['status'], 0) + 1
    counts['starred'] = sum(1 for m in messages if m['is_starred'])
    counts['total'] = len(messages)
    return counts


def search_messages(messages: List[Dict[str, Any]], search: str = None,
                    status: str = None, priority: str = None) -> List[Dict[str, Any]]:
    """Admin screen filter: free text over name/email/subject, status, priority."""
    filtered = list(messages)

    if search:
        term = search.lower()
        filtered = [m for m in filtered if
                    term in m['name'].lower() or
                    term in m['email'].lower() or
                    term in (m.get('subject') or '').lower()]
    if status:
        filtered = [m for m in filtered if m['status'] == status]
    if priority:
        filtered = [m for m in filtered if m['priority'] == priority]

    return filtered
