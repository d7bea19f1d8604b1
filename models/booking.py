"""
Booking model and data access functions.
Handles booking creation, admin edits, status changes, and screen filters.

Booking and payment statuses are free-form: any status may be set from any
other. Only membership in the known status sets is checked.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from database import get_db
from database.records import row_to_dict, build_update, encode_json
from models.pricing import calculate_booking_total
from models.room import get_room_by_id, get_rooms_by_ids
from models.user import get_user_by_id, get_users_by_ids
from utils.datetime_helpers import now_iso, parse_date


BOOKING_STATUSES = ('pending', 'confirmed', 'cancelled', 'checked-in',
                    'checked-out', 'no-show', 'completed')
PAYMENT_STATUSES = ('pending', 'partial', 'paid', 'refunded')

# Statuses shown under "stay history" on the guest dashboard
HISTORY_STATUSES = ('checked-out', 'completed')

EDITABLE_FIELDS = ['check_in', 'check_out', 'guests', 'special_requests',
                   'booking_status', 'payment_status', 'amount_paid']

JSON_FIELDS = {'add_ons': []}
GUEST_DETAIL_FIELDS = ('first_name', 'last_name', 'email', 'phone')


def _to_booking(row) -> Optional[Dict[str, Any]]:
    """Decode a booking row and nest the guest detail columns."""
    booking = row_to_dict(row, JSON_FIELDS)
    if booking is None:
        return None
    booking['guest_details'] = {
        field: booking.pop(f'guest_{field}') for field in GUEST_DETAIL_FIELDS
    }
    return booking


def _validate_statuses(values: dict) -> None:
    if 'booking_status' in values and values['booking_status'] not in BOOKING_STATUSES:
        raise ValueError(f'Invalid booking status: {values["booking_status"]}')
    if 'payment_status' in values and values['payment_status'] not in PAYMENT_STATUSES:
        raise ValueError(f'Invalid payment status: {values["payment_status"]}')


def _validate_amount_paid(amount) -> float:
    try:
        amount = float(amount)
    except (TypeError, ValueError):
        raise ValueError('Invalid amount paid')
    if amount < 0:
        raise ValueError('Amount paid cannot be negative')
    return amount


def get_all_bookings() -> List[Dict[str, Any]]:
    """Get all bookings, newest first."""
    db = get_db()
    rows = db.execute('SELECT * FROM bookings ORDER BY created_at DESC, id DESC').fetchall()
    return [_to_booking(row) for row in rows]


def get_booking_by_id(booking_id: int) -> Optional[Dict[str, Any]]:
    """Get booking by ID, or None if not found."""
    db = get_db()
    row = db.execute('SELECT * FROM bookings WHERE id = ?', (booking_id,)).fetchone()
    return _to_booking(row)


def get_bookings_for_user(user_id: int) -> List[Dict[str, Any]]:
    """Bookings made by one user, newest first."""
    db = get_db()
    rows = db.execute('''
        SELECT * FROM bookings WHERE user_id = ? ORDER BY created_at DESC, id DESC
    ''', (user_id,)).fetchall()
    return [_to_booking(row) for row in rows]


def attach_details(bookings: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Resolve room and user names for a list of bookings.

    Loads all referenced rooms and users with one query each, then joins in
    memory. Missing references resolve to 'Unknown ...' placeholders.

    Returns:
        The same booking dicts, enriched with room_name, room_type,
        user_name, user_email, user_phone
    """
    rooms = get_rooms_by_ids(b['room_id'] for b in bookings)
    users = get_users_by_ids(b['user_id'] for b in bookings)

    for booking in bookings:
        room = rooms.get(booking['room_id'])
        user = users.get(booking['user_id'])
        details = booking.get('guest_details') or {}
        guest_name = ' '.join(filter(None, [details.get('first_name'), details.get('last_name')]))

        booking['room_name'] = room['name'] if room else 'Unknown Room'
        booking['room_type'] = room['type'] if room else 'Unknown Type'
        booking['user_name'] = (user or {}).get('display_name') or guest_name or 'Unknown User'
        booking['user_email'] = (user or {}).get('email') or details.get('email') or 'Unknown Email'
        booking['user_phone'] = (user or {}).get('phone') or details.get('phone')

    return bookings


def create_booking(user_id: int, room_id: int, check_in, check_out, guests: int,
                   add_ons: Optional[List[Dict[str, Any]]] = None,
                   special_requests: str = None,
                   guest_details: Optional[Dict[str, Any]] = None) -> int:
    """
    Create a booking and price it.

    Args:
        user_id: Booking guest
        room_id: Booked room
        check_in: Check-in date (date or ISO string)
        check_out: Check-out date (date or ISO string)
        guests: Number of guests
        add_ons: Resolved add-ons [{id, name, price, quantity}]
        special_requests: Free text
        guest_details: {first_name, last_name, email, phone}; defaults
                       from the user's profile

    Returns:
        New booking ID

    Raises:
        ValueError: Unknown/unavailable room, capacity exceeded, or a stay
                    shorter than one night
    """
    room = get_room_by_id(room_id)
    if not room:
        raise ValueError('Room not found')
    if not room['availability']:
        raise ValueError('Room is not available for booking')

    guests = int(guests)
    if guests < 1:
        raise ValueError('At least one guest is required')
    if guests > room['capacity']:
        raise ValueError(f'This room accommodates up to {room["capacity"]} guests')

    total_amount = calculate_booking_total(room['price'], check_in, check_out, add_ons)

    details = dict(guest_details or {})
    if not details.get('email'):
        user = get_user_by_id(user_id) or {}
        name_parts = (user.get('display_name') or '').split(' ', 1)
        details.setdefault('first_name', name_parts[0] or None)
        details.setdefault('last_name', name_parts[1] if len(name_parts) > 1 else None)
        details['email'] = user.get('email')
        details.setdefault('phone', user.get('phone'))

    timestamp = now_iso()
    db = get_db()
    cursor = db.execute('''
        INSERT INTO bookings (user_id, room_id, check_in, check_out, guests, add_ons,
                              total_amount, amount_paid, payment_status, booking_status,
                              special_requests, guest_first_name, guest_last_name,
                              guest_email, guest_phone, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, 0, 'pending', 'pending', ?, ?, ?, ?, ?, ?, ?)
    ''', (
        user_id,
        room_id,
        parse_date(check_in).isoformat(),
        parse_date(check_out).isoformat(),
        guests,
        encode_json(add_ons or []),
        total_amount,
        special_requests,
        details.get('first_name'),
        details.get('last_name'),
        details.get('email'),
        details.get('phone'),
        timestamp,
        timestamp,
    ))
    db.commit()
    return cursor.lastrowid


def update_booking(booking_id: int, data: Dict[str, Any]) -> bool:
    """
    Admin edit of a booking.

    Changing check-in/check-out reprices the stay from the room's current
    nightly price and the booking's add-ons.

    Returns:
        True if updated

    Raises:
        ValueError: For unknown statuses, a negative amount paid or a stay
                    shorter than one night
    """
    booking = get_booking_by_id(booking_id)
    if not booking:
        return False

    values = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
    _validate_statuses(values)

    if 'amount_paid' in values:
        values['amount_paid'] = _validate_amount_paid(values['amount_paid'])

    if 'check_in' in values or 'check_out' in values:
        check_in = values.get('check_in', booking['check_in'])
        check_out = values.get('check_out', booking['check_out'])
        room = get_room_by_id(booking['room_id'])
        price = room['price'] if room else 0
        values['total_amount'] = calculate_booking_total(price, check_in, check_out,
                                                         booking['add_ons'])
        values['check_in'] = parse_date(check_in).isoformat()
        values['check_out'] = parse_date(check_out).isoformat()

    if 'guests' in values:
        values['guests'] = int(values['guests'])
        if values['guests'] < 1:
            raise ValueError('At least one guest is required')

    # total_amount is only ever set by repricing
    updates, params = build_update(EDITABLE_FIELDS + ['total_amount'], values)
    if not updates:
        return False

    updates.append('updated_at = ?')
    params.extend([now_iso(), booking_id])

    db = get_db()
    cursor = db.execute(f'UPDATE bookings SET {", ".join(updates)} WHERE id = ?', params)
    db.commit()
    return cursor.rowcount > 0


def update_booking_status(booking_id: int, status: str) -> bool:
    """Set booking status (any status from any other)."""
    return update_booking(booking_id, {'booking_status': status})


def update_payment_status(booking_id: int, status: str, amount_paid: float = None) -> bool:
    """Set payment status and, optionally, the amount paid so far."""
    values = {'payment_status': status}
    if amount_paid is not None:
        values['amount_paid'] = amount_paid
    return update_booking(booking_id, values)


def delete_booking(booking_id: int) -> bool:
    """Delete a booking."""
    db = get_db()
    cursor = db.execute('DELETE FROM bookings WHERE id = ?', (booking_id,))
    db.commit()
    return cursor.rowcount > 0


def search_bookings(bookings: List[Dict[str, Any]], search: str = None,
                    booking_status: str = None, payment_status: str = None,
                    date_filter: str = None, today: date = None) -> List[Dict[str, Any]]:
    """
    Admin screen filter over bookings enriched by attach_details().

    Args:
        search: Free text over guest name, guest email and room name
        booking_status: Exact booking status
        payment_status: Exact payment status
        date_filter: 'today' (check-in today), 'upcoming' (check-in after
                     today) or 'past' (check-out before today)
        today: Reference date for date_filter
    """
    filtered = list(bookings)

    if search:
        term = search.lower()
        filtered = [b for b in filtered if
                    term in (b.get('user_name') or '').lower() or
                    term in (b.get('user_email') or '').lower() or
                    term in (b.get('room_name') or '').lower()]
    if booking_status:
        filtered = [b for b in filtered if b['booking_status'] == booking_status]
    if payment_status:
        filtered = [b for b in filtered if b['payment_status'] == payment_status]

    if date_filter and today:
        if date_filter == 'today':
            filtered = [b for b in filtered if parse_date(b['check_in']) == today]
        elif date_filter == 'upcoming':
            filtered = [b for b in filtered if parse_date(b['check_in']) > today]
        elif date_filter == 'past':
            filtered = [b for b in filtered if parse_date(b['check_out']) < today]

    return filtered


def split_guest_bookings(bookings: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Split a guest's bookings into current bookings and stay history.

    Returns:
        dict with 'current' and 'history' lists
    """
    current = [b for b in bookings if b['booking_status'] not in HISTORY_STATUSES]
    history = [b for b in bookings if b['booking_status'] in HISTORY_STATUSES]
    return {'current': current, 'history': history}
