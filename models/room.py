"""
Room model and data access functions.
Handles room catalog queries, CRUD operations, and catalog filtering.
"""

from typing import Any, Dict, List, Optional

from database import get_db
from database.records import row_to_dict, build_update, encode_json
from utils.datetime_helpers import now_iso


ROOM_STATUSES = ('available', 'occupied', 'maintenance', 'cleaning')

JSON_FIELDS = {'images': [], 'amenities': []}
BOOL_FIELDS = ('availability', 'has_balcony', 'has_ocean_view', 'has_kitchen')
FEATURE_FIELDS = ('bed_type', 'bathrooms', 'has_balcony', 'has_ocean_view', 'has_kitchen')

UPDATABLE_FIELDS = [
    'name', 'type', 'description', 'price', 'capacity', 'size', 'images',
    'amenities', 'availability', 'status',
    'bed_type', 'bathrooms', 'has_balcony', 'has_ocean_view', 'has_kitchen',
]


def _to_room(row) -> Optional[Dict[str, Any]]:
    """Decode a room row and nest its feature columns."""
    room = row_to_dict(row, JSON_FIELDS, BOOL_FIELDS)
    if room is None:
        return None
    room['features'] = {field: room.pop(field) for field in FEATURE_FIELDS}
    return room


def _flatten_features(data: dict) -> dict:
    """Lift a nested 'features' sub-record into top-level columns."""
    values = dict(data)
    features = values.pop('features', None) or {}
    for field in FEATURE_FIELDS:
        if field in features:
            values[field] = features[field]
    return values


def _validate_room(values: dict, partial: bool = False) -> None:
    """Raise ValueError for values the rooms table cannot hold."""
    if not partial or 'name' in values:
        if not str(values.get('name') or '').strip():
            raise ValueError('Room name is required')
    if not partial or 'type' in values:
        if not str(values.get('type') or '').strip():
            raise ValueError('Room type is required')
    if 'price' in values and float(values['price']) < 0:
        raise ValueError('Price cannot be negative')
    if 'capacity' in values and int(values['capacity']) < 1:
        raise ValueError('Capacity must be at least 1')
    if 'status' in values and values['status'] not in ROOM_STATUSES:
        raise ValueError(f'Invalid room status: {values["status"]}')


def get_all_rooms() -> List[Dict[str, Any]]:
    """
    Get all rooms, newest first.

    Returns:
        List of room dicts with decoded images/amenities and nested features
    """
    db = get_db()
    rows = db.execute('SELECT * FROM rooms ORDER BY created_at DESC, id DESC').fetchall()
    return [_to_room(row) for row in rows]


def get_room_by_id(room_id: int) -> Optional[Dict[str, Any]]:
    """Get room by ID, or None if not found."""
    db = get_db()
    row = db.execute('SELECT * FROM rooms WHERE id = ?', (room_id,)).fetchone()
    return _to_room(row)


def get_rooms_by_ids(room_ids) -> Dict[int, Dict[str, Any]]:
    """
    Batch-load rooms for a set of ids.

    Returns:
        Mapping of room id -> room dict (missing ids are absent)
    """
    ids = sorted({rid for rid in room_ids if rid is not None})
    if not ids:
        return {}

    placeholders = ','.join('?' * len(ids))
    db = get_db()
    rows = db.execute(f'SELECT * FROM rooms WHERE id IN ({placeholders})', ids).fetchall()
    return {row['id']: _to_room(row) for row in rows}


def get_room_types() -> List[str]:
    """Distinct room types, alphabetically."""
    db = get_db()
    rows = db.execute('SELECT DISTINCT type FROM rooms ORDER BY type').fetchall()
    return [row['type'] for row in rows]


def create_room(data: Dict[str, Any]) -> int:
    """
    Create a room.

    Args:
        data: Room fields; features may be nested under 'features'

    Returns:
        New room ID

    Raises:
        ValueError: If required fields are missing or invalid
    """
    values = _flatten_features(data)
    _validate_room(values)

    timestamp = now_iso()
    db = get_db()
    cursor = db.execute('''
        INSERT INTO rooms (name, type, description, price, capacity, size, images, amenities,
                           availability, status, bed_type, bathrooms, has_balcony,
                           has_ocean_view, has_kitchen, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    ''', (
        values['name'].strip(),
        values['type'].strip(),
        values.get('description', ''),
        values.get('price', 0),
        values.get('capacity', 1),
        values.get('size', 0),
        encode_json(values.get('images') or []),
        encode_json(values.get('amenities') or []),
        1 if values.get('availability', True) else 0,
        values.get('status', 'available'),
        values.get('bed_type'),
        values.get('bathrooms', 1),
        1 if values.get('has_balcony') else 0,
        1 if values.get('has_ocean_view') else 0,
        1 if values.get('has_kitchen') else 0,
        timestamp,
        timestamp,
    ))
    db.commit()
    return cursor.lastrowid


def update_room(room_id: int, data: Dict[str, Any]) -> bool:
    """
    Update room fields (last write wins).

    Returns:
        True if a row was updated
    """
    values = _flatten_features(data)
    _validate_room(values, partial=True)

    updates, params = build_update(UPDATABLE_FIELDS, values,
                                   json_fields=('images', 'amenities'),
                                   bool_fields=BOOL_FIELDS)
    if not updates:
        return False

    updates.append('updated_at = ?')
    params.extend([now_iso(), room_id])

    db = get_db()
    cursor = db.execute(f'UPDATE rooms SET {", ".join(updates)} WHERE id = ?', params)
    db.commit()
    return cursor.rowcount > 0


def set_room_status(room_id: int, status: str) -> bool:
    """Set the housekeeping/inventory status of a room."""
    return update_room(room_id, {'status': status})


def delete_room(room_id: int) -> bool:
    """
    Delete a room. Bookings keep their room_id reference.

    Returns:
        True if deleted
    """
    db = get_db()
    cursor = db.execute('DELETE FROM rooms WHERE id = ?', (room_id,))
    db.commit()
    return cursor.rowcount > 0


def filter_rooms(rooms: List[Dict[str, Any]], room_type: str = None, guests: int = None,
                 min_price: float = None, max_price: float = None,
                 check_in=None, check_out=None) -> List[Dict[str, Any]]:
    """
    Public catalog filter.

    Args:
        rooms: Rooms to filter
        room_type: Exact room type match
        guests: Minimum capacity
        min_price: Lowest nightly price
        max_price: Highest nightly price
        check_in: When given together with check_out, only rooms flagged
                  available are kept
        check_out: See check_in

    Returns:
        Filtered list, input order preserved
    """
    filtered = list(rooms)

    if room_type:
        filtered = [r for r in filtered if r['type'] == room_type]
    if guests:
        filtered = [r for r in filtered if r['capacity'] >= guests]
    if min_price is not None:
        filtered = [r for r in filtered if r['price'] >= min_price]
    if max_price is not None:
        filtered = [r for r in filtered if r['price'] <= max_price]
    if check_in and check_out:
        filtered = [r for r in filtered if r['availability']]

    return filtered


def search_rooms(rooms: List[Dict[str, Any]], search: str = None, room_type: str = None,
                 availability: str = None) -> List[Dict[str, Any]]:
    """
    Admin screen filter: free text over name/type/description, type, availability.

    Args:
        availability: 'available' or 'unavailable'
    """
    filtered = list(rooms)

    if search:
        term = search.lower()
        filtered = [r for r in filtered if
                    term in r['name'].lower() or
                    term in r['type'].lower() or
                    term in (r.get('description') or '').lower()]
    if room_type:
        filtered = [r for r in filtered if r['type'] == room_type]
    if availability == 'available':
        filtered = [r for r in filtered if r['availability']]
    elif availability == 'unavailable':
        filtered = [r for r in filtered if not r['availability']]

    return filtered
