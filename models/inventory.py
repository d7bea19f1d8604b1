"""
Inventory model: maintenance records and availability blocks per room.

Scheduling high or urgent maintenance takes the room out of service
(room status 'maintenance'). Nothing checks blocks or maintenance against
existing bookings.
"""

from typing import Any, Dict, List, Optional

from database import get_db
from database.records import row_to_dict, build_update
from models.room import get_room_by_id, get_rooms_by_ids, set_room_status
from utils.datetime_helpers import now_iso, parse_date


MAINTENANCE_TYPES = ('maintenance', 'cleaning', 'repair', 'inspection')
MAINTENANCE_PRIORITIES = ('low', 'medium', 'high', 'urgent')
MAINTENANCE_STATUSES = ('scheduled', 'in-progress', 'completed', 'cancelled')
BLOCK_TYPES = ('maintenance', 'reserved', 'blocked')

# Priorities that take the room out of service when scheduled
OUT_OF_SERVICE_PRIORITIES = ('high', 'urgent')


def _check_choice(value, choices, label):
    if value not in choices:
        raise ValueError(f'Invalid {label}: {value}')


def attach_room_names(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Resolve room_name on maintenance records/blocks with one batch query."""
    rooms = get_rooms_by_ids(r['room_id'] for r in records)
    for record in records:
        room = rooms.get(record['room_id'])
        record['room_name'] = room['name'] if room else 'Unknown Room'
    return records


# =============================================================================
# MAINTENANCE
# =============================================================================

def get_all_maintenance() -> List[Dict[str, Any]]:
    """Maintenance records, most recently scheduled first."""
    db = get_db()
    rows = db.execute('''
        SELECT * FROM maintenance ORDER BY scheduled_date DESC, id DESC
    ''').fetchall()
    return [row_to_dict(row) for row in rows]


def get_maintenance_by_id(record_id: int) -> Optional[Dict[str, Any]]:
    db = get_db()
    row = db.execute('SELECT * FROM maintenance WHERE id = ?', (record_id,)).fetchone()
    return row_to_dict(row)


def schedule_maintenance(data: Dict[str, Any]) -> int:
    """
    Create a maintenance record.

    Args:
        data: room_id, title, type, priority, scheduled_date, description,
              estimated_duration, cost, assigned_to

    Returns:
        New record ID

    Raises:
        ValueError: Unknown room, missing title or invalid enum value
    """
    room_id = data.get('room_id')
    if not room_id or not get_room_by_id(room_id):
        raise ValueError('Room not found')
    if not (data.get('title') or '').strip():
        raise ValueError('Maintenance title is required')

    record_type = data.get('type', 'maintenance')
    priority = data.get('priority', 'medium')
    _check_choice(record_type, MAINTENANCE_TYPES, 'maintenance type')
    _check_choice(priority, MAINTENANCE_PRIORITIES, 'priority')

    scheduled_date = data.get('scheduled_date')
    scheduled_date = parse_date(scheduled_date).isoformat() if scheduled_date else now_iso()[:10]

    db = get_db()
    cursor = db.execute('''
        INSERT INTO maintenance (room_id, type, priority, status, title, description,
                                 scheduled_date, estimated_duration, cost, assigned_to,
                                 created_at)
        VALUES (?, ?, ?, 'scheduled', ?, ?, ?, ?, ?, ?, ?)
    ''', (
        room_id,
        record_type,
        priority,
        data['title'].strip(),
        data.get('description', ''),
        scheduled_date,
        data.get('estimated_duration', 2),
        data.get('cost', 0),
        data.get('assigned_to'),
        now_iso(),
    ))
    db.commit()

    if priority in OUT_OF_SERVICE_PRIORITIES:
        set_room_status(room_id, 'maintenance')

    return cursor.lastrowid


def update_maintenance(record_id: int, data: Dict[str, Any]) -> bool:
    """
    Update a maintenance record. Moving it to 'completed' stamps
    completed_date.
    """
    values = dict(data)
    if 'status' in values:
        _check_choice(values['status'], MAINTENANCE_STATUSES, 'maintenance status')
        if values['status'] == 'completed':
            values['completed_date'] = now_iso()
    if 'priority' in values:
        _check_choice(values['priority'], MAINTENANCE_PRIORITIES, 'priority')
    if 'type' in values:
        _check_choice(values['type'], MAINTENANCE_TYPES, 'maintenance type')

    allowed_fields = ['type', 'priority', 'status', 'title', 'description', 'scheduled_date',
                      'completed_date', 'estimated_duration', 'cost', 'assigned_to']
    updates, params = build_update(allowed_fields, values)
    if not updates:
        return False

    params.append(record_id)
    db = get_db()
    cursor = db.execute(f'UPDATE maintenance SET {", ".join(updates)} WHERE id = ?', params)
    db.commit()
    return cursor.rowcount > 0


def delete_maintenance(record_id: int) -> bool:
    db = get_db()
    cursor = db.execute('DELETE FROM maintenance WHERE id = ?', (record_id,))
    db.commit()
    return cursor.rowcount > 0


def search_maintenance(records: List[Dict[str, Any]], search: str = None,
                       status: str = None, priority: str = None) -> List[Dict[str, Any]]:
    """Admin screen filter: free text over title/room name, status, priority."""
    filtered = list(records)

    if search:
        term = search.lower()
        filtered = [r for r in filtered if
                    term in r['title'].lower() or
                    term in (r.get('room_name') or '').lower()]
    if status:
        filtered = [r for r in filtered if r['status'] == status]
    if priority:
        filtered = [r for r in filtered if r['priority'] == priority]

    return filtered


# =============================================================================
# AVAILABILITY BLOCKS
# =============================================================================

def get_all_blocks() -> List[Dict[str, Any]]:
    db = get_db()
    rows = db.execute('SELECT * FROM availability_blocks ORDER BY start_date DESC, id DESC').fetchall()
    return [row_to_dict(row) for row in rows]


def create_block(data: Dict[str, Any]) -> int:
    """
    Block a room for a date range.

    Raises:
        ValueError: Unknown room, bad type or end date before start date
    """
    room_id = data.get('room_id')
    if not room_id or not get_room_by_id(room_id):
        raise ValueError('Room not found')

    block_type = data.get('type', 'blocked')
    _check_choice(block_type, BLOCK_TYPES, 'block type')

    if not data.get('start_date') or not data.get('end_date'):
        raise ValueError('Start and end dates are required')
    start_date = parse_date(data['start_date'])
    end_date = parse_date(data['end_date'])
    if end_date < start_date:
        raise ValueError('End date must be after start date')

    db = get_db()
    cursor = db.execute('''
        INSERT INTO availability_blocks (room_id, start_date, end_date, reason, type, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
    ''', (room_id, start_date.isoformat(), end_date.isoformat(), data.get('reason', ''),
          block_type, now_iso()))
    db.commit()
    return cursor.lastrowid


def delete_block(block_id: int) -> bool:
    db = get_db()
    cursor = db.execute('DELETE FROM availability_blocks WHERE id = ?', (block_id,))
    db.commit()
    return cursor.rowcount > 0


def get_inventory_stats(rooms: List[Dict[str, Any]], records: List[Dict[str, Any]]) -> Dict[str, int]:
    """Counters for the inventory screen header."""
    return {
        'total_rooms': len(rooms),
        'available_rooms': sum(1 for r in rooms if r['status'] == 'available'),
        'maintenance_rooms': sum(1 for r in rooms if r['status'] == 'maintenance'),
        'pending_maintenance': sum(1 for m in records if m['status'] in ('scheduled', 'in-progress')),
    }
