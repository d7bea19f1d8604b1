"""
Room gallery model and data access functions.
A room has at most one main image; marking an image as main clears the flag
on the room's other images.
"""

from typing import Any, Dict, List, Optional

from database import get_db
from database.records import row_to_dict, build_update
from models.room import get_rooms_by_ids
from utils.datetime_helpers import now_iso


IMAGE_TYPES = ('main', 'bedroom', 'bathroom', 'amenity', 'view')

BOOL_FIELDS = ('is_main_image',)


def _to_image(row) -> Optional[Dict[str, Any]]:
    return row_to_dict(row, bool_fields=BOOL_FIELDS)


def _clear_main_flag(db, room_id: int, keep_id: int = None) -> None:
    db.execute('''
        UPDATE room_gallery SET is_main_image = 0
        WHERE room_id = ? AND id != COALESCE(?, -1)
    ''', (room_id, keep_id))


def get_all_images() -> List[Dict[str, Any]]:
    """All gallery images, newest first, with room_name resolved."""
    db = get_db()
    rows = db.execute('SELECT * FROM room_gallery ORDER BY uploaded_at DESC, id DESC').fetchall()
    images = [_to_image(row) for row in rows]

    rooms = get_rooms_by_ids(img['room_id'] for img in images)
    for image in images:
        room = rooms.get(image['room_id'])
        image['room_name'] = room['name'] if room else 'Unknown Room'
    return images


def get_image_by_id(image_id: int) -> Optional[Dict[str, Any]]:
    db = get_db()
    row = db.execute('SELECT * FROM room_gallery WHERE id = ?', (image_id,)).fetchone()
    return _to_image(row)


def get_images_for_room(room_id: int) -> List[Dict[str, Any]]:
    """Images of one room, main image first."""
    db = get_db()
    rows = db.execute('''
        SELECT * FROM room_gallery WHERE room_id = ?
        ORDER BY is_main_image DESC, uploaded_at DESC, id DESC
    ''', (room_id,)).fetchall()
    return [_to_image(row) for row in rows]


def add_image(room_id: int, image_url: str, public_id: str = None, title: str = None,
              description: str = None, image_type: str = 'main',
              is_main_image: bool = False) -> int:
    """
    Register an uploaded image in a room's gallery.

    Returns:
        New image ID

    Raises:
        ValueError: Missing URL or invalid image type
    """
    if not image_url:
        raise ValueError('Image URL is required')
    if image_type not in IMAGE_TYPES:
        raise ValueError(f'Invalid image type: {image_type}')

    db = get_db()
    if is_main_image:
        _clear_main_flag(db, room_id)

    cursor = db.execute('''
        INSERT INTO room_gallery (room_id, image_url, public_id, title, description,
                                  image_type, is_main_image, uploaded_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
    ''', (room_id, image_url, public_id, title, description, image_type,
          1 if is_main_image else 0, now_iso()))
    db.commit()
    return cursor.lastrowid


def update_image(image_id: int, data: Dict[str, Any]) -> bool:
    """Edit image metadata (title, description, image_type, room, main flag)."""
    image = get_image_by_id(image_id)
    if not image:
        return False

    values = dict(data)
    if 'image_type' in values and values['image_type'] not in IMAGE_TYPES:
        raise ValueError(f'Invalid image type: {values["image_type"]}')

    updates, params = build_update(['title', 'description', 'image_type', 'room_id',
                                    'is_main_image'],
                                   values, bool_fields=BOOL_FIELDS)
    if not updates:
        return False

    db = get_db()
    if values.get('is_main_image'):
        _clear_main_flag(db, values.get('room_id', image['room_id']), keep_id=image_id)

    params.append(image_id)
    cursor = db.execute(f'UPDATE room_gallery SET {", ".join(updates)} WHERE id = ?', params)
    db.commit()
    return cursor.rowcount > 0


def set_main_image(image_id: int) -> bool:
    """Make this image the room's main image."""
    return update_image(image_id, {'is_main_image': True})


def delete_image(image_id: int) -> bool:
    db = get_db()
    cursor = db.execute('DELETE FROM room_gallery WHERE id = ?', (image_id,))
    db.commit()
    return cursor.rowcount > 0


def search_images(images: List[Dict[str, Any]], search: str = None, image_type: str = None,
                  room_id: int = None) -> List[Dict[str, Any]]:
    """Admin screen filter: free text over title/description/room name, type, room."""
    filtered = list(images)

    if search:
        term = search.lower()
        filtered = [i for i in filtered if
                    term in (i.get('title') or '').lower() or
                    term in (i.get('description') or '').lower() or
                    term in (i.get('room_name') or '').lower()]
    if image_type:
        filtered = [i for i in filtered if i['image_type'] == image_type]
    if room_id:
        filtered = [i for i in filtered if i['room_id'] == room_id]

    return filtered
