"""
Database tests.
Tests database initialization and seed data.
"""

import pytest
from database import get_db


def test_database_tables(app):
    """Test that all required tables exist."""
    with app.app_context():
        db = get_db()
        cursor = db.cursor()

        cursor.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
        tables = [row[0] for row in cursor.fetchall()]

        required_tables = [
            'users', 'rooms', 'bookings', 'promotions', 'maintenance',
            'availability_blocks', 'room_gallery', 'messages', 'settings'
        ]

        for table in required_tables:
            assert table in tables, f"Table {table} should exist"


def test_seed_data(app):
    """Test that seed data was created correctly."""
    from models.room import get_all_rooms
    from models.user import get_all_users

    with app.app_context():
        admins = get_all_users(role='admin')
        assert [a['email'] for a in admins] == ['admin@anandhotels.com']

        rooms = get_all_rooms()
        assert len(rooms) == 5
        assert all(room['availability'] for room in rooms)
        assert {'Deluxe King Room', 'Presidential Villa'} <= {room['name'] for room in rooms}


def test_seed_settings(app):
    """Hotel and notification settings documents exist with defaults."""
    from models.settings import get_hotel_settings, get_notification_settings

    with app.app_context():
        assert get_hotel_settings()['name'] == 'Anand Hotels'
        assert get_notification_settings()['email_bookings'] is True


def test_room_record_shape(app):
    """Rooms decode JSON columns and nest their features."""
    from models.room import get_room_by_id

    with app.app_context():
        room = get_room_by_id(2)
        assert isinstance(room['amenities'], list)
        assert room['images'] == []
        assert room['features']['has_ocean_view'] is True
