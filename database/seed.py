"""
Database seed data.
Initial data population for fresh database installations.
"""

import json
from werkzeug.security import generate_password_hash

from utils.datetime_helpers import now_iso


DEFAULT_HOTEL_SETTINGS = {
    'name': 'Anand Hotels',
    'description': '',
    'address': '',
    'phone': '',
    'email': '',
    'website': '',
    'logo': '',
    'currency': 'INR',
    'timezone': 'Asia/Kolkata',
    'check_in_time': '14:00',
    'check_out_time': '11:00',
    'tax_rate': 18,
    'service_fee': 10,
    'cancellation_policy': '',
    'terms_and_conditions': '',
}

DEFAULT_NOTIFICATION_SETTINGS = {
    'email_bookings': True,
    'email_payments': True,
    'email_guests': True,
    'email_promotions': False,
    'sms_bookings': True,
    'sms_payments': True,
    'push_notifications': True,
}


def seed_database(db):
    """Insert initial seed data."""
    timestamp = now_iso()

    # 1. Administrator account
    db.execute('''
        INSERT INTO users (email, password_hash, display_name, role, created_at, updated_at)
        VALUES (?, ?, ?, 'admin', ?, ?)
    ''', ('admin@anandhotels.com', generate_password_hash('admin123'), 'Administrator',
          timestamp, timestamp))

    # 2. Rooms
    rooms_data = [
        ('Deluxe King Room', 'Deluxe Room', 'Spacious room with a king bed and city view.',
         150, 2, 35, ['WiFi', 'Air Conditioning', 'Mini Bar'], 'King', 1, 0, 0, 0),
        ('Ocean View Suite', 'Ocean Suite', 'Suite with private balcony facing the sea.',
         320, 3, 60, ['WiFi', 'Jacuzzi', 'Room Service'], 'King', 2, 1, 1, 0),
        ('Presidential Villa', 'Presidential Villa', 'Two-storey villa with kitchen and pool.',
         900, 6, 180, ['WiFi', 'Private Pool', 'Butler Service'], 'King', 3, 1, 1, 1),
        ('Business Executive', 'Business Executive', 'Quiet room with a work desk and lounge access.',
         210, 2, 40, ['WiFi', 'Work Desk', 'Lounge Access'], 'Queen', 1, 0, 0, 0),
        ('Family Suite', 'Family Suite', 'Connected rooms for families of up to five.',
         380, 5, 85, ['WiFi', 'Kids Corner', 'Kitchenette'], 'Twin', 2, 1, 0, 1),
    ]

    for (name, room_type, description, price, capacity, size, amenities,
         bed_type, bathrooms, balcony, ocean_view, kitchen) in rooms_data:
        db.execute('''
            INSERT INTO rooms (name, type, description, price, capacity, size, images, amenities,
                               bed_type, bathrooms, has_balcony, has_ocean_view, has_kitchen,
                               created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, '[]', ?, ?, ?, ?, ?, ?, ?, ?)
        ''', (name, room_type, description, price, capacity, size, json.dumps(amenities),
              bed_type, bathrooms, balcony, ocean_view, kitchen, timestamp, timestamp))

    # 3. Settings documents
    for key, value in (('hotel', DEFAULT_HOTEL_SETTINGS),
                       ('notifications', DEFAULT_NOTIFICATION_SETTINGS)):
        db.execute('''
            INSERT INTO settings (key, value, updated_at) VALUES (?, ?, ?)
        ''', (key, json.dumps(value), timestamp))
