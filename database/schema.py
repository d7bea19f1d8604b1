"""
Database schema definitions.
Table creation, indexes, and structure management.

References between tables (booking -> room, booking -> user, ...) are plain
integer columns without foreign keys: records keep their ids even after the
referenced row is deleted, and readers resolve names at query time.
"""


TABLES = [
    'settings',
    'messages',
    'room_gallery',
    'availability_blocks',
    'maintenance',
    'promotions',
    'bookings',
    'rooms',
    'users',
]


def drop_tables(db):
    """Drop all existing tables."""
    for table in TABLES:
        db.execute(f'DROP TABLE IF EXISTS {table}')


def create_tables(db):
    """Create all database tables."""

    # 1. Users & guest profiles
    db.execute('''
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            display_name TEXT,
            role TEXT NOT NULL DEFAULT 'user',
            photo_url TEXT,
            phone TEXT,
            address TEXT,
            date_of_birth TEXT,
            nationality TEXT,
            preferences TEXT DEFAULT '{}',
            loyalty_status TEXT DEFAULT 'bronze',
            is_vip INTEGER DEFAULT 0,
            notes TEXT,
            total_bookings INTEGER DEFAULT 0,
            total_spent REAL DEFAULT 0,
            last_stay_date TEXT,
            active INTEGER DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            last_login TEXT
        )
    ''')

    # 2. Rooms
    db.execute('''
        CREATE TABLE rooms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            type TEXT NOT NULL,
            description TEXT,
            price REAL NOT NULL DEFAULT 0,
            capacity INTEGER NOT NULL DEFAULT 1,
            size REAL DEFAULT 0,
            images TEXT DEFAULT '[]',
            amenities TEXT DEFAULT '[]',
            availability INTEGER DEFAULT 1,
            status TEXT DEFAULT 'available',
            bed_type TEXT,
            bathrooms INTEGER DEFAULT 1,
            has_balcony INTEGER DEFAULT 0,
            has_ocean_view INTEGER DEFAULT 0,
            has_kitchen INTEGER DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    ''')

    # 3. Bookings
    db.execute('''
        CREATE TABLE bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER,
            room_id INTEGER,
            check_in TEXT NOT NULL,
            check_out TEXT NOT NULL,
            guests INTEGER NOT NULL DEFAULT 1,
            add_ons TEXT DEFAULT '[]',
            total_amount REAL NOT NULL DEFAULT 0,
            amount_paid REAL DEFAULT 0,
            payment_status TEXT DEFAULT 'pending',
            booking_status TEXT DEFAULT 'pending',
            special_requests TEXT,
            guest_first_name TEXT,
            guest_last_name TEXT,
            guest_email TEXT,
            guest_phone TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    ''')

    # 4. Promotions / offers
    db.execute('''
        CREATE TABLE promotions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT,
            promo_code TEXT,
            discount_type TEXT NOT NULL DEFAULT 'percentage',
            discount_value REAL NOT NULL DEFAULT 0,
            minimum_spend REAL DEFAULT 0,
            maximum_discount REAL DEFAULT 0,
            valid_from TEXT,
            valid_to TEXT,
            is_active INTEGER DEFAULT 1,
            image_url TEXT,
            usage_limit INTEGER DEFAULT 0,
            used_count INTEGER DEFAULT 0,
            applicable_room_types TEXT DEFAULT '[]',
            terms TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    ''')

    # 5. Inventory
    db.execute('''
        CREATE TABLE maintenance (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            room_id INTEGER,
            type TEXT NOT NULL DEFAULT 'maintenance',
            priority TEXT NOT NULL DEFAULT 'medium',
            status TEXT NOT NULL DEFAULT 'scheduled',
            title TEXT NOT NULL,
            description TEXT,
            scheduled_date TEXT,
            completed_date TEXT,
            estimated_duration REAL DEFAULT 2,
            cost REAL DEFAULT 0,
            assigned_to TEXT,
            created_at TEXT NOT NULL
        )
    ''')

    db.execute('''
        CREATE TABLE availability_blocks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            room_id INTEGER,
            start_date TEXT NOT NULL,
            end_date TEXT NOT NULL,
            reason TEXT,
            type TEXT NOT NULL DEFAULT 'blocked',
            created_at TEXT NOT NULL
        )
    ''')

    # 6. Gallery
    db.execute('''
        CREATE TABLE room_gallery (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            room_id INTEGER,
            image_url TEXT NOT NULL,
            public_id TEXT,
            title TEXT,
            description TEXT,
            image_type TEXT NOT NULL DEFAULT 'main',
            is_main_image INTEGER DEFAULT 0,
            uploaded_at TEXT NOT NULL
        )
    ''')

    # 7. Contact messages
    db.execute('''
        CREATE TABLE messages (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT,
            subject TEXT,
            message TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'unread',
            priority TEXT NOT NULL DEFAULT 'medium',
            is_starred INTEGER DEFAULT 0,
            reply TEXT,
            created_at TEXT NOT NULL,
            read_at TEXT,
            replied_at TEXT
        )
    ''')

    # 8. Settings documents
    db.execute('''
        CREATE TABLE settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL DEFAULT '{}',
            updated_at TEXT NOT NULL
        )
    ''')


def create_indexes(db):
    """Create indexes for the columns screens filter and join on."""
    db.execute('CREATE INDEX idx_bookings_user ON bookings(user_id)')
    db.execute('CREATE INDEX idx_bookings_room ON bookings(room_id)')
    db.execute('CREATE INDEX idx_bookings_created ON bookings(created_at)')
    db.execute('CREATE INDEX idx_users_role ON users(role)')
    db.execute('CREATE INDEX idx_gallery_room ON room_gallery(room_id)')
    db.execute('CREATE INDEX idx_maintenance_room ON maintenance(room_id)')
    db.execute('CREATE INDEX idx_blocks_room ON availability_blocks(room_id)')
    db.execute('CREATE UNIQUE INDEX idx_promotions_code ON promotions(upper(promo_code))')
