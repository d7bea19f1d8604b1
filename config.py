"""
Flask application configuration classes.
Provides configuration for development, production, and testing environments.
"""

import os
from datetime import timedelta


class Config:
    """Base configuration class with common settings."""

    # Secret key for session management and CSRF protection
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or 'instance/anand_hotels.db'

    # Security settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600  # CSRF token expires after 1 hour
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False  # Set to True in production with HTTPS
    PERMANENT_SESSION_LIFETIME = timedelta(
        hours=int(os.environ.get('SESSION_TIMEOUT_HOURS', 8))
    )

    # Image uploads
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or 'static/uploads'
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))  # 16MB
    ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

    # 'local' stores files under UPLOAD_FOLDER, 'cloudinary' posts them to the CDN
    IMAGE_STORAGE = os.environ.get('IMAGE_STORAGE', 'local')
    CLOUDINARY_CLOUD_NAME = os.environ.get('CLOUDINARY_CLOUD_NAME', '')
    CLOUDINARY_UPLOAD_PRESET = os.environ.get('CLOUDINARY_UPLOAD_PRESET', '')
    IMAGE_UPLOAD_TIMEOUT = int(os.environ.get('IMAGE_UPLOAD_TIMEOUT', 30))  # seconds
    IMAGE_UPLOAD_WORKERS = int(os.environ.get('IMAGE_UPLOAD_WORKERS', 4))

    # Locale
    TIMEZONE = os.environ.get('TIMEZONE', 'Asia/Kolkata')
    CURRENCY = os.environ.get('CURRENCY', 'INR')

    # Add-ons offered on the booking form
    BOOKING_ADD_ONS = [
        {'id': '1', 'name': 'Continental Breakfast', 'price': 25},
        {'id': '2', 'name': 'Spa Package', 'price': 75},
        {'id': '3', 'name': 'Airport Transfer', 'price': 50},
        {'id': '4', 'name': 'Late Checkout', 'price': 30},
    ]

    # Loyalty tiers by cumulative paid spend, highest threshold first
    LOYALTY_TIERS = [
        ('platinum', 100000),
        ('gold', 50000),
        ('silver', 20000),
        ('bronze', 0),
    ]

    # Dashboard occupancy = bookings / (rooms * OCCUPANCY_WINDOW_DAYS)
    OCCUPANCY_WINDOW_DAYS = 30

    ANALYTICS_DEFAULT_RANGE = '6months'

    # Application settings
    APP_NAME = 'Anand Hotels'
    APP_VERSION = '1.0.0'


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    TESTING = False
    TEMPLATES_AUTO_RELOAD = True
    SESSION_COOKIE_SECURE = False
    WTF_CSRF_SSL_STRICT = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'true').lower() == 'true'
    WTF_CSRF_SSL_STRICT = SESSION_COOKIE_SECURE

    SECRET_KEY = os.environ.get('SECRET_KEY') or Config.SECRET_KEY
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or Config.DATABASE_PATH

    # URL scheme preference (follows SESSION_COOKIE_SECURE setting)
    PREFERRED_URL_SCHEME = 'https' if SESSION_COOKIE_SECURE else 'http'

    @classmethod
    def validate(cls) -> None:
        """Validate that required production environment variables are set."""
        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if len(secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production")
        if not os.environ.get('DATABASE_PATH'):
            raise ValueError("DATABASE_PATH environment variable must be set in production")
        if os.environ.get('IMAGE_STORAGE') == 'cloudinary':
            if not os.environ.get('CLOUDINARY_CLOUD_NAME') or not os.environ.get('CLOUDINARY_UPLOAD_PRESET'):
                raise ValueError("CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET must be set "
                                 "when IMAGE_STORAGE is 'cloudinary'")


class TestConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False  # Disable CSRF for tests
    DATABASE_PATH = os.environ.get('DATABASE_PATH', ':memory:')
    SECRET_KEY = 'test-secret-key'
    IMAGE_STORAGE = 'local'


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
