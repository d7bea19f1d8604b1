"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
import tempfile

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'anand_hotels_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH

ADMIN_EMAIL = 'admin@anandhotels.com'
ADMIN_PASSWORD = 'admin123'
GUEST_EMAIL = 'priya.sharma@gmail.com'
GUEST_PASSWORD = 'guest123'


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    # Ensure test database path is set
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'

    yield

    # Cleanup: remove test database after all tests
    for path in (TEST_DB_PATH, TEST_DB_PATH + '-wal', TEST_DB_PATH + '-shm'):
        if os.path.exists(path):
            try:
                os.remove(path)
            except PermissionError:
                pass  # Windows may have file locked


@pytest.fixture
def app(tmp_path):
    """Create test application with isolated database."""
    from app import create_app
    from database import init_db

    # Ensure test database path
    os.environ['DATABASE_PATH'] = TEST_DB_PATH

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = TEST_DB_PATH
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')

    # Requests get their own app context (and flask.g) per call
    with app.app_context():
        init_db()

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def authenticated_client(app, client):
    """Create test client logged in as the seeded administrator."""
    client.post('/login', data={
        'email': ADMIN_EMAIL,
        'password': ADMIN_PASSWORD
    }, follow_redirects=False)
    return client


@pytest.fixture
def guest_client(app):
    """Create a second test client logged in as a freshly registered guest."""
    client = app.test_client()
    client.post('/register', data={
        'display_name': 'Test Guest',
        'email': GUEST_EMAIL,
        'password': GUEST_PASSWORD,
        'confirm_password': GUEST_PASSWORD
    }, follow_redirects=False)
    return client


@pytest.fixture
def guest_id(app, guest_client):
    """ID of the guest behind guest_client."""
    from models.user import get_user_by_email

    with app.app_context():
        return get_user_by_email(GUEST_EMAIL)['id']
