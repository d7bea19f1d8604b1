"""
Route tests.
Tests that routes are reachable and protected as expected.
"""

import pytest


def test_public_routes(client):
    """Test public routes (no authentication required)."""
    assert client.get('/').status_code == 200
    assert client.get('/about').status_code == 200
    assert client.get('/login').status_code == 200
    assert client.get('/register').status_code == 200
    assert client.get('/rooms').status_code == 200
    assert client.get('/offers').status_code == 200
    assert client.get('/add-ons').status_code == 200


def test_health_check(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'ok'


def test_protected_routes_redirect_to_login(client):
    """Signed-out visitors are sent to the login page."""
    protected_routes = [
        '/dashboard',
        '/profile',
        '/admin/dashboard',
        '/admin/rooms',
        '/admin/bookings',
        '/admin/analytics',
    ]

    for route in protected_routes:
        response = client.get(route, follow_redirects=False)
        assert response.status_code == 302, f"{route} should be protected"
        assert '/login' in response.headers['Location']


def test_not_found_html_and_json(client):
    """Unknown pages render HTML, unknown API paths answer JSON."""
    response = client.get('/no-such-page')
    assert response.status_code == 404
    assert b'404' in response.data

    response = client.get('/api/no-such-endpoint')
    assert response.status_code == 404
    assert response.get_json()['success'] is False


def test_profile_pages_for_guest(guest_client):
    assert guest_client.get('/profile').status_code == 200
    assert guest_client.get('/profile/edit').status_code == 200
    assert guest_client.get('/profile/change-password').status_code == 200
