"""
Tests for authentication and the admin gate.
"""

import pytest

from utils.auth_session import AuthSession, GateState, evaluate_admin_gate

JSON_HEADERS = {'Accept': 'application/json'}


class TestEvaluateAdminGate:
    """Gate decisions from an explicit session object."""

    def test_unresolved_session_is_loading(self):
        assert evaluate_admin_gate(None) is GateState.LOADING
        assert evaluate_admin_gate(AuthSession()) is GateState.LOADING

    def test_admin_is_authorized(self):
        session = AuthSession(resolved=True, user_id=1, email='admin@anandhotels.com', role='admin')
        assert evaluate_admin_gate(session) is GateState.AUTHORIZED

    def test_guest_is_denied(self):
        session = AuthSession(resolved=True, user_id=2, email='guest@anandhotels.com', role='user')
        assert evaluate_admin_gate(session) is GateState.DENIED

    def test_signed_out_is_denied(self):
        assert evaluate_admin_gate(AuthSession(resolved=True)) is GateState.DENIED


class TestAdminGateRoutes:
    """The gate applied to admin routes."""

    def test_signed_out_redirect_flashes_message(self, client):
        response = client.get('/admin/rooms', follow_redirects=True)
        assert response.status_code == 200
        assert b'Please log in to access admin panel' in response.data

    def test_signed_out_json_gets_401(self, client):
        response = client.get('/admin/rooms', headers=JSON_HEADERS)
        assert response.status_code == 401
        assert response.get_json()['error'] == 'Please log in to access admin panel'

    def test_guest_json_gets_403(self, guest_client):
        response = guest_client.get('/admin/rooms', headers=JSON_HEADERS)
        assert response.status_code == 403
        assert response.get_json()['error'] == 'Access denied. Admin privileges required.'

    def test_guest_redirected_with_message(self, guest_client):
        response = guest_client.get('/admin/dashboard', follow_redirects=False)
        assert response.status_code == 302
        assert '/login' in response.headers['Location']

    def test_admin_allowed(self, authenticated_client):
        response = authenticated_client.get('/admin/dashboard')
        assert response.status_code == 200
        assert response.get_json()['success'] is True


class TestLogin:
    """Email/password login."""

    def test_admin_lands_on_back_office(self, client):
        response = client.post('/login', data={
            'email': 'admin@anandhotels.com',
            'password': 'admin123'
        })
        assert response.status_code == 302
        assert '/admin/' in response.headers['Location']

    def test_wrong_password(self, client):
        response = client.post('/login', data={
            'email': 'admin@anandhotels.com',
            'password': 'wrong-password'
        }, follow_redirects=True)
        assert b'Invalid email or password' in response.data

    def test_registration_lands_on_dashboard(self, client):
        response = client.post('/register', data={
            'display_name': 'Arjun Mehta',
            'email': 'arjun.mehta@gmail.com',
            'password': 'secret123',
            'confirm_password': 'secret123'
        })
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/dashboard')

    def test_duplicate_registration_rejected(self, client):
        response = client.post('/register', data={
            'display_name': 'Impostor',
            'email': 'admin@anandhotels.com',
            'password': 'secret123',
            'confirm_password': 'secret123'
        })
        assert response.status_code == 200
        assert b'Email already registered' in response.data

    def test_logout(self, guest_client):
        response = guest_client.get('/logout')
        assert response.status_code == 302
        assert guest_client.get('/dashboard').status_code == 302

    def test_deactivated_account_cannot_log_in(self, app, client):
        from models.user import create_user, deactivate_user

        with app.app_context():
            user_id = create_user('former.guest@gmail.com', 'secret123', display_name='Former')
            deactivate_user(user_id)

        response = client.post('/login', data={
            'email': 'former.guest@gmail.com',
            'password': 'secret123'
        }, follow_redirects=True)
        assert b'This account has been deactivated' in response.data


class TestChangePassword:
    """Password change requires the current password."""

    def test_wrong_current_password(self, guest_client):
        response = guest_client.post('/profile/change-password', data={
            'current_password': 'not-my-password',
            'new_password': 'newsecret1',
            'confirm_password': 'newsecret1'
        })
        assert b'Current password is incorrect' in response.data

    def test_admin_password_api(self, authenticated_client):
        response = authenticated_client.post('/admin/settings/password', json={
            'current_password': 'admin123',
            'new_password': 'admin456',
            'confirm_password': 'admin456'
        })
        assert response.status_code == 200

        response = authenticated_client.post('/admin/settings/password', json={
            'current_password': 'admin123',
            'new_password': 'admin789',
            'confirm_password': 'admin789'
        })
        assert response.status_code == 400
