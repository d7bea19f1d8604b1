"""
Route decorators for authentication and authorization.
Provides the admin gate for back-office routes.
"""

from functools import wraps

from flask import flash, redirect, request, url_for
from flask_login import login_required

from utils.api_response import api_error
from utils.auth_session import AuthSession, GateState, evaluate_admin_gate, get_auth_session
from utils.messages import get_message


def wants_json() -> bool:
    """True for API-style requests that should get JSON instead of a redirect."""
    if request.is_json:
        return True
    best = request.accept_mimetypes.best_match(['application/json', 'text/html'])
    return best == 'application/json' and \
        request.accept_mimetypes[best] > request.accept_mimetypes['text/html']


def admin_required(func):
    """
    Decorator that only lets signed-in admins through.

    Usage:
        @bp.route('/rooms')
        @admin_required
        def list_rooms():
            ...

    Signed-out requests are sent to the login page with
    "Please log in to access admin panel"; signed-in non-admins with
    "Access denied. Admin privileges required.". JSON requests get
    401/403 with the same message.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        session = get_auth_session()
        state = evaluate_admin_gate(session)

        if state is GateState.LOADING:
            # Request hooks did not run (e.g. a bare test request context)
            from flask_login import current_user
            session = AuthSession.from_user(current_user)
            state = evaluate_admin_gate(session)

        if state is GateState.AUTHORIZED:
            return func(*args, **kwargs)

        if session.is_authenticated:
            message, status = get_message('admin_required'), 403
        else:
            message, status = get_message('login_required_admin'), 401

        if wants_json():
            return api_error(message, status)

        flash(message, 'error')
        return redirect(url_for('auth.login', next=request.full_path))
    return wrapper


# Re-export login_required for convenience
__all__ = ['login_required', 'admin_required', 'wants_json']
