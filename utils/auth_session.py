"""
Per-request authentication state and the admin gate.

An AuthSession is built from the Flask-Login user at the start of every
request (see app.register_request_hooks) and stored on flask.g. The admin
gate only looks at this object.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from flask import g


class GateState(Enum):
    LOADING = 'loading'
    AUTHORIZED = 'authorized'
    DENIED = 'denied'


@dataclass(frozen=True)
class AuthSession:
    """Who is making the request, as far as the admin gate cares."""
    resolved: bool = False
    user_id: Optional[int] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == 'admin'

    @classmethod
    def from_user(cls, user) -> 'AuthSession':
        """Build a resolved session from a Flask-Login user (or anonymous user)."""
        if user is None or not getattr(user, 'is_authenticated', False):
            return cls(resolved=True)
        return cls(resolved=True, user_id=int(user.get_id()),
                   email=user.email, role=user.role)


def evaluate_admin_gate(session: Optional[AuthSession]) -> GateState:
    """
    Gate decision for admin routes.

    Returns:
        LOADING while the session is unresolved, AUTHORIZED for signed-in
        admins, DENIED otherwise
    """
    if session is None or not session.resolved:
        return GateState.LOADING
    if session.is_admin:
        return GateState.AUTHORIZED
    return GateState.DENIED


def get_auth_session() -> AuthSession:
    """The current request's AuthSession (unresolved when none was built)."""
    return g.get('auth') or AuthSession()
