"""
Module Name: auth.py
Description:
    Flask-Login integration and session helpers. The session carries a
    minimal user projection ({"id", "username"}) so templates and the login
    manager never need a database round-trip to identify the visitor.

Location:
    /auth/auth.py
"""

from typing import Any, Dict, Optional, Tuple

from flask import redirect, request, session, url_for
from flask_login import LoginManager, UserMixin, login_user, logout_user

from utils.logger import get_module_logger

from .session_messages import push_message

logger = get_module_logger("Auth")

SESSION_USER_KEY = 'user'

login_manager = LoginManager()
login_manager.login_view = 'auth.login'


class SessionUser(UserMixin):
    """Logged-in user as remembered in the session."""

    def __init__(self, user_id: str, username: str):
        self.id = user_id
        self.username = username

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'SessionUser':
        return cls(str(record['_id']), record['username'])

    def to_session(self) -> Dict[str, str]:
        return {'id': self.id, 'username': self.username}


@login_manager.user_loader
def load_user(user_id: str) -> Optional[SessionUser]:
    projection = session.get(SESSION_USER_KEY)
    if not projection or projection.get('id') != user_id:
        return None
    return SessionUser(projection['id'], projection['username'])


@login_manager.unauthorized_handler
def handle_unauthorized():
    push_message('error', 'Please log in to continue')
    return redirect(url_for('auth.login', next=request.full_path.rstrip('?')))


def current_session_user() -> Optional[Dict[str, str]]:
    """The session's user projection, or None for anonymous visitors."""
    return session.get(SESSION_USER_KEY)


def remember_user(record: Dict[str, Any]) -> SessionUser:
    """Log a user record in and store its projection in the session."""
    user = SessionUser.from_record(record)
    session.permanent = True
    session[SESSION_USER_KEY] = user.to_session()
    login_user(user)
    return user


def forget_user() -> None:
    logout_user()
    session.pop(SESSION_USER_KEY, None)


def validate_registration(username: str, email: str, password: str, confirm_password: str) -> Tuple[bool, str]:
    """Check registration form fields; returns (valid, error message)."""
    if not username or not 3 <= len(username) <= 30:
        return False, 'Username must be between 3 and 30 characters'
    if not username.replace('_', '').isalnum() or not username.isascii():
        return False, 'Username may only contain letters, numbers and underscores'
    if not email or '@' not in email or email.startswith('@') or email.endswith('@'):
        return False, 'Please provide a valid email address'
    if not password or len(password) < 6:
        return False, 'Password must be at least 6 characters'
    if password != confirm_password:
        return False, 'Passwords do not match'
    return True, ''


def safe_next_path(next_page: Optional[str]) -> Optional[str]:
    """Only allow same-site relative redirects."""
    if next_page and next_page.startswith('/') and not next_page.startswith('//'):
        return next_page
    return None
