from .auth import (
    SessionUser,
    current_session_user,
    forget_user,
    login_manager,
    remember_user,
    safe_next_path,
    validate_registration,
)
from .session_messages import consume_messages, peek_messages, push_message

__all__ = [
    'SessionUser',
    'login_manager',
    'current_session_user',
    'remember_user',
    'forget_user',
    'validate_registration',
    'safe_next_path',
    'push_message',
    'peek_messages',
    'consume_messages',
]
