"""
One-shot flash messages kept in the session under ``messages`` as a mapping
of kind to text, e.g. ``{"success": "Welcome back"}``. A message is shown
on the next rendered page and then removed.
"""

from typing import Dict, Optional

from flask import session

MESSAGES_KEY = 'messages'


def push_message(kind: str, text: str) -> None:
    messages = dict(session.get(MESSAGES_KEY) or {})
    messages[kind] = text
    session[MESSAGES_KEY] = messages


def peek_messages() -> Optional[Dict[str, str]]:
    return session.get(MESSAGES_KEY)


def consume_messages() -> Optional[Dict[str, str]]:
    """Read and clear the pending messages."""
    return session.pop(MESSAGES_KEY, None)
