"""
Session Module for the Zobot chatbot.

Per-conversation state (history, context flags, lead score) held in memory
for the lifetime of the process.
"""

from .models import Role, Session, SessionContext, Turn
from .store import SessionStore

__all__ = [
    "Role",
    "Session",
    "SessionContext",
    "Turn",
    "SessionStore",
]
