"""
Session data structures for the Zobot chatbot.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class Role(str, Enum):
    """Author of a conversation turn."""
    USER = "user"
    BOT = "bot"


# Context flag names carried across turns
LAST_INTENT = "lastIntent"
PRODUCTS_SHOWN = "productsShown"
UPLOAD_REQUESTED = "uploadRequested"


@dataclass
class Turn:
    """A single message in a session."""
    role: Role
    content: str
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class SessionContext:
    """Named flags remembered between turns."""
    last_intent: Optional[str] = None
    products_shown: bool = False
    upload_requested: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            LAST_INTENT: self.last_intent,
            PRODUCTS_SHOWN: self.products_shown,
            UPLOAD_REQUESTED: self.upload_requested,
        }


@dataclass
class Session:
    """Per-conversation state keyed by a client-supplied identifier."""
    session_id: str
    turns: List[Turn] = field(default_factory=list)
    context: SessionContext = field(default_factory=SessionContext)
    lead_score: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def user_turn_count(self) -> int:
        return sum(1 for turn in self.turns if turn.role == Role.USER)
