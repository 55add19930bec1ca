"""
In-memory SessionStore for the Zobot chatbot.

Owns the mapping from session id to Session. Sessions are created lazily on
first use and live for the lifetime of the process.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, Optional

from .models import Role, Session, Turn

logger = logging.getLogger(__name__)


class SessionStore:
    """Thread-safe, process-local session store."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def get_or_create(self, session_id: str) -> Session:
        """Return the session for ``session_id``, creating an empty one if absent."""
        with self._registry_lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = Session(session_id=session_id)
                self._sessions[session_id] = session
                self._locks[session_id] = threading.RLock()
                logger.info(f"Session created: {session_id}")
            return session

    def get(self, session_id: str) -> Optional[Session]:
        """Look up a session without creating it."""
        return self._sessions.get(session_id)

    @contextmanager
    def lock(self, session_id: str) -> Iterator[Session]:
        """
        Hold the per-session lock for a read-modify-write sequence.

        Yields the (possibly newly created) session. Concurrent requests for
        the same id are serialized; different ids never contend.
        """
        session = self.get_or_create(session_id)
        with self._locks[session_id]:
            yield session

    def append_turn(self, session_id: str, role: Role, text: str) -> Turn:
        """Append a turn to the session history."""
        with self.lock(session_id) as session:
            turn = Turn(role=role, content=text)
            session.turns.append(turn)
            session.updated_at = turn.timestamp
            return turn

    def lead_score(self, session_id: str) -> int:
        """Current lead score; unknown sessions score 0."""
        session = self._sessions.get(session_id)
        return session.lead_score if session else 0

    def add_score(self, session_id: str, delta: int) -> int:
        """Add ``delta`` to the session's lead score and return the new total."""
        if delta < 0:
            raise ValueError(f"Lead score delta must be non-negative, got {delta}")
        with self.lock(session_id) as session:
            session.lead_score += delta
            session.updated_at = datetime.utcnow()
            return session.lead_score

    def stats(self) -> Dict[str, int]:
        sessions = list(self._sessions.values())
        return {
            "total_sessions": len(sessions),
            "total_messages": sum(len(s.turns) for s in sessions),
            "total_lead_score": sum(s.lead_score for s in sessions),
        }

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
