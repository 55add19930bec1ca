"""
Cumulative Lead Scorer for the Zobot chatbot.

Adds each dispatch's score delta to the session's running lead score and
keeps the per-session delta history.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List

from sessions.store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class CumulativeScoreResult:
    """Result of applying one score delta."""
    delta: int
    lead_score: int
    message_count: int


class CumulativeScorer:
    """
    Running lead score per session.

    score' = score + delta. No cap, no decay, and deltas are never negative,
    so a session's score only grows.
    """

    def __init__(self, session_store: SessionStore):
        self.session_store = session_store
        # Per-session state: {session_id: [delta1, delta2, ...]}
        self._history: Dict[str, List[int]] = defaultdict(list)

    def apply(self, session_id: str, delta: int) -> CumulativeScoreResult:
        """
        Add a delta to the session's lead score.

        Raises:
            ValueError: If delta is negative
        """
        total = self.session_store.add_score(session_id, delta)
        deltas = self._history[session_id]
        deltas.append(delta)

        if delta:
            logger.debug(f"Lead score {session_id}: +{delta} -> {total}")

        return CumulativeScoreResult(
            delta=delta,
            lead_score=total,
            message_count=len(deltas),
        )

    def get_score(self, session_id: str) -> int:
        """Get the current lead score for a session."""
        return self.session_store.lead_score(session_id)

    def get_history(self, session_id: str) -> List[int]:
        """Deltas applied to a session, oldest first."""
        return list(self._history.get(session_id, []))
