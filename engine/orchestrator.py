"""
Chat Orchestrator for the Zobot chatbot.

Runs one chat turn: session lookup, intent dispatch, lead scoring.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from lead_scoring.cumulative_scorer import CumulativeScorer
from lead_scoring.intent_dispatcher import IntentDispatcher
from lead_scoring.intents import ActionType
from sessions.models import Role
from sessions.store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class ChatRequest:
    """Request for one chat turn."""
    session_id: str
    message: str


@dataclass
class ChatResponse:
    """Response for one chat turn."""
    reply_text: str
    session_id: str
    intent: str
    confidence_score: float
    lead_score: int
    score_delta: int = 0
    action: Optional[ActionType] = None
    high_value: bool = False
    processing_time_ms: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat())


class ChatOrchestrator:
    """
    Orchestrates a chat turn.

    The whole read-modify-write on a session runs under that session's
    lock, so concurrent turns for one id cannot lose score increments.
    """

    def __init__(
        self,
        session_store: SessionStore,
        dispatcher: IntentDispatcher,
        scorer: CumulativeScorer,
    ):
        self.session_store = session_store
        self.dispatcher = dispatcher
        self.scorer = scorer

    def process(self, request: ChatRequest) -> ChatResponse:
        """
        Process a user message.

        1. Get or create session  2. Record user turn  3. Dispatch intent
        4. Apply score delta  5. Record bot turn
        """
        start = time.time()
        session_id = request.session_id

        with self.session_store.lock(session_id) as session:
            self.session_store.append_turn(session_id, Role.USER, request.message)

            result = self.dispatcher.dispatch(request.message, session)
            score = self.scorer.apply(session_id, result.score_delta)

            self.session_store.append_turn(session_id, Role.BOT, result.reply_text)

        processing_time = (time.time() - start) * 1000
        logger.info(
            f"[Chat] session={session_id} intent={result.label} "
            f"delta={result.score_delta} score={score.lead_score}"
        )

        return ChatResponse(
            reply_text=result.reply_text,
            session_id=session_id,
            intent=result.label,
            confidence_score=result.confidence,
            lead_score=score.lead_score,
            score_delta=result.score_delta,
            action=result.action,
            high_value=result.is_high_value,
            processing_time_ms=round(processing_time, 2),
        )

    def get_conversation(self, session_id: str) -> List[Dict[str, Any]]:
        """Get conversation history."""
        session = self.session_store.get(session_id)
        if session is None:
            return []
        return [turn.to_dict() for turn in session.turns]
