"""
Chat API Routes for the Zobot chatbot.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, BackgroundTasks
from pydantic import BaseModel, ConfigDict, Field, field_validator

from lead_scoring.intents import ActionType

from ..services import get_services
from engine.orchestrator import ChatRequest as OrchestratorRequest

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Request / Response Models ─────────────────────────────────────

class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_message: str = Field(..., alias="userMessage", min_length=1, max_length=2000)
    session_id: str = Field(..., alias="sessionId", min_length=1, max_length=200)

    @field_validator("user_message", "session_id")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ChatAction(BaseModel):
    type: ActionType


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reply_text: str = Field(..., alias="replyText")
    intent: str
    confidence_score: float = Field(..., alias="confidenceScore")
    lead_score: int = Field(..., alias="leadScore")
    action: Optional[ChatAction] = None


class ConversationHistoryItem(BaseModel):
    role: str
    content: str
    timestamp: str


class ConversationHistory(BaseModel):
    session_id: str
    messages: List[ConversationHistoryItem]
    turn_count: int
    lead_score: int
    context: Dict[str, Any]
    created_at: str


# ── Endpoints ─────────────────────────────────────────────────────

@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, background_tasks: BackgroundTasks):
    """
    Process a chat message.

    1. Look up / create session  2. Dispatch intent  3. Update lead score
    4. Return reply and widget action
    """
    services = get_services()
    logger.info(f"[Chat] Session {request.session_id}: {request.user_message}")

    result = services.orchestrator.process(
        OrchestratorRequest(session_id=request.session_id, message=request.user_message)
    )

    if result.high_value:
        background_tasks.add_task(
            services.lead_router.notify,
            result.session_id,
            request.user_message,
            result.lead_score,
            result.intent,
        )

    background_tasks.add_task(
        _log_chat_analytics,
        result.session_id,
        result.intent,
        result.confidence_score,
        result.lead_score,
        result.processing_time_ms,
    )

    return ChatResponse(
        reply_text=result.reply_text,
        intent=result.intent,
        confidence_score=result.confidence_score,
        lead_score=result.lead_score,
        action=ChatAction(type=result.action) if result.action else None,
    )


@router.get("/chat/stats")
async def get_chat_stats():
    """Get chat statistics."""
    services = get_services()
    stats = services.session_store.stats()
    return {
        "total_conversations": stats["total_sessions"],
        "total_messages": stats["total_messages"],
        "total_lead_score": stats["total_lead_score"],
        "leads_created": len(services.lead_router.get_leads()),
    }


@router.get("/chat/{session_id}/history", response_model=ConversationHistory)
async def get_conversation_history(session_id: str):
    """Get conversation history."""
    services = get_services()
    session = services.session_store.get(session_id)

    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    messages = [
        ConversationHistoryItem(**turn)
        for turn in services.orchestrator.get_conversation(session_id)
    ]

    return ConversationHistory(
        session_id=session_id,
        messages=messages,
        turn_count=session.user_turn_count,
        lead_score=session.lead_score,
        context=session.context.to_dict(),
        created_at=session.created_at.isoformat(),
    )


# ── Helpers ───────────────────────────────────────────────────────

def _log_chat_analytics(
    session_id: str,
    intent: str,
    confidence: float,
    lead_score: int,
    latency_ms: float,
):
    """Log chat analytics (background task)."""
    try:
        get_services().analytics.record_chat(
            session_id=session_id,
            intent=intent,
            confidence=confidence,
            lead_score=lead_score,
            latency_ms=latency_ms,
        )
    except Exception:
        logger.exception("Chat analytics failed")
