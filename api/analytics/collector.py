"""
Analytics Collector for the Zobot chatbot.

Records chat events to the append-only JSON log and Prometheus metrics.
"""

import logging
from typing import Optional

from api.middleware.metrics import record_intent, record_lead_score

from .event_log import JsonLogWriter

logger = logging.getLogger(__name__)

CHAT_EVENTS_LOG = "chat_events"


class AnalyticsCollector:
    """Collects and records analytics events."""

    def __init__(self, event_log: Optional[JsonLogWriter] = None):
        self.event_log = event_log

    def record_chat(
        self,
        session_id: str,
        intent: str,
        confidence: float,
        lead_score: int,
        latency_ms: float,
    ):
        """Record a chat interaction event."""
        logger.debug(
            f"Analytics: session={session_id} intent={intent} "
            f"conf={confidence:.2f} score={lead_score} latency={latency_ms:.0f}ms"
        )
        record_intent(intent)
        record_lead_score(lead_score)

        if self.event_log is not None:
            self.event_log.append(
                CHAT_EVENTS_LOG,
                {
                    "session_id": session_id,
                    "intent": intent,
                    "confidence": confidence,
                    "lead_score": lead_score,
                    "latency_ms": round(latency_ms, 2),
                },
            )
