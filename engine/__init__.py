"""
Chat Engine Module for the Zobot chatbot.

Ties the session store, intent dispatcher and lead scorer into a single
chat-turn operation.
"""

from .orchestrator import ChatOrchestrator, ChatRequest, ChatResponse

__all__ = [
    "ChatOrchestrator",
    "ChatRequest",
    "ChatResponse",
]
