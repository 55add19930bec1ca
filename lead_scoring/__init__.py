"""
Lead Scoring Module for the Zobot chatbot.

This module provides intent dispatch and lead qualification:
- Ordered keyword rules (greeting, buy, sell, support, demo, ...)
- Knowledge base fallback with templated replies
- Cumulative lead score per session
- CRM lead creation for high-value intents
"""

from .intents import ActionType, DispatchResult, Intent, KnowledgeTopic
from .intent_dispatcher import IntentDispatcher
from .knowledge_base import KnowledgeBase
from .rules import RULES, Outcome, Rule
from .cumulative_scorer import CumulativeScorer, CumulativeScoreResult
from .lead_router import CRMProvider, Lead, LeadRouter, LeadStatus

__all__ = [
    "ActionType",
    "DispatchResult",
    "Intent",
    "KnowledgeTopic",
    "IntentDispatcher",
    "KnowledgeBase",
    "RULES",
    "Outcome",
    "Rule",
    "CumulativeScorer",
    "CumulativeScoreResult",
    "CRMProvider",
    "Lead",
    "LeadRouter",
    "LeadStatus",
]
