"""
Intent, action and dispatch result types for the Zobot chatbot.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Intent(str, Enum):
    """Intent labels assigned by the dispatcher."""
    GREETING = "greeting"
    BUY = "buy"
    PURCHASE_CONFIRMED = "purchase_confirmed"
    SELL = "sell"
    LISTING_CONFIRMED = "listing_confirmed"
    SUPPORT = "support"
    DEMO = "demo"
    PRICING = "pricing"
    FEATURES = "features"
    TRIAL = "trial"
    BUSINESS_INQUIRY = "business_inquiry"
    ADD_TO_CART = "add_to_cart"
    KNOWLEDGE = "knowledge"          # Knowledge base topic answered; label is the topic
    CUSTOM_QUERY = "custom_query"
    CLARIFICATION = "clarification"


class ActionType(str, Enum):
    """Follow-up affordance the widget should render."""
    SHOW_PRODUCTS = "show_products"
    PROMPT_UPLOAD = "prompt_upload"
    SUPPORT_MODE = "support_mode"


class KnowledgeTopic(str, Enum):
    """Knowledge base topics, in lookup order."""
    AUTOMATION = "automation"
    INTEGRATION = "integration"
    SECURITY = "security"
    ANALYTICS = "analytics"
    TEAM = "team"
    MOBILE = "mobile"
    SUPPORT = "support"
    TRAINING = "training"
    CUSTOMIZATION = "customization"
    PERFORMANCE = "performance"
    PRICING = "pricing"
    LEAD = "lead"
    CRM = "crm"
    REPORTING = "reporting"
    WORKFLOW = "workflow"


# Intents that trigger a CRM lead creation notification
HIGH_VALUE_INTENTS = frozenset({Intent.BUY, Intent.DEMO})


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of dispatching one user message."""
    reply_text: str
    intent: Intent
    confidence: float
    score_delta: int = 0
    action: Optional[ActionType] = None
    topic: Optional[KnowledgeTopic] = None

    @property
    def label(self) -> str:
        """Wire-level intent label (the topic name for knowledge answers)."""
        if self.intent == Intent.KNOWLEDGE and self.topic is not None:
            return self.topic.value
        return self.intent.value

    @property
    def is_high_value(self) -> bool:
        return self.intent in HIGH_VALUE_INTENTS
