"""
Ordered intent rules for the Zobot chatbot.

Rules are evaluated top to bottom against the lowercased message; the first
match wins. A rule with a ``followup`` outcome answers differently when the
previous turn was the same rule and its gating flag is still set.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from sessions.models import SessionContext

from .intents import ActionType, DispatchResult, Intent

Predicate = Callable[[str, SessionContext], bool]


@dataclass(frozen=True)
class Outcome:
    """Reply template plus scoring and context effects of a rule."""
    intent: Intent
    reply: str
    confidence: float
    score_delta: int = 0
    action: Optional[ActionType] = None
    set_flags: Dict[str, bool] = field(default_factory=dict)

    def render(self, message: str, brand_name: str) -> DispatchResult:
        reply = self.reply.format(message=message, brand=brand_name)
        return DispatchResult(
            reply_text=reply,
            intent=self.intent,
            confidence=self.confidence,
            score_delta=self.score_delta,
            action=self.action,
        )

    def apply(self, context: SessionContext):
        for flag, value in self.set_flags.items():
            setattr(context, flag, value)


@dataclass(frozen=True)
class Rule:
    """A predicate over (lowercased message, context) and what it yields."""
    name: str
    predicate: Predicate
    outcome: Outcome
    followup: Optional[Outcome] = None
    followup_flag: Optional[str] = None

    def matches(self, message_lower: str, context: SessionContext) -> bool:
        return self.predicate(message_lower, context)

    def select(self, context: SessionContext) -> Outcome:
        """Pick the follow-up outcome when this rule is awaiting one."""
        if (
            self.followup is not None
            and context.last_intent == self.outcome.intent.value
            and getattr(context, self.followup_flag, False)
        ):
            return self.followup
        return self.outcome


def contains_any(*keywords: str) -> Predicate:
    """Predicate matching when any keyword is a substring of the message."""
    def predicate(message_lower: str, context: SessionContext) -> bool:
        return any(keyword in message_lower for keyword in keywords)
    return predicate


def after_intent(intent: Intent, min_length: int = 3) -> Predicate:
    """Predicate matching a non-trivial message right after ``intent``."""
    def predicate(message_lower: str, context: SessionContext) -> bool:
        return context.last_intent == intent.value and len(message_lower) >= min_length
    return predicate


GREETING = Rule(
    name="greeting",
    predicate=contains_any("hi", "hello", "hey", "greet"),
    outcome=Outcome(
        intent=Intent.GREETING,
        reply="Hello! Welcome to the {brand}. How can I help you today?",
        confidence=0.95,
    ),
)

BUY = Rule(
    name="buy",
    predicate=contains_any("buy", "purchase", "want to get"),
    outcome=Outcome(
        intent=Intent.BUY,
        reply=(
            "That's great! We have some amazing products. "
            "I'm creating a prioritized lead for you in Zoho CRM right now."
        ),
        confidence=0.9,
        score_delta=20,
        action=ActionType.SHOW_PRODUCTS,
        set_flags={"products_shown": True},
    ),
    followup=Outcome(
        intent=Intent.PURCHASE_CONFIRMED,
        reply=(
            "Excellent! I'm processing your order for the {message}. "
            "You'll receive a confirmation email shortly. "
            "Is there anything else I can help you with?"
        ),
        confidence=0.95,
        score_delta=30,
        set_flags={"products_shown": False},
    ),
    followup_flag="products_shown",
)

SELL = Rule(
    name="sell",
    predicate=contains_any("sell", "list", "list this", "list item"),
    outcome=Outcome(
        intent=Intent.SELL,
        reply=(
            "We can help you list items. Please click the upload button "
            "to share a photo of what you're selling."
        ),
        confidence=0.85,
        score_delta=10,
        action=ActionType.PROMPT_UPLOAD,
        set_flags={"upload_requested": True},
    ),
    followup=Outcome(
        intent=Intent.LISTING_CONFIRMED,
        reply=(
            "Perfect! I've listed your {message} on our marketplace. "
            "It's now live and visible to thousands of potential buyers. "
            "You'll receive notifications when interested buyers contact you. "
            "Want to list another item or need help with anything else?"
        ),
        confidence=0.95,
        score_delta=15,
        set_flags={"upload_requested": False},
    ),
    followup_flag="upload_requested",
)

SUPPORT = Rule(
    name="support",
    predicate=contains_any("support", "help", "broken", "issue"),
    outcome=Outcome(
        intent=Intent.SUPPORT,
        reply="I understand you need help. I'm checking our support base...",
        confidence=0.8,
        score_delta=5,
        action=ActionType.SUPPORT_MODE,
    ),
)

DEMO = Rule(
    name="demo",
    predicate=contains_any("demo"),
    outcome=Outcome(
        intent=Intent.DEMO,
        reply="I've scheduled a demo request and updated your Lead status.",
        confidence=0.9,
        score_delta=15,
    ),
)

PRICING = Rule(
    name="pricing",
    predicate=contains_any("price", "cost", "pricing"),
    outcome=Outcome(
        intent=Intent.PRICING,
        reply="Our pricing starts at $29/mo for Basic and $79/mo for Pro.",
        confidence=0.9,
    ),
)

FEATURES = Rule(
    name="features",
    predicate=contains_any("feature", "capability", "what can"),
    outcome=Outcome(
        intent=Intent.FEATURES,
        reply=(
            "Our key features include: Lead Scoring, CRM Integration, AI-powered chat, "
            "Real-time Analytics, and Sales Automation. Which interests you most?"
        ),
        confidence=0.85,
        score_delta=5,
    ),
)

TRIAL = Rule(
    name="trial",
    predicate=contains_any("trial", "free", "try"),
    outcome=Outcome(
        intent=Intent.TRIAL,
        reply=(
            "Great! We offer a 14-day free trial with no credit card required. "
            "I'll get you set up right away!"
        ),
        confidence=0.9,
        score_delta=15,
    ),
)

BUSINESS_INQUIRY = Rule(
    name="business_inquiry",
    predicate=contains_any("account", "revenue", "target"),
    outcome=Outcome(
        intent=Intent.BUSINESS_INQUIRY,
        reply=(
            "I can help you optimize your Accounts and meet revenue targets. "
            "Let me gather some information about your current setup and goals. "
            "What's your main challenge right now?"
        ),
        confidence=0.8,
        score_delta=10,
    ),
)

ADD_TO_CART = Rule(
    name="add_to_cart",
    predicate=after_intent(Intent.BUY),
    outcome=Outcome(
        intent=Intent.ADD_TO_CART,
        reply="Excellent choice. I'll add that to your cart.",
        confidence=0.5,
    ),
)

# Precedence matters: a later rule never sees a message an earlier one matched.
RULES: Tuple[Rule, ...] = (
    GREETING,
    BUY,
    SELL,
    SUPPORT,
    DEMO,
    PRICING,
    FEATURES,
    TRIAL,
    BUSINESS_INQUIRY,
    ADD_TO_CART,
)


def rule_names(rules: Tuple[Rule, ...] = RULES) -> List[str]:
    return [rule.name for rule in rules]
