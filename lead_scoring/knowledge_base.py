"""
Static knowledge base and templated fallback replies for the Zobot chatbot.

Used when no intent rule matches: answer from a canned topic description,
otherwise synthesize a reply from the shape of the question.
"""

import random
import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .intents import KnowledgeTopic

KNOWLEDGE_BASE: Dict[KnowledgeTopic, str] = {
    KnowledgeTopic.AUTOMATION: (
        "Our automation features help you save time by automating repetitive tasks. "
        "You can set up workflows, triggers, and actions to streamline your business processes. "
        "This includes email automation, task assignment, and custom workflows."
    ),
    KnowledgeTopic.INTEGRATION: (
        "We integrate with 1000+ popular apps including Salesforce, Slack, HubSpot, "
        "Google Workspace, and more. Our API-first approach makes integration seamless "
        "and enables real-time data sync across your tools."
    ),
    KnowledgeTopic.SECURITY: (
        "We use enterprise-grade security with 256-bit encryption, SOC 2 Type II compliance, "
        "and regular third-party security audits. Your data is encrypted at rest and in transit. "
        "We also offer SSO, 2FA, and granular permissions."
    ),
    KnowledgeTopic.ANALYTICS: (
        "Get real-time analytics dashboards with custom reports, KPI tracking, and predictive "
        "insights powered by AI. Track sales performance, lead conversion rates, and team "
        "productivity with visual charts and exportable reports."
    ),
    KnowledgeTopic.TEAM: (
        "Collaborate seamlessly with your team with built-in collaboration tools, role-based "
        "access control, activity tracking, and shared workspaces. Assign tasks, leave comments, "
        "and track progress in real-time."
    ),
    KnowledgeTopic.MOBILE: (
        "Our mobile app (iOS and Android) lets you manage everything on the go with full offline "
        "support, push notifications, and native performance. Sync changes across all devices "
        "automatically."
    ),
    KnowledgeTopic.SUPPORT: (
        "We offer 24/7 support via email, live chat, and comprehensive knowledge base. Premium "
        "plans include dedicated account managers, priority support, and custom onboarding."
    ),
    KnowledgeTopic.TRAINING: (
        "We provide comprehensive training through video tutorials, live webinars, certification "
        "programs, and personalized onboarding. Our Academy has 100+ courses to help you master "
        "the platform."
    ),
    KnowledgeTopic.CUSTOMIZATION: (
        "Customize every aspect of the platform to match your workflow. Use our low-code builder "
        "for custom fields and layouts, or leverage our REST API and webhooks for advanced "
        "customization."
    ),
    KnowledgeTopic.PERFORMANCE: (
        "Our infrastructure is optimized for speed with 99.99% uptime SLA, automatic scaling, "
        "global CDN delivery, and sub-100ms response times. We handle millions of transactions daily."
    ),
    KnowledgeTopic.PRICING: (
        "Our pricing starts at $29/mo for the Basic plan, $79/mo for the Pro plan, and custom "
        "pricing for Enterprise. All plans include core CRM features, email, and 24/7 support."
    ),
    KnowledgeTopic.LEAD: (
        "Lead management includes automated lead scoring, lead assignment, lead enrichment, and "
        "conversion tracking. Our AI helps you prioritize high-quality leads and close deals faster."
    ),
    KnowledgeTopic.CRM: (
        "Our CRM platform consolidates all your customer data in one place, providing 360-degree "
        "customer views, activity tracking, and sales pipeline management. Boost your sales team "
        "productivity by 40%."
    ),
    KnowledgeTopic.REPORTING: (
        "Advanced reporting with custom dashboards, automatic email reports, scheduled exports, "
        "and data visualization. Create reports for any metric and drill down into detailed analytics."
    ),
    KnowledgeTopic.WORKFLOW: (
        "Create powerful workflows without coding. Set up triggers, conditions, and actions to "
        "automate complex business processes. Pre-built templates for common scenarios included."
    ),
}

QUESTION_WORDS = ("how", "what", "why", "when", "where")
YES_NO_WORDS = ("can", "does", "is", "will")

OPENERS = (
    'Regarding "{query}": ',
    "That's a great question about {first_word}! ",
    "Interesting inquiry! ",
)

QUESTION_CLOSING = (
    "I can help you understand that better. Our team specializes in CRM solutions, "
    "lead management, and sales automation. Could you be more specific about what you'd like to know?"
)
YES_NO_CLOSING = (
    "That's definitely something we can address. Our platform is designed to be flexible "
    "and comprehensive. Let me connect you with our sales team who can provide detailed "
    "information. Would you like to schedule a call?"
)
GENERIC_CLOSING = (
    'For personalized guidance on "{query}", I recommend scheduling a demo with our team. '
    "They can walk you through exactly how our solution addresses your needs."
)

CLARIFICATION_REPLY = (
    "I'm here to help. Could you give me more details about what you're looking for? "
    "I can assist with pricing, features, trials, or business optimization."
)

# Letters and digits in any script; apostrophes split "what's" into "what", "s"
_WORD_RE = re.compile(r"[^\W_]+")


@dataclass(frozen=True)
class KnowledgeEntry:
    """A knowledge base hit."""
    topic: KnowledgeTopic
    description: str

    def render(self) -> str:
        return (
            f"Great question about {self.topic.value}! {self.description} "
            "Would you like to know more, or shall we set up a demo?"
        )


class KnowledgeBase:
    """Keyword-indexed canned answers; first topic in declaration order wins."""

    def __init__(self, entries: Optional[Mapping[KnowledgeTopic, str]] = None):
        self._entries = dict(KNOWLEDGE_BASE if entries is None else entries)

    def lookup(self, message_lower: str) -> Optional[KnowledgeEntry]:
        for topic, description in self._entries.items():
            if topic.value in message_lower:
                return KnowledgeEntry(topic=topic, description=description)
        return None

    def __len__(self) -> int:
        return len(self._entries)


def has_words(message: str) -> bool:
    """True if the message carries at least one word."""
    return bool(_WORD_RE.search(message.lower()))


def classify_question(message: str) -> str:
    """Return ``question``, ``yes_no`` or ``statement`` from the first word."""
    words = _WORD_RE.findall(message.lower())
    if not words:
        return "statement"
    if words[0] in QUESTION_WORDS:
        return "question"
    if words[0] in YES_NO_WORDS:
        return "yes_no"
    return "statement"


def synthesize_reply(message: str, rng: Optional[random.Random] = None) -> str:
    """Build a templated reply for a message no rule or topic covered."""
    rng = rng or random
    query = message.strip()
    words = query.lower().split()
    first_word = words[0] if words else query

    opener = rng.choice(OPENERS).format(query=query, first_word=first_word)

    kind = classify_question(query)
    if kind == "question":
        closing = QUESTION_CLOSING
    elif kind == "yes_no":
        closing = YES_NO_CLOSING
    else:
        closing = GENERIC_CLOSING.format(query=query)

    return opener + closing
