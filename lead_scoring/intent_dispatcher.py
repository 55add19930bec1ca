"""
Intent Dispatcher for the Zobot chatbot.

Maps a user message plus session context to a scripted reply, an intent
label, a lead score delta and an optional widget action.
"""

import logging
import random
from typing import Optional, Sequence

from sessions.models import Session

from .intents import DispatchResult, Intent
from .knowledge_base import (
    CLARIFICATION_REPLY,
    KnowledgeBase,
    has_words,
    synthesize_reply,
)
from .rules import RULES, Rule

logger = logging.getLogger(__name__)


class IntentDispatcher:
    """
    Keyword-rule dispatcher with a knowledge base fallback.

    Rules are tried in order and the first match wins. When none match, the
    message is looked up in the knowledge base; failing that, a reply is
    synthesized from the shape of the question. Knowledge lookup errors are
    absorbed here so every message gets a reply.
    """

    def __init__(
        self,
        rules: Optional[Sequence[Rule]] = None,
        knowledge_base: Optional[KnowledgeBase] = None,
        brand_name: str = "Zoho Hackathon Demo",
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            rules: Ordered rules; defaults to the built-in rule table
            knowledge_base: Fallback topic answers
            brand_name: Name used in the greeting
            rng: Random source for fallback opening phrases
        """
        self.rules = tuple(RULES if rules is None else rules)
        self.knowledge_base = KnowledgeBase() if knowledge_base is None else knowledge_base
        self.brand_name = brand_name
        self._rng = rng or random.Random()

    def dispatch(self, message: str, session: Session) -> DispatchResult:
        """
        Dispatch a message and update the session context.

        Sets the flags of the matched rule and always records the resulting
        label as ``lastIntent``. The lead score is left to the scorer.
        """
        message_lower = message.lower()
        context = session.context

        result = None
        for rule in self.rules:
            if rule.matches(message_lower, context):
                outcome = rule.select(context)
                result = outcome.render(message, self.brand_name)
                outcome.apply(context)
                logger.debug(f"Rule '{rule.name}' matched -> {result.intent.value}")
                break

        if result is None:
            result = self._fallback(message, message_lower)

        context.last_intent = result.label
        return result

    def _fallback(self, message: str, message_lower: str) -> DispatchResult:
        """Knowledge base answer, or a synthesized reply."""
        if not has_words(message):
            return DispatchResult(
                reply_text=CLARIFICATION_REPLY,
                intent=Intent.CLARIFICATION,
                confidence=0.4,
            )

        try:
            entry = self.knowledge_base.lookup(message_lower)
        except Exception as e:
            logger.error(f"Knowledge lookup failed, using templated reply: {e}")
            return DispatchResult(
                reply_text=synthesize_reply(message, self._rng),
                intent=Intent.CUSTOM_QUERY,
                confidence=0.5,
            )

        if entry is not None:
            return DispatchResult(
                reply_text=entry.render(),
                intent=Intent.KNOWLEDGE,
                confidence=0.85,
                score_delta=5,
                topic=entry.topic,
            )

        return DispatchResult(
            reply_text=synthesize_reply(message, self._rng),
            intent=Intent.CUSTOM_QUERY,
            confidence=0.6,
            score_delta=5,
        )
