"""
Service initialization and dependency injection for the Zobot chatbot API.

Creates and manages all service instances used by the API.
"""

import logging
from typing import Optional

from config.settings import get_settings, Settings
from engine.orchestrator import ChatOrchestrator
from lead_scoring.cumulative_scorer import CumulativeScorer
from lead_scoring.intent_dispatcher import IntentDispatcher
from lead_scoring.knowledge_base import KnowledgeBase
from lead_scoring.lead_router import LeadRouter, CRMProvider
from sessions.store import SessionStore

from .analytics.collector import AnalyticsCollector
from .analytics.event_log import JsonLogWriter

logger = logging.getLogger(__name__)


class Services:
    """Container for all application services."""

    def __init__(self):
        self.settings: Optional[Settings] = None
        self.event_log: Optional[JsonLogWriter] = None
        self.analytics: Optional[AnalyticsCollector] = None
        self.session_store: Optional[SessionStore] = None
        self.dispatcher: Optional[IntentDispatcher] = None
        self.scorer: Optional[CumulativeScorer] = None
        self.lead_router: Optional[LeadRouter] = None
        self.orchestrator: Optional[ChatOrchestrator] = None
        self._initialized = False

    def initialize(self):
        """Initialize all services."""
        if self._initialized:
            return

        self.settings = get_settings()
        logger.info(f"Initializing services (logs in {self.settings.log_directory})")

        self._init_logging()
        self._init_lead_scoring()
        self._init_orchestrator()
        self._initialized = True
        logger.info("All services initialized successfully")

    def _init_logging(self):
        """Initialize the JSON event log and analytics."""
        self.event_log = JsonLogWriter(self.settings.log_directory)
        self.analytics = AnalyticsCollector(self.event_log)

    def _init_lead_scoring(self):
        """Initialize session store, dispatcher, scorer and lead router."""
        s = self.settings
        self.session_store = SessionStore()
        self.dispatcher = IntentDispatcher(
            knowledge_base=KnowledgeBase(),
            brand_name=s.brand_name,
        )
        self.scorer = CumulativeScorer(self.session_store)

        crm_map = {
            "zoho": CRMProvider.ZOHO,
        }
        self.lead_router = LeadRouter(
            event_log=self.event_log,
            webhook_url=s.crm_webhook_url,
            crm_provider=crm_map.get(s.crm_provider.lower(), CRMProvider.CUSTOM),
            api_key=s.crm_api_key,
            timeout=s.crm_timeout_seconds,
        )
        logger.info("Lead scoring services ready")

    def _init_orchestrator(self):
        """Initialize the chat orchestrator."""
        self.orchestrator = ChatOrchestrator(
            session_store=self.session_store,
            dispatcher=self.dispatcher,
            scorer=self.scorer,
        )
        logger.info("Chat orchestrator ready")

    @property
    def is_ready(self) -> bool:
        return self._initialized and self.orchestrator is not None

    def health(self) -> dict:
        """Return health status of all services."""
        return {
            "initialized": self._initialized,
            "session_store": self.session_store is not None,
            "dispatcher": self.dispatcher is not None,
            "lead_router": self.lead_router is not None,
            "orchestrator": self.orchestrator is not None,
        }


# Singleton
_services = Services()


def get_services() -> Services:
    """Get the global services instance, initializing it on first use."""
    _services.initialize()
    return _services


def initialize_services():
    """Initialize all services (called at startup)."""
    _services.initialize()
