"""
Lead Router for the Zobot chatbot.

Turns high-value conversations into CRM leads. The lead is always written to
the ``zoho_crm_leads`` JSON log; it is also posted to a webhook when one is
configured. Notification is fire-and-forget and never raises.
"""

import asyncio
import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import httpx

if TYPE_CHECKING:
    from api.analytics.event_log import JsonLogWriter

logger = logging.getLogger(__name__)

LEADS_LOG = "zoho_crm_leads"


class LeadStatus(Enum):
    """Lead status in the pipeline."""
    PRE_QUALIFIED = "Pre-Qualified"


class CRMProvider(Enum):
    """Supported CRM payload formats."""
    ZOHO = "zoho"
    CUSTOM = "custom"


@dataclass
class Lead:
    """Lead data structure."""

    lead_id: str
    session_id: str
    intent: str
    score: int
    last_message: str
    status: LeadStatus = LeadStatus.PRE_QUALIFIED
    source: str = "Zoho Bot"
    crm_id: Optional[str] = None
    routed_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def visitor_name(self) -> str:
        return f"Visitor-{self.session_id[:4]}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API calls."""
        data = asdict(self)
        data["status"] = self.status.value
        data["created_at"] = self.created_at.isoformat()
        if self.routed_at:
            data["routed_at"] = self.routed_at.isoformat()
        return data

    def to_crm_payload(self, provider: CRMProvider) -> Dict[str, Any]:
        """Convert to CRM-specific payload format."""
        if provider == CRMProvider.ZOHO:
            return self._to_zoho_format()
        return self.to_dict()

    def _to_zoho_format(self) -> Dict[str, Any]:
        """Format for Zoho CRM v2 Leads."""
        return {
            "data": [{
                "Last_Name": self.visitor_name,
                "Description": f"Intent: {self.intent}. Source: Hackathon Bot.",
                "Lead_Source": self.source,
                "Lead_Status": self.status.value,
                "Scoring": self.score,
            }]
        }


def mask_key(api_key: Optional[str]) -> str:
    if not api_key:
        return "<none>"
    return f"{api_key[:5]}..."


class LeadRouter:
    """
    Creates leads for high-value intents.

    Supports:
    - Append-only lead log (always)
    - Optional webhook delivery to a CRM endpoint
    """

    def __init__(
        self,
        event_log: Optional["JsonLogWriter"] = None,
        webhook_url: Optional[str] = None,
        crm_provider: CRMProvider = CRMProvider.ZOHO,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize the lead router.

        Args:
            event_log: Writer for the lead log
            webhook_url: URL for webhook delivery; None disables it
            crm_provider: Target payload format
            api_key: API key for CRM authentication
            timeout: Webhook timeout in seconds
        """
        self.event_log = event_log
        self.webhook_url = webhook_url
        self.crm_provider = crm_provider
        self.api_key = api_key
        self.timeout = timeout
        self._leads: List[Lead] = []

    def create_lead(self, session_id: str, message: str, score: int, intent: str) -> Lead:
        return Lead(
            lead_id=str(uuid.uuid4()),
            session_id=session_id,
            intent=intent,
            score=score,
            last_message=message,
        )

    async def notify(self, session_id: str, message: str, score: int, intent: str) -> Optional[Lead]:
        """
        Fire a lead creation notification.

        Returns:
            The created Lead, or None if anything failed
        """
        try:
            lead = self.create_lead(session_id, message, score, intent)
            payload = lead.to_crm_payload(self.crm_provider)

            logger.info(
                f"CRM lead triggered: session={session_id} intent={intent} score={score} "
                f"auth={mask_key(self.api_key)}"
            )
            logger.debug(f"CRM payload: {payload}")

            if self.event_log is not None:
                await asyncio.to_thread(self.event_log.append, LEADS_LOG, payload)

            if self.webhook_url:
                await self._post(lead, payload)

            self._leads.append(lead)
            return lead

        except Exception:
            logger.exception(f"Lead notification failed for session {session_id}")
            return None

    async def _post(self, lead: Lead, payload: Dict[str, Any]) -> bool:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            if self.crm_provider == CRMProvider.ZOHO:
                headers["Authorization"] = f"Zoho-oauthtoken {self.api_key}"
            else:
                headers["X-API-Key"] = self.api_key

        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.webhook_url,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )

        if response.status_code not in (200, 201, 202):
            logger.error(
                f"Lead routing failed: lead={lead.lead_id} status={response.status_code} "
                f"body={response.text[:500]}"
            )
            return False

        lead.routed_at = datetime.utcnow()
        try:
            data = response.json()
        except ValueError:
            data = {}
        if isinstance(data, dict):
            if "id" in data:
                lead.crm_id = str(data["id"])
            elif data.get("data"):
                lead.crm_id = str(data["data"][0].get("id", ""))

        logger.info(f"Lead routed: lead={lead.lead_id} crm_id={lead.crm_id}")
        return True

    def get_leads(self) -> List[Lead]:
        """Get all leads created by this router."""
        return list(self._leads)
