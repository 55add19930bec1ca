"""Tests for lead scoring and lead creation."""

import asyncio
import random
import threading

import httpx
import pytest

from lead_scoring.cumulative_scorer import CumulativeScorer
from lead_scoring.intent_dispatcher import IntentDispatcher
from lead_scoring.lead_router import LEADS_LOG, CRMProvider, LeadRouter
from sessions.store import SessionStore


CONVERSATION = [
    "hello",
    "I want to buy a widget",
    "I want to buy the Pro Plan",
    "Can I book a demo?",
    "Tell me about integration",
    "I want to sell my bike",
    "list it now",
    "asdkjalksd",
]


def run_conversation(session_id: str, store: SessionStore):
    dispatcher = IntentDispatcher(rng=random.Random(7))
    scorer = CumulativeScorer(store)
    session = store.get_or_create(session_id)
    deltas = []
    for message in CONVERSATION:
        result = dispatcher.dispatch(message, session)
        scorer.apply(session_id, result.score_delta)
        deltas.append(result.score_delta)
    return scorer, deltas


# ── Cumulative Scorer ─────────────────────────────────

class TestCumulativeScorer:
    def test_score_is_sum_of_deltas(self, store, session_id):
        scorer, deltas = run_conversation(session_id, store)
        assert deltas == [0, 20, 30, 15, 5, 10, 15, 5]
        assert scorer.get_score(session_id) == sum(deltas)
        assert scorer.get_history(session_id) == deltas

    def test_replay_on_fresh_session_is_identical(self):
        _, first = run_conversation("sess_one", SessionStore())
        _, second = run_conversation("sess_two", SessionStore())
        assert first == second

    def test_score_never_decreases(self, store, session_id):
        scorer = CumulativeScorer(store)
        totals = [scorer.apply(session_id, d).lead_score for d in (0, 5, 0, 20, 0, 30)]
        assert totals == sorted(totals)
        assert totals[-1] == 55

    def test_apply_result(self, store, session_id):
        scorer = CumulativeScorer(store)
        scorer.apply(session_id, 10)
        result = scorer.apply(session_id, 15)
        assert (result.delta, result.lead_score, result.message_count) == (15, 25, 2)

    def test_negative_delta_rejected(self, store, session_id):
        scorer = CumulativeScorer(store)
        with pytest.raises(ValueError):
            scorer.apply(session_id, -10)

    def test_sessions_do_not_share_scores(self, store):
        scorer = CumulativeScorer(store)
        scorer.apply("a", 20)
        scorer.apply("b", 5)
        assert scorer.get_score("a") == 20
        assert scorer.get_score("b") == 5


# ── Lead Router ───────────────────────────────────────

class FailingLog:
    def append(self, name, payload):
        raise OSError("disk full")


class ThreadRecordingLog:
    def __init__(self):
        self.threads = []

    def append(self, name, payload):
        self.threads.append(threading.get_ident())
        return True


class TestLeadRouter:
    @pytest.mark.parametrize(
        "message,high_value",
        [
            ("I want to buy a widget", True),
            ("Can I book a demo?", True),
            ("How much does it cost", False),
            ("hello", False),
        ],
    )
    def test_high_value_intents(self, dispatcher, session, message, high_value):
        assert dispatcher.dispatch(message, session).is_high_value is high_value

    def test_purchase_confirmation_is_not_high_value(self, dispatcher, session):
        dispatcher.dispatch("I want to buy a widget", session)
        result = dispatcher.dispatch("I want to buy the Pro Plan", session)
        assert result.intent.value == "purchase_confirmed"
        assert result.is_high_value is False

    def test_zoho_payload(self):
        router = LeadRouter()
        lead = router.create_lead("sess_abcdef", "I want to buy", 20, "buy")
        payload = lead.to_crm_payload(CRMProvider.ZOHO)
        record = payload["data"][0]
        assert record["Last_Name"] == "Visitor-sess"
        assert record["Description"] == "Intent: buy. Source: Hackathon Bot."
        assert record["Lead_Source"] == "Zoho Bot"
        assert record["Lead_Status"] == "Pre-Qualified"
        assert record["Scoring"] == 20

    def test_notify_writes_lead_log(self, event_log):
        router = LeadRouter(event_log=event_log, api_key="6f3a13e968d1929b")
        lead = asyncio.run(router.notify("sess_abcdef", "Can I book a demo?", 15, "demo"))

        assert lead is not None
        assert router.get_leads() == [lead]
        records = event_log.read(LEADS_LOG)
        assert len(records) == 1
        assert records[0]["payload"]["data"][0]["Scoring"] == 15
        assert "timestamp" in records[0]

    def test_lead_log_write_runs_off_the_event_loop(self):
        log = ThreadRecordingLog()
        router = LeadRouter(event_log=log)

        async def notify():
            loop_thread = threading.get_ident()
            await router.notify("sess_abcdef", "I want to buy", 20, "buy")
            return loop_thread

        loop_thread = asyncio.run(notify())
        assert len(log.threads) == 1
        assert log.threads[0] != loop_thread

    def test_notify_swallows_failures(self):
        router = LeadRouter(event_log=FailingLog())
        lead = asyncio.run(router.notify("sess_abcdef", "I want to buy", 20, "buy"))
        assert lead is None
        assert router.get_leads() == []

    def test_webhook_delivery(self, monkeypatch):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["auth"] = request.headers.get("Authorization")
            captured["url"] = str(request.url)
            return httpx.Response(201, json={"data": [{"id": "crm-42"}]})

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            httpx,
            "AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        router = LeadRouter(webhook_url="https://crm.example.com/leads", api_key="secret-key")
        lead = asyncio.run(router.notify("sess_abcdef", "I want to buy", 20, "buy"))

        assert lead.crm_id == "crm-42"
        assert lead.routed_at is not None
        assert captured["auth"] == "Zoho-oauthtoken secret-key"
        assert captured["url"] == "https://crm.example.com/leads"

    def test_webhook_error_does_not_raise(self, monkeypatch):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable")

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            httpx,
            "AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        router = LeadRouter(webhook_url="https://crm.example.com/leads")
        assert asyncio.run(router.notify("sess_abcdef", "I want to buy", 20, "buy")) is None
