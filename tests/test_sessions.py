"""Tests for the in-memory session store."""

import threading

import pytest

from sessions.models import Role


class TestSessionStore:
    def test_lazy_creation(self, store):
        assert "sess_new" not in store
        session = store.get_or_create("sess_new")
        assert session.session_id == "sess_new"
        assert session.turns == []
        assert session.lead_score == 0
        assert session.context.last_intent is None
        assert session.context.products_shown is False
        assert session.context.upload_requested is False

    def test_one_session_per_id(self, store):
        first = store.get_or_create("sess_1")
        second = store.get_or_create("sess_1")
        assert first is second
        assert len(store) == 1

    def test_get_does_not_create(self, store):
        assert store.get("missing") is None
        assert len(store) == 0

    def test_append_turn(self, store, session_id):
        store.append_turn(session_id, Role.USER, "hello")
        store.append_turn(session_id, Role.BOT, "Hi there")
        turns = store.get(session_id).turns
        assert [(t.role, t.content) for t in turns] == [
            (Role.USER, "hello"),
            (Role.BOT, "Hi there"),
        ]
        assert store.get(session_id).user_turn_count == 1

    def test_add_score(self, store, session_id):
        assert store.add_score(session_id, 20) == 20
        assert store.add_score(session_id, 0) == 20
        assert store.add_score(session_id, 30) == 50
        assert store.lead_score(session_id) == 50

    def test_negative_delta_rejected(self, store, session_id):
        with pytest.raises(ValueError):
            store.add_score(session_id, -5)
        assert store.lead_score(session_id) == 0

    def test_unknown_session_scores_zero(self, store):
        assert store.lead_score("nobody") == 0

    def test_context_serialization(self, session):
        session.context.last_intent = "buy"
        session.context.products_shown = True
        assert session.context.to_dict() == {
            "lastIntent": "buy",
            "productsShown": True,
            "uploadRequested": False,
        }

    def test_stats(self, store):
        store.append_turn("a", Role.USER, "hi")
        store.append_turn("b", Role.USER, "hi")
        store.add_score("b", 15)
        assert store.stats() == {
            "total_sessions": 2,
            "total_messages": 2,
            "total_lead_score": 15,
        }


class TestConcurrency:
    def test_concurrent_increments_are_not_lost(self, store, session_id):
        def worker():
            for _ in range(200):
                with store.lock(session_id) as session:
                    current = session.lead_score
                    store.add_score(session_id, 5)
                    assert session.lead_score == current + 5

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.lead_score(session_id) == 8 * 200 * 5

    def test_concurrent_creation_yields_one_session(self, store):
        seen = []

        def worker():
            seen.append(store.get_or_create("shared"))

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(s) for s in seen}) == 1
        assert len(store) == 1

    def test_concurrent_chat_turns_keep_every_delta(self, store, dispatcher, session_id):
        from engine.orchestrator import ChatOrchestrator, ChatRequest
        from lead_scoring.cumulative_scorer import CumulativeScorer

        orchestrator = ChatOrchestrator(store, dispatcher, CumulativeScorer(store))
        messages = ["Can I book a demo?", "I want to sell my bike", "I want to buy a widget"]
        responses = []

        def worker(message):
            for _ in range(50):
                responses.append(
                    orchestrator.process(ChatRequest(session_id=session_id, message=message))
                )

        threads = [threading.Thread(target=worker, args=(m,)) for m in messages * 2]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        session = store.get(session_id)
        assert len(responses) == 300
        assert session.lead_score == sum(r.score_delta for r in responses)
        assert max(r.lead_score for r in responses) == session.lead_score
        assert session.user_turn_count == 300
        assert len(session.turns) == 600
