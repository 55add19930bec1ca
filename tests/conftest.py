"""Shared fixtures for Zobot tests."""

import os
import random
import tempfile
import uuid

import pytest
from fastapi.testclient import TestClient

# Keep JSON logs out of the working tree
os.environ.setdefault("LOG_DIRECTORY", tempfile.mkdtemp(prefix="zobot-logs-"))
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture
def client():
    """Create a FastAPI test client."""
    from api.main import app
    return TestClient(app)


@pytest.fixture
def session_id():
    return f"sess_{uuid.uuid4().hex[:9]}"


@pytest.fixture
def store():
    from sessions.store import SessionStore
    return SessionStore()


@pytest.fixture
def session(store, session_id):
    return store.get_or_create(session_id)


@pytest.fixture
def dispatcher():
    from lead_scoring.intent_dispatcher import IntentDispatcher
    return IntentDispatcher(rng=random.Random(42))


@pytest.fixture
def event_log(tmp_path):
    from api.analytics.event_log import JsonLogWriter
    return JsonLogWriter(str(tmp_path / "logs"))
