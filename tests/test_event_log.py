"""Tests for the append-only JSON event logs."""

import json

from api.analytics.collector import AnalyticsCollector


def test_append_and_read(event_log):
    assert event_log.append("chat_events", {"intent": "buy"}) is True
    records = event_log.read("chat_events")
    assert len(records) == 1
    assert records[0]["payload"] == {"intent": "buy"}
    assert "timestamp" in records[0]


def test_file_is_a_json_array(event_log):
    event_log.append("zoho_crm_leads", {"n": 1})
    event_log.append("zoho_crm_leads", {"n": 2})
    data = json.loads(event_log.path_for("zoho_crm_leads").read_text(encoding="utf-8"))
    assert [r["payload"]["n"] for r in data] == [1, 2]


def test_missing_log_reads_empty(event_log):
    assert event_log.read("nothing_here") == []


def test_corrupt_file_starts_fresh(event_log):
    path = event_log.path_for("chat_events")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{not json", encoding="utf-8")

    assert event_log.append("chat_events", {"ok": True}) is True
    assert [r["payload"] for r in event_log.read("chat_events")] == [{"ok": True}]


def test_unwritable_directory_does_not_raise(tmp_path):
    from api.analytics.event_log import JsonLogWriter

    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    writer = JsonLogWriter(str(blocker / "logs"))

    assert writer.append("chat_events", {"x": 1}) is False


def test_collector_records_chat(event_log):
    collector = AnalyticsCollector(event_log)
    collector.record_chat(
        session_id="sess_abc",
        intent="demo",
        confidence=0.9,
        lead_score=15,
        latency_ms=1.2,
    )
    payload = event_log.read("chat_events")[0]["payload"]
    assert payload["session_id"] == "sess_abc"
    assert payload["intent"] == "demo"
    assert payload["lead_score"] == 15
