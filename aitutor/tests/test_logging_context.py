"""Tests for structured logging and request_id propagation."""

import json
import logging

from aitutor.core.logging import JsonFormatter, PrettyFormatter, latency_bucket_ms, log_event, request_id_ctx_var


def test_request_id_in_response_and_logs(client, caplog):
    with caplog.at_level(logging.INFO, logger="aitutor"):
        response = client.get("/healthz")
    rid = response.headers.get("x-request-id")
    assert rid
    records = [r for r in caplog.records if getattr(r, "request_id", None) == rid]
    assert records, "Expected logs to contain request_id from response"
    assert len({r.request_id for r in records}) == 1


def test_request_id_in_error_response(client):
    response = client.get("/api/subjects/astrology")
    rid = response.headers.get("x-request-id")
    assert response.status_code == 404
    assert rid
    assert response.json()["error"]["request_id"] == rid


def test_log_event_truncates_and_binds_context(caplog):
    token = request_id_ctx_var.set("rid-ctx")
    try:
        with caplog.at_level(logging.INFO, logger="aitutor"):
            log_event("info", "[chat] reply sent", user_id="u1", event_type="chat.reply", extra={"question": "x" * 600})
    finally:
        request_id_ctx_var.reset(token)

    record = next(r for r in caplog.records if r.getMessage() == "[chat] reply sent")
    assert record.request_id == "rid-ctx"
    assert record.user_id == "u1"
    assert record.question.endswith("...<truncated>")
    assert len(record.question) == 500 + len("...<truncated>")


def test_json_formatter_includes_structured_fields():
    record = logging.LogRecord("aitutor", logging.WARNING, __file__, 1, "streak updated", None, None)
    record.request_id = "rid-1"
    record.user_id = "u1"
    record.status = 200

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "streak updated"
    assert payload["level"] == "WARNING"
    assert payload["request_id"] == "rid-1"
    assert payload["user_id"] == "u1"
    assert payload["status"] == 200
    assert payload["timestamp"].endswith("Z")


def test_latency_buckets():
    assert latency_bucket_ms(None) == "unknown"
    assert latency_bucket_ms(50) == "<100ms"
    assert latency_bucket_ms(250) == "100-1000ms"
    assert latency_bucket_ms(2500) == "1-5s"
    assert latency_bucket_ms(9000) == ">=5s"


def test_pretty_formatter_appends_structured_fields():
    record = logging.LogRecord("aitutor", logging.INFO, __file__, 1, "[topics] u1 completed 1 new topic(s)", None, None)
    record.request_id = None
    record.user_id = "u1"
    record.subject_id = "math"

    line = PrettyFormatter().format(record)

    assert "[aitutor]" in line
    assert "[rid=" not in line
    assert line.endswith("[topics] u1 completed 1 new topic(s) user_id=u1 subject_id=math")
