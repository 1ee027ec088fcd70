"""Focused tests for relay_providers.base.logging and backend log events."""

from __future__ import annotations

import json
import logging

from relay_providers.base.log_support import JsonFormatter, LogContext
from relay_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    get_logger,
    log_event,
    normalized_log_event,
)
from relay_providers.base.models import CompletionRequest, Usage
from relay_providers.openai import OpenAIChatBackend
from relay_providers.tests.helpers import json_recorder, mock_client


def _events(handler):
    return [json.loads(m) for m in handler.messages]


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_get_logger_prefixes_children():
    assert get_logger("relay.cli").name == "relay.cli"  # nosec B101
    assert get_logger("custom").name == "relay.custom"  # nosec B101
    assert get_logger().propagate is False  # nosec B101


def test_log_event_drops_none_values(captured_logs):
    log_event(get_logger("relay.test"), "thing.happened", LogContext(provider="p"), a=1, b=None)
    (event,) = _events(captured_logs)
    assert event == {"event": "thing.happened", "provider": "p", "a": 1}  # nosec B101


def test_normalized_log_event_required_keys(captured_logs):
    normalized_log_event(
        get_logger("relay.test"),
        "stream.end",
        LogContext(provider="p", model="m"),
        phase="finalize",
        error_code="timeout",
        emitted=3,
        tokens=Usage(1, 2, 3),
        phase_override="ignored",
    )
    (event,) = _events(captured_logs)
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event  # nosec B101
    assert event["tokens"] == {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}  # nosec B101
    assert event["error_code"] == "timeout"  # nosec B101
    assert event["model"] == "m"  # nosec B101


def test_json_formatter_hoists_json_messages():
    record = logging.LogRecord("relay.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 2}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["n"] == 2  # nosec B101
    assert out["level"] == "INFO" and out["logger"] == "relay.x"  # nosec B101
    assert "msg" not in out  # nosec B101

    plain = logging.LogRecord("relay.x", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
    assert json.loads(JsonFormatter().format(plain))["msg"] == "hello world"  # nosec B101


def test_backend_logs_start_and_end_without_credentials(captured_logs):
    body = {"choices": [{"message": {"content": "ok"}}], "usage": {"prompt_tokens": 1, "completion_tokens": 1}}
    backend = OpenAIChatBackend("sk-very-secret", client=mock_client(json_recorder(body)))
    backend.complete(CompletionRequest(model="gpt-4o", prompt="hi"))

    events = _events(captured_logs)
    names = [e["event"] for e in events]
    assert "complete.start" in names and "complete.end" in names  # nosec B101
    end = next(e for e in events if e["event"] == "complete.end")
    assert end["provider"] == "openai" and end["variant"] == "chat"  # nosec B101
    assert end["tokens"]["total_tokens"] == 2  # nosec B101
    assert "latency_ms" in end  # nosec B101
    assert all("sk-very-secret" not in m for m in captured_logs.messages)  # nosec B101
