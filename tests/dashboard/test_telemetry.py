from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from salesdesk_dashboard.telemetry import TelemetryLogger, build_event


def test_build_event_rejects_card_and_pii_keys() -> None:
    for key in ("cardNumber", "cvv", "email", "password", "token"):
        with pytest.raises(ValueError, match="forbidden"):
            build_event(category="api_call_result", name="x", module="sales", action="create", context={key: "v"})


def test_build_event_rejects_unknown_category() -> None:
    with pytest.raises(ValueError, match="Unsupported"):
        build_event(category="metrics", name="x", module="sales", action="create")


def test_logger_disabled_by_default(tmp_path: Path) -> None:
    logger = TelemetryLogger(log_file=tmp_path / "events.jsonl")
    event = build_event(category="auth", name="auth_login_result", module="auth", action="login", success=True)
    assert logger.emit(event) is False
    assert not (tmp_path / "events.jsonl").exists()


def test_logger_enabled_from_env_writes_jsonl(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALESDESK_TELEMETRY_ENABLED", "true")
    stream = io.StringIO()
    logger = TelemetryLogger(log_file=tmp_path / "events.jsonl", stdout_sink=True, stdout_stream=stream)
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert logger.emit(build_event(category="navigation", name="screen_view", module="sales", action="list", now=stamp))
    assert logger.api_result(module="accounts", action="create", success=False, error_code="BAD_REQUEST")

    lines = (tmp_path / "events.jsonl").read_text().splitlines()
    first = json.loads(lines[0])
    second = json.loads(lines[1])
    assert first["timestamp_utc"] == "2024-01-01T00:00:00+00:00"
    assert first["app_name"] == "salesdesk"
    assert "trace_id" not in first
    assert second["name"] == "accounts_create_result"
    assert second["error_code"] == "BAD_REQUEST"
    assert stream.getvalue().count("\n") == 2
