from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = BASE_DIR / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from salesdesk_client_sdk.config import ClientConfig  # noqa: E402
from salesdesk_client_sdk.http_client import HttpClient  # noqa: E402
from salesdesk_client_sdk.tracing import TraceContext  # noqa: E402

API_BASE_URL = "https://api.example.com"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("SALESDESK_ENV", "SALESDESK_API_BASE_URL_DEV", "SALESDESK_TELEMETRY_ENABLED"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SALESDESK_API_BASE_URL", API_BASE_URL)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=API_BASE_URL, retries=2, retry_backoff_seconds=0)


@pytest.fixture
def http(client_config: ClientConfig) -> HttpClient:
    return HttpClient(client_config, trace=TraceContext())
