from __future__ import annotations

import pytest

from salesdesk_client_sdk.config import ConfigError, load_config


def test_load_config_requires_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SALESDESK_API_BASE_URL", raising=False)
    with pytest.raises(ConfigError, match="SALESDESK_API_BASE_URL"):
        load_config()


def test_load_config_rejects_non_http_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALESDESK_API_BASE_URL", "api.example.com")
    with pytest.raises(ConfigError, match="http"):
        load_config()


def test_load_config_defaults_strip_trailing_slash(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALESDESK_API_BASE_URL", "https://api.example.com/")
    cfg = load_config()
    assert cfg.api_base_url == "https://api.example.com"
    assert cfg.env_name == "dev"
    assert cfg.retries == 3
    assert cfg.max_connections == 20
    assert cfg.connect_timeout_seconds == 5
    assert cfg.read_timeout_seconds == 15
    assert cfg.verify_ssl is True


def test_profile_values_win_over_shared_ones(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALESDESK_ENV", " Staging ")
    monkeypatch.setenv("SALESDESK_API_BASE_URL_STAGING", "https://staging.example.com")
    monkeypatch.setenv("SALESDESK_RETRIES", "5")
    monkeypatch.setenv("SALESDESK_RETRIES_STAGING", "1")
    monkeypatch.setenv("SALESDESK_VERIFY_SSL_STAGING", "false")

    cfg = load_config()

    assert cfg.env_name == "staging"
    assert cfg.api_base_url == "https://staging.example.com"
    assert cfg.retries == 1
    assert cfg.verify_ssl is False


def test_explicit_profile_overrides_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALESDESK_ENV", "staging")
    monkeypatch.setenv("SALESDESK_API_BASE_URL_PROD", "https://prod.example.com")

    cfg = load_config(env_name="prod")

    assert cfg.env_name == "prod"
    assert cfg.api_base_url == "https://prod.example.com"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("SALESDESK_CONNECT_TIMEOUT_SECONDS", "0"),
        ("SALESDESK_READ_TIMEOUT_SECONDS", "0"),
        ("SALESDESK_RETRIES", "-1"),
        ("SALESDESK_RETRY_BACKOFF_SECONDS", "-0.1"),
        ("SALESDESK_MAX_CONNECTIONS", "0"),
        ("SALESDESK_RETRIES", "many"),
        ("SALESDESK_READ_TIMEOUT_SECONDS", "soon"),
    ],
)
def test_load_config_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigError, match=key):
        load_config()
