"""Client settings from the environment.

``SALESDESK_ENV`` (or ``--env`` on the command line) names a profile such as
``dev`` or ``prod``. Any setting can be pinned per profile by suffixing its
variable with the profile name, e.g. ``SALESDESK_API_BASE_URL_PROD``; the
unsuffixed variable is the fallback. A saved sign-in belongs to the profile
it was made under and is not reused by another one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable
from urllib.parse import urlparse

from dotenv import load_dotenv

ENV_PREFIX = "SALESDESK_"
DEFAULT_PROFILE = "dev"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 3
    retry_backoff_seconds: float = 0.3
    max_connections: int = 20
    verify_ssl: bool = True


@dataclass(frozen=True)
class _NumericSetting:
    field: str
    parse: Callable[[str], float]
    default: str
    minimum: float
    inclusive: bool = True

    @property
    def variable(self) -> str:
        return f"{ENV_PREFIX}{self.field.upper()}"


_NUMERIC_SETTINGS = (
    _NumericSetting("connect_timeout_seconds", float, "5", 0, inclusive=False),
    _NumericSetting("read_timeout_seconds", float, "15", 0, inclusive=False),
    _NumericSetting("retries", int, "3", 0),
    _NumericSetting("retry_backoff_seconds", float, "0.3", 0),
    _NumericSetting("max_connections", int, "20", 1),
)


def _lookup(variable: str, profile: str) -> str | None:
    for key in (f"{variable}_{profile.upper()}", variable):
        value = (os.getenv(key) or "").strip()
        if value:
            return value
    return None


def _read_number(setting: _NumericSetting, profile: str) -> float:
    raw = _lookup(setting.variable, profile) or setting.default
    try:
        value = setting.parse(raw)
    except ValueError as exc:
        kind = "an integer" if setting.parse is int else "a number"
        raise ConfigError(f"Invalid {setting.variable}: expected {kind}, got {raw!r}") from exc
    if value < setting.minimum or (value == setting.minimum and not setting.inclusive):
        bound = ">=" if setting.inclusive else ">"
        raise ConfigError(f"Invalid {setting.variable}: expected {bound} {setting.minimum}, got {value}")
    return value


def _read_base_url(profile: str) -> str:
    variable = f"{ENV_PREFIX}API_BASE_URL"
    url = _lookup(variable, profile)
    if not url:
        raise ConfigError(f"Missing required config value: {variable} (or {variable}_{profile.upper()})")
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"Invalid {variable}: expected an http(s) URL, got {url!r}")
    return url.rstrip("/")


def load_config(env_file: str | None = None, *, env_name: str | None = None) -> ClientConfig:
    load_dotenv(env_file)
    profile = (env_name or os.getenv(f"{ENV_PREFIX}ENV") or DEFAULT_PROFILE).strip().lower()

    numbers = {setting.field: _read_number(setting, profile) for setting in _NUMERIC_SETTINGS}
    verify = _lookup(f"{ENV_PREFIX}VERIFY_SSL", profile)
    return ClientConfig(
        env_name=profile,
        api_base_url=_read_base_url(profile),
        verify_ssl=True if verify is None else verify.lower() in {"1", "true", "yes", "on"},
        **numbers,
    )
