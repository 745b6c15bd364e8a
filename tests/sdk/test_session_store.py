from __future__ import annotations

from pathlib import Path

from salesdesk_client_sdk.auth_store import AuthStore
from salesdesk_client_sdk.config import ClientConfig
from salesdesk_client_sdk.models import LoginResponse, SessionData, SessionUser
from salesdesk_client_sdk.session import ApiSession


def _login() -> LoginResponse:
    return LoginResponse.model_validate(
        {"access_token": "jwt-1", "user": {"id": "u1", "email": "a@x.io", "role": "center_admin", "center": ""}}
    )


def test_auth_store_round_trip(tmp_path: Path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(access_token="jwt", user=SessionUser(id="u1", role="agent"), env_name="dev"))

    loaded = store.load()
    assert loaded is not None
    assert loaded.access_token == "jwt"
    assert loaded.user.id == "u1"

    store.clear()
    assert store.load() is None


def test_auth_store_discards_corrupt_file(tmp_path: Path) -> None:
    (tmp_path / "session.json").write_text("{not json")
    store = AuthStore(base_dir=tmp_path)

    assert store.load() is None
    assert not (tmp_path / "session.json").exists()


def test_auth_store_discards_invalid_shape(tmp_path: Path) -> None:
    (tmp_path / "session.json").write_text('{"user": {}}')
    assert AuthStore(base_dir=tmp_path).load() is None


def test_api_session_establish_persists_and_restores(tmp_path: Path, client_config: ClientConfig) -> None:
    session = ApiSession(client_config, auth_store=AuthStore(base_dir=tmp_path))
    session.establish(_login())

    assert session.user is not None and session.user.center is None
    assert session.accounts_client().access_token == "jwt-1"

    restored = ApiSession(client_config, auth_store=AuthStore(base_dir=tmp_path))
    assert restored.token == "jwt-1"
    assert restored.user is not None and restored.user.role == "center_admin"

    restored.clear()
    assert restored.token is None
    assert ApiSession(client_config, auth_store=AuthStore(base_dir=tmp_path)).token is None


def test_api_session_ignores_sign_in_from_another_profile(tmp_path: Path, client_config: ClientConfig) -> None:
    ApiSession(client_config, auth_store=AuthStore(base_dir=tmp_path)).establish(_login())

    prod = ClientConfig(env_name="prod", api_base_url="https://prod.example.com")
    session = ApiSession(prod, auth_store=AuthStore(base_dir=tmp_path))

    assert session.token is None
    assert session.user is None


def test_api_session_clear_starts_a_new_trace(tmp_path: Path, client_config: ClientConfig) -> None:
    session = ApiSession(client_config, auth_store=AuthStore(base_dir=tmp_path))
    session.establish(_login())
    assert session.trace is not None
    first = session.trace.ensure()

    session.clear()

    assert session.trace.trace_id is None
    assert session.http is not None and session.http.trace is session.trace
    assert session.trace.ensure() != first
