from __future__ import annotations

import pytest

from salesdesk_dashboard.app.navigation import resolve
from salesdesk_dashboard.app.state import UserState


def test_set_user_and_logout() -> None:
    user = UserState()
    user.set_user(id="u1", email="a@example.com", token="jwt", role="agent", center="")

    assert user.is_authenticated()
    assert user.center is None

    user.logout()
    assert (user.id, user.email, user.token, user.role, user.center) == (None, None, None, None, None)
    assert not user.is_authenticated()


@pytest.mark.parametrize("path", ["/signin", "/signup", "signin/"])
def test_public_routes_pass_without_token(path: str) -> None:
    decision = resolve(path, UserState())
    assert decision.allowed
    assert decision.redirect_to is None


@pytest.mark.parametrize("path", ["/", "/sales", "/payments", ""])
def test_private_routes_redirect_to_signin(path: str) -> None:
    decision = resolve(path, UserState())
    assert not decision.allowed
    assert decision.redirect_to == "/signin"


def test_private_routes_pass_with_token() -> None:
    user = UserState()
    user.set_user(id="u1", email=None, token="jwt", role="agent")
    assert resolve("/sales", user).allowed
