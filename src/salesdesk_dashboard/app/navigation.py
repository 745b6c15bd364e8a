from __future__ import annotations

from dataclasses import dataclass

from salesdesk_dashboard.app.state import Route, UserState

PUBLIC_ROUTES: frozenset[str] = frozenset({Route.SIGNIN.value, Route.SIGNUP.value})


@dataclass(frozen=True)
class GuardDecision:
    allowed: bool
    path: str
    redirect_to: str | None = None


def resolve(path: str, session: UserState) -> GuardDecision:
    """Let public routes through; anything else needs a token or goes to sign-in."""
    normalized = "/" + path.strip().strip("/") if path.strip("/ ") else "/"
    if normalized in PUBLIC_ROUTES or session.is_authenticated():
        return GuardDecision(allowed=True, path=normalized)
    return GuardDecision(allowed=False, path=normalized, redirect_to=Route.SIGNIN.value)

