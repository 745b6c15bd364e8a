from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from salesdesk_client_sdk.models import SessionUser


class Route(str, Enum):
    SIGNIN = "/signin"
    SIGNUP = "/signup"
    DASHBOARD = "/"
    ACCOUNTS = "/accounts"
    MERCHANTS = "/merchants"
    SALES = "/sales"
    COMMISSIONS = "/commissions"
    PAYMENTS = "/payments"


@dataclass
class UserState:
    """The authenticated user as the dashboard screens see it."""

    id: str | None = None
    email: str | None = None
    token: str | None = None
    role: str | None = None
    center: str | None = None

    def set_user(
        self,
        *,
        id: str | None,
        email: str | None,
        token: str | None,
        role: str | None,
        center: str | None = None,
    ) -> None:
        self.id = id
        self.email = email
        self.token = token
        self.role = role
        self.center = center or None

    def apply_session_user(self, user: SessionUser, token: str) -> None:
        self.set_user(id=user.id, email=user.email, token=token, role=user.role, center=user.center)

    def logout(self) -> None:
        self.id = None
        self.email = None
        self.token = None
        self.role = None
        self.center = None

    def is_authenticated(self) -> bool:
        return bool(self.token)


@dataclass
class AppState:
    route: Route = Route.SIGNIN
    status_message: str = "Ready"
    error_message: str | None = None
    trace_id: str | None = None
    user: UserState = field(default_factory=UserState)
