from __future__ import annotations

import logging

from salesdesk_client_sdk import ApiSession, LoginResponse
from salesdesk_client_sdk.validation import IssueCollector, normalize_text

from salesdesk_dashboard.app.state import UserState
from salesdesk_dashboard.services.errors import normalize_error

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: ApiSession, user: UserState) -> None:
        self.session = session
        self.user = user

    def restore(self) -> bool:
        if self.session.token and self.session.user:
            self.user.apply_session_user(self.session.user, self.session.token)
            return True
        self.user.logout()
        return False

    def login(self, email: str, password: str) -> LoginResponse:
        logger.info("login_attempt")
        try:
            collector = IssueCollector()
            if not normalize_text(email):
                collector.add("email", "Email is required")
            if not password:
                collector.add("password", "Password is required")
            collector.raise_if_any()
            response = self.session.auth_client().login(normalize_text(email), password)
        except Exception as exc:
            logger.warning("login_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc, "Login failed") from exc
        self.session.establish(response)
        self.user.apply_session_user(response.user, response.access_token)
        logger.info("login_success", extra={"role": response.user.role})
        return response

    def logout(self) -> None:
        logger.info("logout")
        self.session.clear()
        self.user.logout()
