from __future__ import annotations

import logging

from salesdesk_client_sdk import (
    Account,
    AccountCreateRequest,
    AccountUpdateRequest,
    ApiSession,
    validate_account_form,
)

from salesdesk_dashboard.app.state import UserState
from salesdesk_dashboard.services import access_policy
from salesdesk_dashboard.services.errors import normalize_error
from salesdesk_dashboard.telemetry import TelemetryLogger

logger = logging.getLogger(__name__)


class AccountsService:
    def __init__(self, session: ApiSession, user: UserState, *, telemetry: TelemetryLogger | None = None) -> None:
        self.session = session
        self.user = user
        self.telemetry = telemetry or TelemetryLogger(enabled=False)
        self.accounts: list[Account] = []

    def assignable_roles(self) -> list[str]:
        return access_policy.assignable_roles(self.user.role)

    def list_accounts(self) -> list[Account]:
        logger.info("accounts_list_attempt", extra={"role": self.user.role})
        try:
            rows = self.session.accounts_client().list_accounts()
        except Exception as exc:
            logger.warning("accounts_list_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc, "Failed to load accounts") from exc
        self.accounts = access_policy.visible_accounts(rows, self.user)
        logger.info("accounts_list_success", extra={"count": len(self.accounts), "fetched": len(rows)})
        return self.accounts

    def create(self, *, username: str, email: str, password: str, role: str) -> Account:
        try:
            values = validate_account_form(
                username=username,
                email=email,
                role=role,
                password=password,
                require_password=True,
                allowed_roles=self.assignable_roles(),
            )
            payload = AccountCreateRequest(
                username=values["username"],
                email=values["email"],
                password=values["password"],
                role=values["role"],
                status=False,
                center=self.user.id if self.user.role == access_policy.CENTER_ADMIN else None,
            )
            account = self.session.accounts_client().create_account(payload)
        except Exception as exc:
            logger.warning("accounts_create_failure", extra={"error": type(exc).__name__})
            self._emit("create", success=False, error_code=getattr(exc, "code", None))
            raise normalize_error(exc, "Failed to create account") from exc
        self.accounts.append(account)
        logger.info("accounts_create_success", extra={"account_id": account.id, "role": account.role})
        self._emit("create", success=True)
        return account

    def update(
        self,
        account_id: str,
        *,
        username: str,
        email: str,
        role: str,
        status: bool,
        password: str | None = None,
    ) -> list[Account]:
        try:
            values = validate_account_form(
                username=username,
                email=email,
                role=role,
                password=password,
                require_password=False,
                allowed_roles=self.assignable_roles(),
            )
            payload = AccountUpdateRequest(
                username=values["username"],
                email=values["email"],
                role=values["role"],
                status=bool(status),
                password=values["password"] or None,
            )
            self.session.accounts_client().update_account(account_id, payload)
        except Exception as exc:
            logger.warning("accounts_update_failure", extra={"account_id": account_id, "error": type(exc).__name__})
            self._emit("update", success=False, error_code=getattr(exc, "code", None))
            raise normalize_error(exc, "Failed to update account") from exc
        logger.info("accounts_update_success", extra={"account_id": account_id})
        self._emit("update", success=True)
        return self.list_accounts()

    def delete(self, account_id: str) -> None:
        try:
            self.session.accounts_client().delete_account(account_id)
        except Exception as exc:
            logger.warning("accounts_delete_failure", extra={"account_id": account_id, "error": type(exc).__name__})
            self._emit("delete", success=False, error_code=getattr(exc, "code", None))
            raise normalize_error(exc, "Failed to delete account") from exc
        self.accounts = [row for row in self.accounts if row.id != account_id]
        logger.info("accounts_delete_success", extra={"account_id": account_id})
        self._emit("delete", success=True)

    def _emit(self, action: str, *, success: bool, error_code: str | None = None) -> None:
        self.telemetry.api_result(module="accounts", action=action, success=success, error_code=error_code)
