from __future__ import annotations

from typing import Any, Mapping

from ..models_accounts import Account, AccountCreateRequest, AccountUpdateRequest
from .base import BaseClient, coerce_model, expect_list, expect_object


class AccountsClient(BaseClient):
    def list_accounts(self) -> list[Account]:
        data = self._request("GET", "/users", operation="users.list")
        return [Account.model_validate(row) for row in expect_list(data, "users list")]

    def create_account(self, payload: AccountCreateRequest | Mapping[str, Any]) -> Account:
        request = coerce_model(payload, AccountCreateRequest)
        data = self._request(
            "POST",
            "/users",
            json_body=request.model_dump(mode="json", exclude_none=True),
            operation="users.create",
        )
        return Account.model_validate(expect_object(data, "create user"))

    def update_account(self, account_id: str, payload: AccountUpdateRequest | Mapping[str, Any]) -> dict[str, Any] | None:
        request = coerce_model(payload, AccountUpdateRequest)
        body = request.model_dump(mode="json", exclude_none=True)
        if not body.get("password"):
            body.pop("password", None)
        data = self._request("PUT", f"/users/{account_id}", json_body=body, operation="users.update")
        return data if isinstance(data, dict) else None

    def delete_account(self, account_id: str) -> None:
        self._request("DELETE", f"/users/{account_id}", operation="users.delete")
