from __future__ import annotations

from ..models_merchants import Merchant, MerchantPayload
from .base import BaseClient, expect_list, expect_object


class MerchantsClient(BaseClient):
    def list_merchants(self) -> list[Merchant]:
        data = self._request("GET", "/merchants", operation="merchants.list")
        return [Merchant.model_validate(row) for row in expect_list(data, "merchants list")]

    def create_merchant(self, name: str) -> Merchant:
        data = self._request(
            "POST",
            "/merchants",
            json_body=MerchantPayload(name=name).model_dump(),
            operation="merchants.create",
        )
        return Merchant.model_validate(expect_object(data, "create merchant"))

    def update_merchant(self, merchant_id: str, name: str) -> Merchant:
        data = self._request(
            "PUT",
            f"/merchants/{merchant_id}",
            json_body=MerchantPayload(name=name).model_dump(),
            operation="merchants.update",
        )
        return Merchant.model_validate(expect_object(data, "update merchant"))

    def delete_merchant(self, merchant_id: str) -> None:
        self._request("DELETE", f"/merchants/{merchant_id}", operation="merchants.delete")
