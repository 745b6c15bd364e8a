from __future__ import annotations

from typing import Any, Mapping

from ..models_sales import Sale, SaleCreateRequest, SaleListResponse, SaleUpdateRequest
from .base import BaseClient, coerce_model


class SalesClient(BaseClient):
    def list_sales(self) -> list[Sale]:
        data = self._request("GET", "/sales", operation="sales.list")
        if not isinstance(data, dict):
            return []
        return SaleListResponse.model_validate(data).sales_data

    def create_sale(self, payload: SaleCreateRequest | Mapping[str, Any]) -> dict[str, Any] | None:
        request = coerce_model(payload, SaleCreateRequest)
        data = self._request(
            "POST",
            "/sales",
            json_body=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            operation="sales.create",
        )
        return data if isinstance(data, dict) else None

    def update_sale(self, sale_id: str, payload: SaleUpdateRequest | Mapping[str, Any]) -> dict[str, Any] | None:
        request = coerce_model(payload, SaleUpdateRequest)
        data = self._request(
            "PUT",
            f"/sales/{sale_id}",
            json_body=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            operation="sales.update",
        )
        return data if isinstance(data, dict) else None

    def delete_sale(self, sale_id: str) -> None:
        self._request("DELETE", f"/sales/{sale_id}", operation="sales.delete")
