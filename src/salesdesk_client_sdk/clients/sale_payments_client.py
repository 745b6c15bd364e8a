from __future__ import annotations

from typing import Any, Mapping

from ..models_sale_payments import (
    SalePayment,
    SalePaymentQuery,
    SalePaymentRequest,
    SalePaymentStatusUpdate,
)
from .base import BaseClient, coerce_model, expect_list


class SalePaymentsClient(BaseClient):
    def list_payments(self, filters: SalePaymentQuery | Mapping[str, Any] | None = None) -> list[SalePayment]:
        params = None
        if filters is not None:
            query = coerce_model(filters, SalePaymentQuery)
            params = query.model_dump(by_alias=True, exclude_none=True, mode="json") or None
        data = self._request("GET", "/sale-payments/all", params=params, operation="sale_payments.list")
        return [SalePayment.model_validate(row) for row in expect_list(data, "sale payments list")]

    def request_payment(self, payload: SalePaymentRequest | Mapping[str, Any]) -> dict[str, Any] | None:
        # The backend derives commission, net payable and payable-on date from the sale.
        request = coerce_model(payload, SalePaymentRequest)
        data = self._request(
            "POST",
            "/sale-payments/request",
            json_body=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            operation="sale_payments.request",
        )
        return data if isinstance(data, dict) else None

    def update_status(self, payment_id: str, status: str) -> dict[str, Any] | None:
        body = SalePaymentStatusUpdate(id=payment_id, status=status).model_dump()
        data = self._request("PATCH", "/sale-payments/status", json_body=body, operation="sale_payments.status")
        return data if isinstance(data, dict) else None

    def delete_payment(self, payment_id: str) -> None:
        self._request("DELETE", f"/sale-payments/{payment_id}", operation="sale_payments.delete")
