from __future__ import annotations

import logging
from datetime import date

from salesdesk_client_sdk import (
    PAYMENT_STATUSES,
    ApiSession,
    ClientValidationError,
    Sale,
    SalePayment,
    SalePaymentQuery,
    SalePaymentRequest,
)
from salesdesk_client_sdk.validation import IssueCollector, normalize_text

from salesdesk_dashboard.app.state import UserState
from salesdesk_dashboard.services import access_policy
from salesdesk_dashboard.services.errors import AccessDeniedError, normalize_error
from salesdesk_dashboard.telemetry import TelemetryLogger

logger = logging.getLogger(__name__)


def build_payment_query(
    *,
    status: object = None,
    from_date: object = None,
    to_date: object = None,
) -> SalePaymentQuery:
    collector = IssueCollector()
    normalized_status = normalize_text(status).lower() or None
    if normalized_status and normalized_status not in PAYMENT_STATUSES:
        collector.add("status", f"Status must be one of: {', '.join(PAYMENT_STATUSES)}")
    start = _parse_date(collector, "from", from_date)
    end = _parse_date(collector, "to", to_date)
    if start and end and start > end:
        collector.add("from", "From date must be on or before the To date")
    collector.raise_if_any()
    return SalePaymentQuery(status=normalized_status, from_date=start, to_date=end)


def _parse_date(collector: IssueCollector, field_name: str, value: object) -> date | None:
    if isinstance(value, date):
        return value
    text = normalize_text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        collector.add(field_name, "Date must use the YYYY-MM-DD format")
        return None


class SalePaymentsService:
    def __init__(self, session: ApiSession, user: UserState, *, telemetry: TelemetryLogger | None = None) -> None:
        self.session = session
        self.user = user
        self.telemetry = telemetry or TelemetryLogger(enabled=False)
        self.payments: list[SalePayment] = []
        self.filters = SalePaymentQuery()

    def shows_actions(self) -> bool:
        return access_policy.shows_payment_actions(self.user.role)

    def can_update_status(self) -> bool:
        return access_policy.can_update_payment_status(self.user.role)

    def list_payments(
        self,
        *,
        status: object = None,
        from_date: object = None,
        to_date: object = None,
    ) -> list[SalePayment]:
        try:
            self.filters = build_payment_query(status=status, from_date=from_date, to_date=to_date)
        except ClientValidationError as exc:
            raise normalize_error(exc, "Invalid filters") from exc
        return self.refresh()

    def refresh(self) -> list[SalePayment]:
        try:
            self.payments = self.session.sale_payments_client().list_payments(self.filters)
        except Exception as exc:
            logger.warning("sale_payments_list_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc, "Failed to load sale payments") from exc
        logger.info("sale_payments_list_success", extra={"count": len(self.payments)})
        return self.payments

    def available_sales(self) -> list[Sale]:
        """Sales that no payment references yet, across every status and date."""
        try:
            sales = self.session.sales_client().list_sales()
            payments = self.session.sale_payments_client().list_payments()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load sales") from exc
        referenced = {payment.sale_ref_id for payment in payments if payment.sale_ref_id}
        return [sale for sale in sales if sale.id not in referenced]

    def request(self, sale_id: str) -> list[SalePayment]:
        try:
            collector = IssueCollector()
            sale_id = normalize_text(sale_id)
            if not sale_id:
                collector.add("saleId", "Sale selection is required")
            elif sale_id not in {sale.id for sale in self.available_sales()}:
                collector.add("saleId", "Select a sale that has no payment yet")
            collector.raise_if_any()
            self.session.sale_payments_client().request_payment(
                SalePaymentRequest(sale_id=sale_id, agent_id=self.user.id)
            )
        except Exception as exc:
            logger.warning("sale_payments_request_failure", extra={"sale_id": sale_id, "error": type(exc).__name__})
            self._emit("request", success=False, error_code=getattr(exc, "code", None))
            raise normalize_error(exc, "Failed to request payment") from exc
        logger.info("sale_payments_request_success", extra={"sale_id": sale_id})
        self._emit("request", success=True)
        return self.refresh()

    def update_status(self, payment_id: str, status: str) -> list[SalePayment]:
        if not self.can_update_status():
            logger.warning("sale_payments_status_denied", extra={"role": self.user.role})
            raise AccessDeniedError(message="Your role cannot change payment status")
        try:
            collector = IssueCollector()
            normalized = normalize_text(status).lower()
            if normalized not in PAYMENT_STATUSES:
                collector.add("status", f"Status must be one of: {', '.join(PAYMENT_STATUSES)}")
            collector.raise_if_any()
            self.session.sale_payments_client().update_status(payment_id, normalized)
        except Exception as exc:
            logger.warning("sale_payments_status_failure", extra={"payment_id": payment_id, "error": type(exc).__name__})
            self._emit("update_status", success=False, error_code=getattr(exc, "code", None))
            raise normalize_error(exc, "Failed to update payment status") from exc
        logger.info("sale_payments_status_success", extra={"payment_id": payment_id, "status": normalized})
        self._emit("update_status", success=True, context={"status": normalized})
        return self.refresh()

    def delete(self, payment_id: str) -> list[SalePayment]:
        if not payment_id:
            return self.payments
        try:
            self.session.sale_payments_client().delete_payment(payment_id)
        except Exception as exc:
            logger.warning("sale_payments_delete_failure", extra={"payment_id": payment_id, "error": type(exc).__name__})
            raise normalize_error(exc, "Failed to delete payment") from exc
        logger.info("sale_payments_delete_success", extra={"payment_id": payment_id})
        return self.refresh()

    def _emit(self, action: str, *, success: bool, error_code: str | None = None, context: dict[str, object] | None = None) -> None:
        self.telemetry.api_result(
            module="sale_payments",
            action=action,
            success=success,
            error_code=error_code,
            context=context,
        )
