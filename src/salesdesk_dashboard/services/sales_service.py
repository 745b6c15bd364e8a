from __future__ import annotations

import logging
from typing import Any, Mapping

from salesdesk_client_sdk import (
    ApiSession,
    Merchant,
    Sale,
    SaleForm,
    validate_sale_create,
    validate_sale_update,
)

from salesdesk_dashboard.app.state import UserState
from salesdesk_dashboard.services import access_policy
from salesdesk_dashboard.services.errors import AccessDeniedError, DashboardServiceError, normalize_error
from salesdesk_dashboard.telemetry import TelemetryLogger, build_event

logger = logging.getLogger(__name__)


class SalesService:
    def __init__(self, session: ApiSession, user: UserState, *, telemetry: TelemetryLogger | None = None) -> None:
        self.session = session
        self.user = user
        self.telemetry = telemetry or TelemetryLogger(enabled=False)
        self.sales: list[Sale] = []

    def list_sales(self) -> list[Sale]:
        try:
            self.sales = self.session.sales_client().list_sales()
        except Exception as exc:
            logger.warning("sales_list_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc, "Failed to load sales") from exc
        logger.info("sales_list_success", extra={"count": len(self.sales)})
        return self.sales

    def merchant_options(self) -> list[Merchant]:
        try:
            return self.session.merchants_client().list_merchants()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load merchants") from exc

    def can_create(self) -> bool:
        return access_policy.can_create_sale(self.user.role)

    def can_modify(self, sale: Sale) -> bool:
        return access_policy.can_modify_sale(self.user.role, sale)

    def shows_status_field(self) -> bool:
        return access_policy.shows_sale_status_field(self.user.role)

    def create(self, form: SaleForm | Mapping[str, Any]) -> list[Sale]:
        if not self.can_create():
            self._denied("create")
            raise AccessDeniedError(message="Only agents can submit sales")
        try:
            payload = validate_sale_create(
                _form(form),
                include_status=self.shows_status_field(),
                submitted_by=self.user.id,
            )
            self.session.sales_client().create_sale(payload)
        except Exception as exc:
            logger.warning("sales_create_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc, "Failed to submit sale") from exc
        logger.info("sales_create_success", extra={"merchant_id": payload.merchant})
        return self.list_sales()

    def update(self, sale_id: str, form: SaleForm | Mapping[str, Any]) -> list[Sale]:
        sale = self._require_modifiable(sale_id, "update")
        try:
            payload = validate_sale_update(_form(form), include_status=self.shows_status_field())
            self.session.sales_client().update_sale(sale.id, payload)
        except Exception as exc:
            logger.warning("sales_update_failure", extra={"sale_id": sale_id, "error": type(exc).__name__})
            raise normalize_error(exc, "Failed to update sale") from exc
        logger.info("sales_update_success", extra={"sale_id": sale_id})
        return self.list_sales()

    def delete(self, sale_id: str) -> list[Sale]:
        if not sale_id:
            return self.sales
        sale = self._require_modifiable(sale_id, "delete")
        try:
            self.session.sales_client().delete_sale(sale.id)
        except Exception as exc:
            logger.warning("sales_delete_failure", extra={"sale_id": sale_id, "error": type(exc).__name__})
            raise normalize_error(exc, "Failed to delete sale") from exc
        logger.info("sales_delete_success", extra={"sale_id": sale_id})
        return self.list_sales()

    def find(self, sale_id: str) -> Sale | None:
        if not self.sales:
            self.list_sales()
        return next((row for row in self.sales if row.id == sale_id), None)

    def _require_modifiable(self, sale_id: str, action: str) -> Sale:
        sale = self.find(sale_id)
        if sale is None:
            raise DashboardServiceError(message=f"Sale {sale_id} not found", code="NOT_FOUND")
        if not self.can_modify(sale):
            self._denied(action)
            raise AccessDeniedError(message="Only pending sales can be changed by your role")
        return sale

    def _denied(self, action: str) -> None:
        logger.warning("sales_action_denied", extra={"action": action, "role": self.user.role})
        if self.telemetry.enabled:
            self.telemetry.emit(
                build_event(
                    category="permission_denied",
                    name="sales_action_denied",
                    module="sales",
                    action=action,
                    success=False,
                    context={"role": self.user.role},
                )
            )


def _form(form: SaleForm | Mapping[str, Any]) -> SaleForm:
    if isinstance(form, SaleForm):
        return form
    return SaleForm(**{key: value for key, value in form.items() if key in SaleForm.__dataclass_fields__})
