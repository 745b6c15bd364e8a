from __future__ import annotations

import logging

from salesdesk_client_sdk import ApiSession, Merchant, validate_merchant_form

from salesdesk_dashboard.services.errors import normalize_error

logger = logging.getLogger(__name__)


class MerchantsService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session
        self.merchants: list[Merchant] = []

    def list_merchants(self) -> list[Merchant]:
        try:
            self.merchants = self.session.merchants_client().list_merchants()
        except Exception as exc:
            logger.warning("merchants_list_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc, "Failed to load merchants") from exc
        logger.info("merchants_list_success", extra={"count": len(self.merchants)})
        return self.merchants

    def create(self, name: str) -> Merchant:
        try:
            values = validate_merchant_form(name)
            merchant = self.session.merchants_client().create_merchant(values["name"])
        except Exception as exc:
            logger.warning("merchants_create_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc, "Failed to create merchant") from exc
        self.merchants.append(merchant)
        logger.info("merchants_create_success", extra={"merchant_id": merchant.id})
        return merchant

    def update(self, merchant_id: str, name: str) -> Merchant:
        try:
            values = validate_merchant_form(name)
            merchant = self.session.merchants_client().update_merchant(merchant_id, values["name"])
        except Exception as exc:
            logger.warning("merchants_update_failure", extra={"merchant_id": merchant_id, "error": type(exc).__name__})
            raise normalize_error(exc, "Failed to update merchant") from exc
        self.merchants = [merchant if row.id == merchant.id else row for row in self.merchants]
        logger.info("merchants_update_success", extra={"merchant_id": merchant_id})
        return merchant

    def delete(self, merchant_id: str) -> None:
        try:
            self.session.merchants_client().delete_merchant(merchant_id)
        except Exception as exc:
            logger.warning("merchants_delete_failure", extra={"merchant_id": merchant_id, "error": type(exc).__name__})
            raise normalize_error(exc, "Failed to delete merchant") from exc
        self.merchants = [row for row in self.merchants if row.id != merchant_id]
        logger.info("merchants_delete_success", extra={"merchant_id": merchant_id})
