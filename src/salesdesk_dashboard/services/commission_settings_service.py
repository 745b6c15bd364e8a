from __future__ import annotations

import logging
from dataclasses import dataclass, field

from salesdesk_client_sdk import ApiSession, CenterAdmin, CommissionSetting, validate_commission_form

from salesdesk_dashboard.services.errors import DashboardServiceError, normalize_error

logger = logging.getLogger(__name__)


@dataclass
class CommissionSnapshot:
    settings: list[CommissionSetting] = field(default_factory=list)
    available_centers: list[CenterAdmin] = field(default_factory=list)


class CommissionSettingsService:
    """Every mutation re-fetches both the settings and the centers still without one."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session
        self.snapshot = CommissionSnapshot()

    def list_settings(self) -> list[CommissionSetting]:
        try:
            self.snapshot.settings = self.session.commission_settings_client().list_settings()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load commission settings") from exc
        return self.snapshot.settings

    def available_centers(self) -> list[CenterAdmin]:
        try:
            self.snapshot.available_centers = self.session.commission_settings_client().available_centers()
        except Exception as exc:
            raise normalize_error(exc, "Failed to load available centers") from exc
        return self.snapshot.available_centers

    def refresh(self) -> CommissionSnapshot:
        self.list_settings()
        self.available_centers()
        logger.info(
            "commission_settings_refreshed",
            extra={"count": len(self.snapshot.settings), "available": len(self.snapshot.available_centers)},
        )
        return self.snapshot

    def create(
        self,
        *,
        center_id: object,
        commission_percentage: object,
        chargeback_fee: object,
        clearing_days: object,
    ) -> CommissionSnapshot:
        try:
            payload = validate_commission_form(
                center_id=center_id,
                commission_percentage=commission_percentage,
                chargeback_fee=chargeback_fee,
                clearing_days=clearing_days,
            )
            self.session.commission_settings_client().create_setting(payload)
        except Exception as exc:
            logger.warning("commission_settings_create_failure", extra={"error": type(exc).__name__})
            raise normalize_error(exc, "Failed to save commission setting") from exc
        logger.info("commission_settings_create_success", extra={"center_id": payload.center_id})
        return self.refresh()

    def update(
        self,
        setting_id: str,
        *,
        commission_percentage: object,
        chargeback_fee: object,
        clearing_days: object,
    ) -> CommissionSnapshot:
        existing = self._find(setting_id)
        try:
            payload = validate_commission_form(
                center_id=existing.center_id.id if existing.center_id else None,
                commission_percentage=commission_percentage,
                chargeback_fee=chargeback_fee,
                clearing_days=clearing_days,
            )
            self.session.commission_settings_client().update_setting(setting_id, payload)
        except Exception as exc:
            logger.warning("commission_settings_update_failure", extra={"setting_id": setting_id, "error": type(exc).__name__})
            raise normalize_error(exc, "Failed to save commission setting") from exc
        logger.info("commission_settings_update_success", extra={"setting_id": setting_id})
        return self.refresh()

    def delete(self, setting_id: str) -> CommissionSnapshot:
        try:
            self.session.commission_settings_client().delete_setting(setting_id)
        except Exception as exc:
            logger.warning("commission_settings_delete_failure", extra={"setting_id": setting_id, "error": type(exc).__name__})
            raise normalize_error(exc, "Failed to delete commission setting") from exc
        logger.info("commission_settings_delete_success", extra={"setting_id": setting_id})
        return self.refresh()

    def _find(self, setting_id: str) -> CommissionSetting:
        if not self.snapshot.settings:
            self.list_settings()
        for setting in self.snapshot.settings:
            if setting.id == setting_id:
                return setting
        raise DashboardServiceError(message=f"Commission setting {setting_id} not found", code="NOT_FOUND")
