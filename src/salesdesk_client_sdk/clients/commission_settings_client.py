from __future__ import annotations

from typing import Any, Mapping

from ..models_commissions import CenterAdmin, CommissionSetting, CommissionSettingRequest
from .base import BaseClient, coerce_model, expect_list


class CommissionSettingsClient(BaseClient):
    def list_settings(self) -> list[CommissionSetting]:
        data = self._request("GET", "/commission-settings", operation="commission_settings.list")
        return [CommissionSetting.model_validate(row) for row in expect_list(data, "commission settings list")]

    def available_centers(self) -> list[CenterAdmin]:
        data = self._request(
            "GET",
            "/commission-settings/available-centers",
            operation="commission_settings.available_centers",
        )
        return [CenterAdmin.model_validate(row) for row in expect_list(data, "available centers")]

    def create_setting(self, payload: CommissionSettingRequest | Mapping[str, Any]) -> dict[str, Any] | None:
        request = coerce_model(payload, CommissionSettingRequest)
        data = self._request(
            "POST",
            "/commission-settings",
            json_body=request.model_dump(mode="json", by_alias=True),
            operation="commission_settings.create",
        )
        return data if isinstance(data, dict) else None

    def update_setting(
        self, setting_id: str, payload: CommissionSettingRequest | Mapping[str, Any]
    ) -> dict[str, Any] | None:
        request = coerce_model(payload, CommissionSettingRequest)
        data = self._request(
            "PUT",
            f"/commission-settings/{setting_id}",
            json_body=request.model_dump(mode="json", by_alias=True),
            operation="commission_settings.update",
        )
        return data if isinstance(data, dict) else None

    def delete_setting(self, setting_id: str) -> None:
        self._request("DELETE", f"/commission-settings/{setting_id}", operation="commission_settings.delete")
