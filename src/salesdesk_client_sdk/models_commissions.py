from __future__ import annotations

from decimal import Decimal

from pydantic import ConfigDict, Field, field_validator

from .models import ApiModel, coerce_ref


class CenterAdmin(ApiModel):
    id: str = Field(alias="_id")
    email: str | None = None
    username: str | None = None
    role: str | None = None
    status: bool | None = None

    @property
    def label(self) -> str:
        return f"{self.username or '—'} ({self.email or '—'})"


class CommissionSetting(ApiModel):
    id: str = Field(alias="_id")
    center_id: CenterAdmin | None = None
    commission_percentage: Decimal = Decimal("0")
    chargeback_fee: Decimal = Decimal("0")
    clearing_days: int = 0

    @field_validator("center_id", mode="before")
    @classmethod
    def _center_ref(cls, value: object) -> object:
        return coerce_ref(value)


class CommissionSettingRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    center_id: str
    commission_percentage: float
    chargeback_fee: float
    clearing_days: int
