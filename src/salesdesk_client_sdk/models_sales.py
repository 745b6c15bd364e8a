from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from .models import ApiModel, coerce_ref
from .models_merchants import Merchant


class SaleStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"
    REFUNDED = "refunded"


SALE_STATUSES: tuple[str, ...] = tuple(status.value for status in SaleStatus)


class Sale(ApiModel):
    id: str = Field(alias="_id")
    card_number: str | None = None
    expiry_date: str | None = None
    cvv: str | None = None
    billing_address: str | None = None
    amount: Decimal = Decimal("0")
    merchant: Merchant | None = None
    status: str = SaleStatus.PENDING.value
    submitted_by: Any = None
    created_at: datetime | None = None

    @field_validator("merchant", mode="before")
    @classmethod
    def _merchant_ref(cls, value: object) -> object:
        return coerce_ref(value)

    @property
    def merchant_id(self) -> str | None:
        return self.merchant.id if self.merchant else None


class SaleListResponse(ApiModel):
    sales_data: list[Sale] = Field(default_factory=list)

    @field_validator("sales_data", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class SaleCreateRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    card_number: str
    expiry_date: str
    cvv: str
    billing_address: str
    amount: float
    merchant: str
    status: str | None = None
    submitted_by: str | None = None


class SaleUpdateRequest(ApiModel):
    """Card data is locked once a sale exists, so updates never carry it."""

    model_config = ConfigDict(extra="forbid")

    billing_address: str
    amount: float
    merchant: str
    status: str | None = None
