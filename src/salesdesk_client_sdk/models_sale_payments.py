from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import ApiModel, coerce_ref


class PaymentStatus(str, Enum):
    DRAFT = "draft"
    PAID = "paid"
    CANCELED = "canceled"


PAYMENT_STATUSES: tuple[str, ...] = tuple(status.value for status in PaymentStatus)


class SaleRef(ApiModel):
    id: str = Field(alias="_id")
    amount: Decimal | None = None
    status: str | None = None
    created_at: datetime | None = None


class Party(ApiModel):
    id: str = Field(alias="_id")
    username: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        return self.username or self.email or ""


class CommissionSettingRef(ApiModel):
    id: str = Field(alias="_id")
    commission_percentage: Decimal | None = None
    chargeback_fee: Decimal | None = None
    clearing_days: int | None = None


class SalePayment(ApiModel):
    """Settlement row; every computed amount here is produced by the backend."""

    id: str = Field(alias="_id")
    sale_id: SaleRef | None = None
    sale_amount: Decimal = Decimal("0")
    status: str = PaymentStatus.DRAFT.value
    created_at: datetime | None = None
    center_id: Party | None = None
    agent_id: Party | None = None
    commission_setting_id: CommissionSettingRef | None = None
    commission_percentage: Decimal | None = None
    commission_amount: Decimal | None = None
    net_payable: Decimal = Decimal("0")
    payable_on: datetime | None = None

    @field_validator("sale_id", "center_id", "agent_id", "commission_setting_id", mode="before")
    @classmethod
    def _refs(cls, value: object) -> object:
        return coerce_ref(value)

    @property
    def sale_ref_id(self) -> str | None:
        return self.sale_id.id if self.sale_id else None


class SalePaymentQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str | None = None
    from_date: date | None = Field(default=None, alias="from")
    to_date: date | None = Field(default=None, alias="to")


class SalePaymentRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    sale_id: str
    agent_id: str | None = None


class SalePaymentStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    status: str
