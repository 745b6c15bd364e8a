from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .models import ApiModel


class Merchant(ApiModel):
    id: str = Field(alias="_id")
    name: str = ""
    created_at: datetime | None = None


class MerchantPayload(BaseModel):
    name: str
