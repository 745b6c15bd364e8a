from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .models import ApiModel


class Account(ApiModel):
    id: str = Field(alias="_id")
    username: str
    email: str
    role: str
    status: bool | None = None
    center: str | None = None
    created_at: datetime | None = None


class AccountCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str
    email: str
    password: str
    role: str
    status: bool = False
    center: str | None = None


class AccountUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str
    email: str
    role: str
    status: bool
    password: str | None = None
