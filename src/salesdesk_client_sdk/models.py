from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    SUB_ADMIN = "sub_admin"
    CENTER_ADMIN = "center_admin"
    AGENT = "agent"


ROLE_LABELS: dict[str, str] = {
    UserRole.SUPER_ADMIN.value: "Super admin",
    UserRole.SUB_ADMIN.value: "Sub admin",
    UserRole.CENTER_ADMIN.value: "Call center admin",
    UserRole.AGENT.value: "Agent",
}


class ApiModel(BaseModel):
    """Base for backend documents: camelCase on the wire, Mongo `_id` exposed as `id`.

    `populate_by_name` lets payloads that use plain `id` (the login endpoint)
    validate against the same models.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


def coerce_ref(value: object) -> object:
    """Unpopulated references arrive as a bare id string."""
    if isinstance(value, str):
        return {"_id": value}
    return value


class SessionUser(ApiModel):
    id: str = Field(alias="_id")
    email: str | None = None
    role: str | None = None
    center: str | None = None

    @field_validator("center", mode="before")
    @classmethod
    def _empty_center(cls, value: object) -> object:
        return value or None


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: str
    user: SessionUser


class SessionData(BaseModel):
    access_token: str
    user: SessionUser
    env_name: str | None = None
