from __future__ import annotations

from dataclasses import dataclass, field

from salesdesk_client_sdk import ClientValidationError, to_user_facing_error
from salesdesk_client_sdk.exceptions import ApiError


@dataclass(frozen=True, eq=False)
class DashboardServiceError(RuntimeError):
    message: str
    details: str | None = None
    trace_id: str | None = None
    code: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, eq=False)
class AccessDeniedError(DashboardServiceError):
    code: str | None = "ACCESS_DENIED"


def normalize_error(exc: Exception, fallback: str) -> DashboardServiceError:
    if isinstance(exc, DashboardServiceError):
        return exc
    if isinstance(exc, ClientValidationError):
        return DashboardServiceError(
            message=str(exc),
            code="VALIDATION_ERROR",
            field_errors=exc.field_errors,
        )
    if isinstance(exc, ApiError):
        presented = to_user_facing_error(exc, fallback=fallback)
        return DashboardServiceError(
            message=presented.message,
            details=str(exc.details) if exc.details is not None else None,
            trace_id=exc.trace_id,
            code=exc.code,
        )
    return DashboardServiceError(message=str(exc) or fallback)
