from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ApiError


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None


def _backend_message(exc: ApiError) -> str | None:
    # Transport failures carry the requests exception text, never a backend message.
    payload = exc.raw_payload
    if not isinstance(payload, dict) or not payload.get("message"):
        return None
    return exc.message.strip() or None


def to_user_facing_error(exc: ApiError, fallback: str = "Request failed") -> UserFacingError:
    primary = _backend_message(exc) or fallback
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(message=primary, details=details, trace_id=exc.trace_id)
