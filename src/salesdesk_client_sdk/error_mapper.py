from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)


def _coerce_message(raw: object) -> str | None:
    # Validation pipes answer with a list of messages.
    if isinstance(raw, (list, tuple)):
        parts = [str(item).strip() for item in raw if str(item).strip()]
        return "; ".join(parts) or None
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _coerce_code(payload: Mapping[str, object]) -> str:
    if payload.get("code"):
        return str(payload["code"])
    error = payload.get("error")
    if isinstance(error, str) and error.strip():
        return error.strip().upper().replace(" ", "_")
    return "HTTP_ERROR"


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code = _coerce_code(payload)
    message = _coerce_message(payload.get("message")) or "Request failed"
    details = payload.get("details")
    if details is None and isinstance(payload.get("message"), list):
        details = list(payload["message"])  # type: ignore[arg-type]
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthError
    elif status_code == 403:
        mapped = PermissionError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )
