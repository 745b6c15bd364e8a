from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from salesdesk_client_sdk import ClientValidationError
from salesdesk_client_sdk.exceptions import ApiError, TransportError

from salesdesk_dashboard.services.errors import AccessDeniedError, DashboardServiceError


@dataclass(frozen=True)
class PresentedError:
    category: str
    message: str
    hint: str
    safe_to_retry: bool
    details: dict[str, Any]

    def render(self, *, expanded: bool = False) -> dict[str, Any]:
        payload = {
            "category": self.category,
            "message": self.message,
            "hint": self.hint,
            "safe_to_retry": self.safe_to_retry,
        }
        if expanded:
            payload["technical_details"] = self.details
        return payload


class ErrorPresenter:
    _CATEGORY_HINTS = {
        "validation": "Please correct the highlighted values and submit again.",
        "permission": "Your role does not allow this action.",
        "conflict": "This request conflicts with current system state.",
        "network": "Network issue detected. Retry when connectivity is stable.",
        "server": "Server error encountered. Retry in a moment or contact support.",
        "fatal": "An unexpected error occurred. Review technical details.",
    }

    def present(self, exc: Exception, *, action: str, timestamp: datetime | None = None) -> PresentedError:
        message = str(exc) or "Unexpected error"
        code = None
        trace_id = None
        raw: Any = None
        field_errors: dict[str, str] = {}
        if isinstance(exc, DashboardServiceError):
            message = exc.message
            code = exc.code
            trace_id = exc.trace_id
            raw = exc.details
            field_errors = dict(exc.field_errors)
        elif isinstance(exc, ApiError):
            message = exc.message
            code = exc.code
            trace_id = exc.trace_id
            raw = exc.details
        elif isinstance(exc, ClientValidationError):
            code = "VALIDATION_ERROR"
            field_errors = exc.field_errors

        normalized_code = (code or "UNKNOWN").upper()
        category = self._categorize(exc, message=message, code=normalized_code, field_errors=field_errors)
        return PresentedError(
            category=category,
            message=message,
            hint=self._CATEGORY_HINTS[category],
            safe_to_retry=category in {"network", "server"},
            details={
                "trace_id": trace_id,
                "code": normalized_code,
                "action": action,
                "timestamp": (timestamp or datetime.now(timezone.utc)).isoformat(),
                "field_errors": field_errors,
                "raw": raw,
            },
        )

    def _categorize(self, exc: Exception, *, message: str, code: str, field_errors: dict[str, str]) -> str:
        if field_errors or isinstance(exc, ClientValidationError):
            return "validation"
        if isinstance(exc, AccessDeniedError):
            return "permission"
        source = exc.__cause__ if isinstance(exc.__cause__, ApiError) else exc
        if isinstance(source, TransportError):
            return "network"
        if isinstance(source, ApiError):
            return self._categorize_status(source.status_code) or self._categorize_probe(message, code)
        return self._categorize_probe(message, code)

    @staticmethod
    def _categorize_status(status_code: int) -> str | None:
        if status_code in {400, 422}:
            return "validation"
        if status_code in {401, 403}:
            return "permission"
        if status_code == 409:
            return "conflict"
        if status_code >= 500:
            return "server"
        return None

    @staticmethod
    def _categorize_probe(message: str, code: str) -> str:
        probe = f"{message} {code}".lower()
        if any(token in probe for token in {"validation", "invalid", "required", "bad_request"}):
            return "validation"
        if any(token in probe for token in {"permission", "forbidden", "unauthorized", "denied"}):
            return "permission"
        if any(token in probe for token in {"conflict", "already"}):
            return "conflict"
        if any(token in probe for token in {"timeout", "network", "transport", "connection"}):
            return "network"
        if any(token in probe for token in {"server", "unavailable"}):
            return "server"
        return "fatal"
