from __future__ import annotations

import pytest

from salesdesk_client_sdk.error_mapper import map_error
from salesdesk_client_sdk.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from salesdesk_client_sdk.ui_errors import to_user_facing_error


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (400, ValidationError),
        (401, AuthError),
        (403, PermissionError),
        (404, NotFoundError),
        (409, ConflictError),
        (422, ValidationError),
        (429, RateLimitError),
        (503, ServerError),
        (418, ApiError),
    ],
)
def test_map_error_by_status(status: int, expected: type[ApiError]) -> None:
    error = map_error(status, {"message": "nope"}, "trace-1")
    assert type(error) is expected
    assert error.status_code == status
    assert error.trace_id == "trace-1"


def test_map_error_uses_backend_error_name_as_code() -> None:
    error = map_error(404, {"statusCode": 404, "message": "User not found", "error": "Not Found"}, None)
    assert error.code == "NOT_FOUND"
    assert error.message == "User not found"
    assert str(error) == "[404] NOT_FOUND: User not found"


def test_map_error_joins_list_messages() -> None:
    payload = {"statusCode": 400, "message": ["email must be an email", "password too short"], "error": "Bad Request"}
    error = map_error(400, payload, None)
    assert error.message == "email must be an email; password too short"
    assert error.details == ["email must be an email", "password too short"]
    assert error.code == "BAD_REQUEST"


def test_map_error_defaults_without_payload() -> None:
    error = map_error(500, None, None)
    assert error.code == "HTTP_ERROR"
    assert error.message == "Request failed"


def test_user_facing_error_prefers_backend_message() -> None:
    error = map_error(401, {"message": "Invalid credentials"}, "trace-9")
    presented = to_user_facing_error(error, fallback="Login failed")
    assert presented.message == "Invalid credentials"
    assert presented.trace_id == "trace-9"
    assert "HTTP 401" in (presented.details or "")


def test_user_facing_error_falls_back_when_backend_is_silent() -> None:
    error = map_error(401, {"error": "Unauthorized"}, None)
    assert to_user_facing_error(error, fallback="Login failed").message == "Login failed"
