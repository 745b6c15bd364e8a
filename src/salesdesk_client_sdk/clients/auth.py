from __future__ import annotations

from ..models import LoginResponse
from .base import BaseClient, expect_object


class AuthClient(BaseClient):
    def login(self, email: str, password: str) -> LoginResponse:
        payload = {"email": email, "password": password}
        data = self._request("POST", "/auth/login", json_body=payload, operation="login")
        return LoginResponse.model_validate(expect_object(data, "login"))
