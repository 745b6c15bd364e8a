from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .tracing import TraceContext

logger = logging.getLogger(__name__)

RETRYABLE_METHODS = frozenset({"GET", "HEAD"})


@dataclass
class HttpClient:
    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.trace is None:
            self.trace = TraceContext()
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None or self.trace is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json", **self.trace.headers()}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        attempts = self.config.retries + 1 if normalized_method in RETRYABLE_METHODS else 1

        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._log_result(operation, started, status=0)
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=self.trace.trace_id,
                        status_code=0,
                        raw_payload=None,
                    ) from exc
                logger.warning(
                    "http_retry",
                    extra={"method": normalized_method, "path": path, "attempt": attempt + 1, "reason": type(exc).__name__},
                )
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
                logger.warning(
                    "http_retry",
                    extra={"method": normalized_method, "path": path, "attempt": attempt + 1, "status": response.status_code},
                )
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request failed without response")

        self.trace.adopt(response.headers)
        self._log_result(operation, started, status=response.status_code)
        if response.ok:
            if not response.content:
                return None
            return response.json()

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            payload = {"message": response.text}
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        raise map_error(response.status_code, payload, self.trace.trace_id)

    def _log_result(self, operation: str, started: float, *, status: int) -> None:
        logger.info(
            "http_result",
            extra={
                "operation": operation,
                "status": status,
                "duration_ms": int((time.monotonic() - started) * 1000),
                "trace_id": self.trace.trace_id if self.trace else None,
            },
        )
