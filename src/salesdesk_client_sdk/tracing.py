from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

TRACE_HEADER = "X-Trace-ID"
REQUEST_ID_HEADER = "X-Request-ID"


@dataclass
class TraceContext:
    """Correlation id shared by every call made during one sign-in.

    A gateway that answers with its own request id replaces ours, so error
    reports quote the id the server side logged.
    """

    trace_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = uuid.uuid4().hex
        return self.trace_id

    def headers(self) -> dict[str, str]:
        return {TRACE_HEADER: self.ensure()}

    def adopt(self, headers: Mapping[str, str]) -> None:
        echoed = headers.get(TRACE_HEADER) or headers.get(REQUEST_ID_HEADER)
        if echoed:
            self.trace_id = echoed

    def reset(self) -> None:
        self.trace_id = None
