"""In-process fakes shared by the test modules."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx

from netcore.clients.endpoints import DEFAULT_TIMEOUT_SECONDS, Endpoint
from netcore.clients.transport import Transport, TransportResponse
from netcore.core.errors import StorageBackendError

BASE_URL = "https://api.example.com"

Handler = Callable[[httpx.Request], httpx.Response]


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


def unexpected_request(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"Unexpected request: {request.method} {request.url}")


class RecordingTransport(Transport):
    """Transport wired to an ``httpx.MockTransport`` that records every call."""

    def __init__(
        self,
        handler: Handler = unexpected_request,
        *,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.requests: list[httpx.Request] = []
        self.execute_calls = 0

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(
            httpx.AsyncClient(transport=httpx.MockTransport(_record)),
            default_timeout=default_timeout,
        )

    async def execute(self, endpoint: Endpoint) -> TransportResponse:
        self.execute_calls += 1
        return await super().execute(endpoint)


class FailingSecretStore:
    """Secret store whose writes fail for selected keys."""

    def __init__(self, inner, *, fail_on: set[str]) -> None:
        self._inner = inner
        self._fail_on = fail_on

    def set(self, key: str, value: str) -> None:
        if key in self._fail_on:
            raise StorageBackendError(OSError("disk full"))
        self._inner.set(key, value)

    def get(self, key: str) -> str:
        return self._inner.get(key)

    def delete(self, key: str) -> None:
        self._inner.delete(key)
