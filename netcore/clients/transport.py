"""
HTTP transport that executes endpoint descriptors.

Low-level failures are classified before the status code is looked at, the
status is validated before any decoding is attempted, and every call is a
single attempt: retrying is left to the caller. Only ``httpx`` request errors
are translated; any other exception raised while sending propagates as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from netcore.clients.endpoints import DEFAULT_TIMEOUT_SECONDS, Endpoint
from netcore.core.errors import (
    DecodingError,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    NoConnectionError,
    RequestFailedError,
    RequestTimeoutError,
    UnauthorizedError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw outcome of a validated request."""

    content: bytes
    status_code: int
    headers: Mapping[str, str]


class Transport:
    """Execute ``Endpoint`` descriptors over HTTP using ``httpx``."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._default_timeout = default_timeout
        self._adapters: dict[Any, TypeAdapter] = {}

    async def execute(self, endpoint: Endpoint) -> TransportResponse:
        """Send the request and return the body, status and headers of a 2xx reply."""
        request = self._build_request(endpoint)
        response = await self._send(request)
        self._validate(response)
        return TransportResponse(
            content=response.content,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    async def request(self, endpoint: Endpoint, target: Type[T]) -> T:
        """Execute ``endpoint`` and decode the JSON body into ``target``."""
        result = await self.execute(endpoint)
        return self._decode(result.content, target)

    async def request_no_content(self, endpoint: Endpoint) -> None:
        """Execute ``endpoint`` for its side effect, discarding any body."""
        await self.execute(endpoint)

    async def download(self, endpoint: Endpoint) -> bytes:
        """Execute ``endpoint`` and return the raw response body."""
        result = await self.execute(endpoint)
        return result.content

    async def upload(
        self,
        data: bytes,
        endpoint: Endpoint,
        *,
        mime_type: str,
        target: Type[T],
    ) -> T:
        """Send ``data`` as the request body and decode the JSON reply."""
        request = self._build_request(endpoint, content=data)
        request.headers["Content-Type"] = mime_type
        request.headers["Content-Length"] = str(len(data))
        response = await self._send(request)
        self._validate(response)
        return self._decode(response.content, target)

    # Internals ---------------------------------------------------------------

    def _build_request(
        self, endpoint: Endpoint, *, content: Optional[bytes] = None
    ) -> httpx.Request:
        try:
            url = endpoint.url
        except httpx.InvalidURL as exc:
            raise InvalidURLError(f"The URL provided was invalid: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURLError(f"The URL provided was invalid: {url}")

        headers = dict(endpoint.headers)
        cache_control = endpoint.cache_policy.cache_control
        if cache_control and not any(k.lower() == "cache-control" for k in headers):
            headers["Cache-Control"] = cache_control

        timeout = endpoint.timeout
        if timeout is None:
            timeout = self._default_timeout
        return httpx.Request(
            endpoint.method.value,
            url,
            headers=headers,
            content=content if content is not None else endpoint.body,
            extensions={"timeout": httpx.Timeout(timeout).as_dict()},
        )

    async def _send(self, request: httpx.Request) -> httpx.Response:
        logger.debug("Sending %s %s%s", request.method, request.url.host, request.url.path)
        try:
            if self._client is not None:
                response = await self._client.send(request)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.send(request)
        except httpx.TimeoutException as exc:
            logger.warning("Request to %s timed out", request.url.host)
            raise RequestTimeoutError() from exc
        except httpx.ConnectError as exc:
            logger.warning("Could not connect to %s: %s", request.url.host, exc)
            raise NoConnectionError() from exc
        except httpx.UnsupportedProtocol as exc:
            raise InvalidURLError(f"The URL provided was invalid: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("Request to %s failed: %s", request.url.host, exc)
            raise RequestFailedError(exc) from exc

        logger.debug("Received %s from %s", response.status_code, request.url.path)
        return response

    @staticmethod
    def _validate(response: httpx.Response) -> None:
        status_code = response.status_code
        if not 100 <= status_code <= 599:
            raise InvalidResponseError()
        if 200 <= status_code <= 299:
            return
        if status_code == HTTPStatus.UNAUTHORIZED:
            raise UnauthorizedError()
        logger.warning("HTTP %s returned for %s", status_code, response.request.url.path)
        raise HTTPStatusError(status_code, response.content or None)

    def _decode(self, content: bytes, target: Type[T]) -> T:
        adapter = self._adapters.get(target)
        if adapter is None:
            adapter = TypeAdapter(target)
            self._adapters[target] = adapter
        try:
            return adapter.validate_json(content)
        except ValidationError as exc:
            raise DecodingError(exc) from exc


__all__ = ["Transport", "TransportResponse"]
