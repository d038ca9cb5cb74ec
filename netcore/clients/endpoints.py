"""
Declarative endpoint descriptors.

An ``Endpoint`` fully describes one HTTP call. It is immutable: helpers such as
``with_bearer_token`` return a new descriptor rather than editing the old one.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional
from urllib.parse import quote

import httpx

from netcore.core.errors import InvalidURLError
from netcore.models.user import User
from netcore.schemas.auth import LoginRequest, RefreshRequest

DEFAULT_TIMEOUT_SECONDS = 30.0

_JSON_ACCEPT = {"Accept": "application/json"}
_JSON_BODY = {"Content-Type": "application/json", "Accept": "application/json"}


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class CachePolicy(str, Enum):
    """Protocol-level cache hints; the client keeps no cache of its own."""

    USE_PROTOCOL = "use_protocol"
    RELOAD_IGNORING_CACHE = "reload_ignoring_cache"
    RETURN_CACHE_ELSE_LOAD = "return_cache_else_load"
    RETURN_CACHE_DONT_LOAD = "return_cache_dont_load"

    @property
    def cache_control(self) -> Optional[str]:
        """Value for the ``Cache-Control`` request header, if any."""
        return _CACHE_CONTROL[self]


_CACHE_CONTROL: dict[CachePolicy, Optional[str]] = {
    CachePolicy.USE_PROTOCOL: None,
    CachePolicy.RELOAD_IGNORING_CACHE: "no-cache",
    CachePolicy.RETURN_CACHE_ELSE_LOAD: "max-stale",
    CachePolicy.RETURN_CACHE_DONT_LOAD: "only-if-cached",
}


def _freeze(mapping: Optional[Mapping[str, str]]) -> Optional[Mapping[str, str]]:
    if mapping is None or isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping))


@dataclasses.dataclass(frozen=True)
class Endpoint:
    """Immutable description of a single HTTP request."""

    base_url: str
    path: str
    method: HTTPMethod = HTTPMethod.GET
    headers: Mapping[str, str] = dataclasses.field(
        default_factory=lambda: MappingProxyType({})
    )
    query: Optional[Mapping[str, str]] = None
    body: Optional[bytes] = None
    timeout: Optional[float] = None
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL

    def __post_init__(self) -> None:
        # Frozen dataclass: bypass __setattr__ to store read-only views.
        object.__setattr__(self, "base_url", str(self.base_url))
        object.__setattr__(self, "method", HTTPMethod(self.method))
        object.__setattr__(self, "headers", _freeze(self.headers or {}))
        object.__setattr__(self, "query", _freeze(self.query))

    @property
    def url(self) -> httpx.URL:
        """Base address joined with the path, query parameters appended.

        Raises ``httpx.InvalidURL`` when the result is not a usable URL.
        """
        joined = f"{self.base_url.rstrip('/')}/{self.path.lstrip('/')}"
        url = httpx.URL(joined)
        if self.query:
            url = url.copy_merge_params(dict(self.query))
        return url


def with_bearer_token(endpoint: Endpoint, token: str) -> Endpoint:
    """Return a copy of ``endpoint`` that carries ``Authorization: Bearer <token>``.

    Every other field is passed through unchanged. An authorization header
    already present on the base descriptor (in any casing) is replaced.
    """
    if not token:
        raise ValueError("A non-empty access token is required.")
    headers = {
        key: value
        for key, value in endpoint.headers.items()
        if key.lower() != "authorization"
    }
    headers["Authorization"] = f"Bearer {token}"
    return dataclasses.replace(endpoint, headers=MappingProxyType(headers))


# Wire contract ---------------------------------------------------------------


def _user_path(user_id: str) -> str:
    # The id is one opaque path segment; "/", "?" and "#" are escaped.
    if user_id in ("", ".", ".."):
        raise InvalidURLError(f"Invalid user id: {user_id!r}")
    return f"/users/{quote(user_id, safe='')}"


def get_user(base_url: str, user_id: str) -> Endpoint:
    return Endpoint(base_url=base_url, path=_user_path(user_id), headers=_JSON_ACCEPT)


def get_users(base_url: str) -> Endpoint:
    return Endpoint(base_url=base_url, path="/users", headers=_JSON_ACCEPT)


def update_user(base_url: str, user: User) -> Endpoint:
    return Endpoint(
        base_url=base_url,
        path=_user_path(user.id),
        method=HTTPMethod.PUT,
        headers=_JSON_BODY,
        body=user.to_profile_wire(),
    )


def login(base_url: str, email: str, password: str) -> Endpoint:
    return Endpoint(
        base_url=base_url,
        path="/auth/login",
        method=HTTPMethod.POST,
        headers=_JSON_BODY,
        body=LoginRequest(email=email, password=password).to_wire(),
    )


def refresh_token(base_url: str, token: str) -> Endpoint:
    return Endpoint(
        base_url=base_url,
        path="/auth/refresh",
        method=HTTPMethod.POST,
        headers=_JSON_BODY,
        body=RefreshRequest(refresh_token=token).to_wire(),
    )


__all__ = [
    "CachePolicy",
    "DEFAULT_TIMEOUT_SECONDS",
    "Endpoint",
    "HTTPMethod",
    "get_user",
    "get_users",
    "login",
    "refresh_token",
    "update_user",
    "with_bearer_token",
]
