"""
Error taxonomy shared by the transport, token and client layers.

The hierarchy is flat: each concrete error derives directly from
one of three roots (``NetworkError``, ``AuthenticationError`` and
``SecretStoreError``) so callers can branch on the exact kind or catch a whole
family at once.
"""

from __future__ import annotations

from typing import Optional


class _DescribedError(Exception):
    """Base for errors that carry a user-facing default message."""

    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class _WrappingError(_DescribedError):
    """Error that keeps the lower-level exception it was raised from."""

    def __init__(self, cause: BaseException, message: Optional[str] = None) -> None:
        super().__init__(message or f"{self.default_message} {cause}".strip())
        self.cause = cause
        self.__cause__ = cause


# Network ---------------------------------------------------------------------


class NetworkError(_DescribedError):
    """Root for failures raised while executing an HTTP request."""


class InvalidURLError(NetworkError):
    default_message = "The URL provided was invalid."


class RequestFailedError(_WrappingError, NetworkError):
    default_message = "The request failed:"


class InvalidResponseError(NetworkError):
    default_message = "The server returned an invalid response."


class HTTPStatusError(NetworkError):
    """Non-2xx response other than 401."""

    def __init__(self, status_code: int, body: Optional[bytes] = None) -> None:
        super().__init__(f"HTTP error with status code: {status_code}")
        self.status_code = status_code
        self.body = body


class DecodingError(_WrappingError, NetworkError):
    default_message = "Failed to decode response:"


class UnauthorizedError(NetworkError):
    default_message = "Authentication required. Please log in and try again."


class NoConnectionError(NetworkError):
    default_message = "No internet connection available."


class RequestTimeoutError(NetworkError):
    default_message = "The request timed out."


class UnknownNetworkError(_WrappingError, NetworkError):
    default_message = "An unknown error occurred:"


# Authentication --------------------------------------------------------------


class AuthenticationError(_DescribedError):
    """Root for session-level authentication failures."""


class NoRefreshTokenError(AuthenticationError):
    default_message = "No refresh token available. Please log in again."


class RefreshFailedError(AuthenticationError):
    default_message = "Failed to refresh authentication token. Please log in again."


class InvalidCredentialsError(AuthenticationError):
    default_message = "Invalid email or password."


# Secret storage --------------------------------------------------------------


class SecretStoreError(_DescribedError):
    """Root for failures raised by a secret store backend."""


class ItemNotFoundError(SecretStoreError):
    default_message = "The requested item could not be found in the secret store."

    def __init__(self, key: str) -> None:
        super().__init__(f"{self.default_message} (key={key!r})")
        self.key = key


class SecretEncodingError(SecretStoreError):
    default_message = "Failed to encode the value for storage."


class SecretDecodingError(SecretStoreError):
    default_message = "Failed to decode the stored value."


class StorageBackendError(_WrappingError, SecretStoreError):
    default_message = "The secret store backend failed:"


__all__ = [
    "AuthenticationError",
    "DecodingError",
    "HTTPStatusError",
    "InvalidCredentialsError",
    "InvalidResponseError",
    "InvalidURLError",
    "ItemNotFoundError",
    "NetworkError",
    "NoConnectionError",
    "NoRefreshTokenError",
    "RefreshFailedError",
    "RequestFailedError",
    "RequestTimeoutError",
    "SecretDecodingError",
    "SecretEncodingError",
    "SecretStoreError",
    "StorageBackendError",
    "UnauthorizedError",
    "UnknownNetworkError",
]
