"""Expose endpoint, transport and secret store building blocks."""

from .endpoints import CachePolicy, Endpoint, HTTPMethod, with_bearer_token
from .secret_store import InMemorySecretStore, SecretStore, SQLiteSecretStore
from .transport import Transport, TransportResponse

__all__ = [
    "CachePolicy",
    "Endpoint",
    "HTTPMethod",
    "InMemorySecretStore",
    "SQLiteSecretStore",
    "SecretStore",
    "Transport",
    "TransportResponse",
    "with_bearer_token",
]
