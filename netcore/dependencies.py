"""
Factory functions that assemble the networking core from settings.

Every component receives its collaborators explicitly; there is no
module-level session object. Callers build one ``APIClient`` per session and
pass the same ``TokenManager`` to whatever else needs it.
"""

from __future__ import annotations

from typing import Optional

import httpx

from netcore.clients import InMemorySecretStore, SecretStore, SQLiteSecretStore, Transport
from netcore.core.config import AppSettings
from netcore.services import APIClient, TokenCipherService, TokenManager


def build_token_cipher(settings: AppSettings) -> TokenCipherService:
    """Provide symmetric encryption helper for token storage."""
    secret = settings.secret_store.encryption_secret
    if not secret:
        raise ValueError("TOKEN_ENCRYPTION_SECRET is not configured.")
    previous = settings.secret_store.previous_encryption_secrets.split(",")
    return TokenCipherService(
        secret=secret, previous_secrets=[item.strip() for item in previous]
    )


def build_secret_store(settings: AppSettings) -> SecretStore:
    """Provide the configured secret store backend."""
    if settings.secret_store.backend == "memory":
        return InMemorySecretStore()
    return SQLiteSecretStore(
        settings.secret_store.db_path, cipher=build_token_cipher(settings)
    )


def build_transport(
    settings: AppSettings, client: Optional[httpx.AsyncClient] = None
) -> Transport:
    """Provide a transport, optionally bound to a caller-owned httpx client."""
    return Transport(client, default_timeout=settings.api.timeout_seconds)


def build_token_manager(
    settings: AppSettings,
    *,
    transport: Transport,
    store: Optional[SecretStore] = None,
) -> TokenManager:
    return TokenManager(
        store if store is not None else build_secret_store(settings),
        transport,
        base_url=str(settings.api.base_url),
        namespace=settings.secret_store.namespace,
    )


def build_api_client(
    settings: AppSettings,
    *,
    transport: Optional[Transport] = None,
    token_manager: Optional[TokenManager] = None,
) -> APIClient:
    """Assemble an ``APIClient`` and, when not supplied, its collaborators."""
    transport = transport or build_transport(settings)
    token_manager = token_manager or build_token_manager(settings, transport=transport)
    return APIClient(transport, token_manager, base_url=str(settings.api.base_url))


__all__ = [
    "build_api_client",
    "build_secret_store",
    "build_token_cipher",
    "build_token_manager",
    "build_transport",
]
