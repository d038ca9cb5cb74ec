"""
Access/refresh token lifecycle backed by a secret store.

Nothing is cached in memory: every query re-reads the store, so tokens revoked
or replaced outside this process are observed immediately. Refresh is strictly
reactive; callers trigger it after an ``UnauthorizedError``.
"""

from __future__ import annotations

import logging
from typing import Optional

from netcore.clients import endpoints
from netcore.clients.secret_store import SecretStore
from netcore.clients.transport import Transport
from netcore.core.errors import (
    ItemNotFoundError,
    NoRefreshTokenError,
    RefreshFailedError,
    SecretStoreError,
)
from netcore.schemas.auth import AuthResponse

logger = logging.getLogger(__name__)


class TokenManager:
    """Owns the access/refresh token pair for the single active session."""

    def __init__(
        self,
        store: SecretStore,
        transport: Transport,
        *,
        base_url: str,
        namespace: str = "netcore",
    ) -> None:
        self._store = store
        self._transport = transport
        self._base_url = str(base_url)
        self._access_key = f"{namespace}.access_token"
        self._refresh_key = f"{namespace}.refresh_token"

    @property
    def access_token(self) -> Optional[str]:
        return self._read(self._access_key)

    @property
    def refresh_token(self) -> Optional[str]:
        return self._read(self._refresh_key)

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def set_tokens(self, access_token: str, refresh_token: str) -> None:
        """Store a new token pair, replacing any previous one.

        If the refresh token cannot be written after the access token was, the
        access token is removed again so the session reads as unauthenticated
        rather than holding a mismatched pair. The original error is re-raised.
        """
        if not access_token or not refresh_token:
            raise ValueError("Both an access token and a refresh token are required.")

        self._store.set(self._access_key, access_token)
        try:
            self._store.set(self._refresh_key, refresh_token)
        except SecretStoreError:
            logger.error("Refresh token write failed; discarding partial session.")
            try:
                self._store.delete(self._access_key)
            except SecretStoreError:
                logger.exception("Could not remove access token after failed write.")
            raise

    def clear_tokens(self) -> None:
        """Remove both tokens. Safe to call when nothing is stored."""
        # Access token first so the session stops reading as authenticated
        # even if the second delete fails.
        self._store.delete(self._access_key)
        self._store.delete(self._refresh_key)

    async def refresh_access_token(self) -> str:
        """Exchange the stored refresh token for a new pair and return the access token.

        Raises ``NoRefreshTokenError`` without touching the network when no
        refresh token is stored. Transport errors propagate unchanged; callers
        should treat them as the end of the session.
        """
        refresh_token = self.refresh_token
        if refresh_token is None:
            raise NoRefreshTokenError()

        endpoint = endpoints.refresh_token(self._base_url, refresh_token)
        auth = await self._transport.request(endpoint, AuthResponse)
        if not auth.access_token or not auth.refresh_token:
            raise RefreshFailedError()

        self.set_tokens(auth.access_token, auth.refresh_token)
        logger.info("Access token refreshed (expires in %ss).", auth.expires_in)
        return auth.access_token

    def _read(self, key: str) -> Optional[str]:
        try:
            value = self._store.get(key)
        except ItemNotFoundError:
            return None
        return value or None


__all__ = ["TokenManager"]
