"""
Domain-level API client.

Each operation builds one endpoint descriptor, attaches the bearer token when
the operation needs a session, and hands the descriptor to the transport.
"""

from __future__ import annotations

import logging
from typing import List

from netcore.clients import endpoints
from netcore.clients.endpoints import Endpoint, with_bearer_token
from netcore.clients.transport import Transport
from netcore.core.errors import (
    InvalidCredentialsError,
    InvalidResponseError,
    UnauthorizedError,
)
from netcore.models.user import User
from netcore.schemas.auth import AuthResponse
from netcore.services.token_manager import TokenManager

logger = logging.getLogger(__name__)


class APIClient:
    """Login, logout and user operations against the backend."""

    def __init__(
        self,
        transport: Transport,
        token_manager: TokenManager,
        *,
        base_url: str,
    ) -> None:
        self._transport = transport
        self._tokens = token_manager
        self._base_url = str(base_url)

    async def login(self, email: str, password: str) -> bool:
        """Authenticate and store the issued token pair. Single attempt."""
        if not email or not password:
            raise InvalidCredentialsError("Email and password cannot be empty.")

        endpoint = endpoints.login(self._base_url, email, password)
        auth = await self._transport.request(endpoint, AuthResponse)
        if not auth.access_token or not auth.refresh_token:
            raise InvalidResponseError("Login response did not include a token pair.")
        self._tokens.set_tokens(auth.access_token, auth.refresh_token)
        logger.info("Login succeeded.")
        return True

    async def logout(self) -> None:
        """Forget the local session. No network round trip is made."""
        self._tokens.clear_tokens()
        logger.info("Logged out.")

    async def fetch_user(self, user_id: str) -> User:
        endpoint = self._authenticated(endpoints.get_user(self._base_url, user_id))
        return await self._transport.request(endpoint, User)

    async def update_user(self, user: User) -> User:
        endpoint = self._authenticated(endpoints.update_user(self._base_url, user))
        return await self._transport.request(endpoint, User)

    async def fetch_users(self) -> List[User]:
        endpoint = self._authenticated(endpoints.get_users(self._base_url))
        return await self._transport.request(endpoint, List[User])

    def _authenticated(self, endpoint: Endpoint) -> Endpoint:
        # Missing credentials are reported exactly like a 401 from the server.
        access_token = self._tokens.access_token
        if access_token is None:
            raise UnauthorizedError()
        return with_bearer_token(endpoint, access_token)


__all__ = ["APIClient"]
