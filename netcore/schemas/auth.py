"""Schemas exchanged with the authentication endpoints."""

from __future__ import annotations

from pydantic import Field

from netcore.models.base import WireModel


class LoginRequest(WireModel):
    """Body of ``POST /auth/login``."""

    email: str
    password: str


class RefreshRequest(WireModel):
    """Body of ``POST /auth/refresh``."""

    refresh_token: str


class AuthResponse(WireModel):
    """Token pair issued by login and refresh; consumed immediately, never stored."""

    access_token: str
    refresh_token: str
    expires_in: int = Field(..., description="Access token lifetime hint in seconds.")


__all__ = ["AuthResponse", "LoginRequest", "RefreshRequest"]
