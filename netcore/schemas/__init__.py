"""Public schema exports."""

from .auth import AuthResponse, LoginRequest, RefreshRequest

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "RefreshRequest",
]
