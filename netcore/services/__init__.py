"""Service layer exports."""

from .api_client import APIClient
from .token_cipher import TokenCipherService
from .token_manager import TokenManager

__all__ = [
    "APIClient",
    "TokenCipherService",
    "TokenManager",
]
