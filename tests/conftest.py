"""Pytest configuration shared across the suite."""

from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except ImportError:  # pragma: no cover - rootdir-style collection
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from _fakes import BASE_URL, RecordingTransport, unexpected_request
from netcore.clients.secret_store import InMemorySecretStore
from netcore.services.api_client import APIClient
from netcore.services.token_manager import TokenManager


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def store() -> InMemorySecretStore:
    return InMemorySecretStore()


@pytest.fixture
def make_session(store: InMemorySecretStore):
    """Build ``(client, tokens, transport)`` around a request handler."""

    def _factory(handler=unexpected_request):
        transport = RecordingTransport(handler)
        tokens = TokenManager(store, transport, base_url=BASE_URL, namespace="test")
        client = APIClient(transport, tokens, base_url=BASE_URL)
        return client, tokens, transport

    return _factory
