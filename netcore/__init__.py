"""Networking and authentication core: endpoints, transport, tokens, API client."""

__version__ = "0.1.0"
