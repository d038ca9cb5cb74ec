"""
Application configuration models and helpers.

Centralizes settings so the transport, the token manager and the secret store
share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import os

from pydantic import AnyHttpUrl, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class APISettings(BaseSettings):
    """Where the backend lives and how long a single call may take."""

    model_config = SettingsConfigDict(env_prefix="API_")

    base_url: AnyHttpUrl = Field(
        "https://api.example.com",
        description="Root address every endpoint path is appended to.",
    )
    timeout_seconds: float = Field(30.0, gt=0)


class SecretStoreSettings(BaseSettings):
    """Configuration for credential persistence."""

    model_config = SettingsConfigDict(env_prefix="SECRET_STORE_")

    backend: Literal["memory", "sqlite"] = Field("sqlite")
    db_path: str = Field("data/secrets.db")
    namespace: str = Field(
        "netcore",
        description="Prefix applied to every key written by the token manager.",
    )
    encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting stored tokens."
        ),
    )
    previous_encryption_secrets: str = Field(
        "",
        validation_alias="TOKEN_ENCRYPTION_PREVIOUS_SECRETS",
        description="Comma-separated retired secrets still accepted when reading.",
    )

    @model_validator(mode="after")
    def _require_secret_for_sqlite(self) -> "SecretStoreSettings":
        if self.backend == "sqlite" and not self.encryption_secret:
            raise ValueError(
                "TOKEN_ENCRYPTION_SECRET is required when the sqlite backend is used."
            )
        return self


class AppSettings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    api: APISettings = Field(default_factory=APISettings)
    secret_store: SecretStoreSettings = Field(default_factory=SecretStoreSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "APISettings",
    "AppSettings",
    "SecretStoreSettings",
    "get_settings",
]
