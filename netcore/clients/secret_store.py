"""Secret store capability and its in-memory and SQLite-backed implementations."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Protocol, runtime_checkable

from netcore.core.errors import (
    ItemNotFoundError,
    SecretEncodingError,
    StorageBackendError,
)

if TYPE_CHECKING:
    from netcore.services.token_cipher import TokenCipherService


@runtime_checkable
class SecretStore(Protocol):
    """Durable key/value storage for credentials.

    ``get`` raises ``ItemNotFoundError`` for a missing key; ``delete`` treats a
    missing key as success. Backend failures surface as ``StorageBackendError``.
    """

    def set(self, key: str, value: str) -> None:
        ...

    def get(self, key: str) -> str:
        ...

    def delete(self, key: str) -> None:
        ...


def _ensure_text(value: object) -> str:
    if not isinstance(value, str):
        raise SecretEncodingError(
            f"Secret values must be text, got {type(value).__name__}."
        )
    return value


class InMemorySecretStore:
    """Process-local store; contents vanish with the process."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        self._items[key] = _ensure_text(value)

    def get(self, key: str) -> str:
        try:
            return self._items[key]
        except KeyError:
            raise ItemNotFoundError(key) from None

    def delete(self, key: str) -> None:
        self._items.pop(key, None)


class SQLiteSecretStore:
    """Encrypted key/value store persisted in a single SQLite table.

    Values sealed with a retired secret are re-sealed under the current one the
    first time they are read.
    """

    def __init__(self, db_path: str, cipher: TokenCipherService) -> None:
        self._db_path = Path(db_path)
        self._cipher = cipher
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS secrets (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise StorageBackendError(exc) from exc

    def set(self, key: str, value: str) -> None:
        self._write(key, self._cipher.encrypt(_ensure_text(value)))

    def _write(self, key: str, encrypted: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO secrets (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, encrypted),
                )
        except sqlite3.Error as exc:
            raise StorageBackendError(exc) from exc

    def get(self, key: str) -> str:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM secrets WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageBackendError(exc) from exc
        if not row:
            raise ItemNotFoundError(key)
        stored = row["value"]
        value = self._cipher.decrypt(stored)
        if self._cipher.needs_rotation(stored):
            self._write(key, self._cipher.rotate(stored))
        return value

    def delete(self, key: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM secrets WHERE key = ?", (key,))
        except sqlite3.Error as exc:
            raise StorageBackendError(exc) from exc


__all__ = ["InMemorySecretStore", "SQLiteSecretStore", "SecretStore"]
