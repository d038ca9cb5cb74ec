from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from netcore.clients.secret_store import InMemorySecretStore, SecretStore, SQLiteSecretStore
from netcore.core.errors import (
    ItemNotFoundError,
    SecretDecodingError,
    SecretEncodingError,
    StorageBackendError,
)
from netcore.services.token_cipher import TokenCipherService


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SQLiteSecretStore:
    return SQLiteSecretStore(
        str(tmp_path / "nested" / "secrets.db"),
        cipher=TokenCipherService(secret="store-secret"),
    )


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, sqlite_store: SQLiteSecretStore) -> SecretStore:
    if request.param == "memory":
        return InMemorySecretStore()
    return sqlite_store


def test_stores_satisfy_protocol(any_store: SecretStore) -> None:
    assert isinstance(any_store, SecretStore)


def test_set_get_and_upsert(any_store: SecretStore) -> None:
    any_store.set("ns.key", "one")
    any_store.set("ns.key", "two")

    assert any_store.get("ns.key") == "two"


def test_missing_key_raises_not_found(any_store: SecretStore) -> None:
    with pytest.raises(ItemNotFoundError) as excinfo:
        any_store.get("ns.absent")

    assert excinfo.value.key == "ns.absent"


def test_delete_is_idempotent(any_store: SecretStore) -> None:
    any_store.set("ns.key", "value")

    any_store.delete("ns.key")
    any_store.delete("ns.key")

    with pytest.raises(ItemNotFoundError):
        any_store.get("ns.key")


def test_non_text_values_are_rejected(any_store: SecretStore) -> None:
    with pytest.raises(SecretEncodingError):
        any_store.set("ns.key", b"bytes")  # type: ignore[arg-type]


def test_sqlite_store_encrypts_at_rest(tmp_path: Path) -> None:
    db_path = tmp_path / "secrets.db"
    store = SQLiteSecretStore(str(db_path), cipher=TokenCipherService(secret="s"))

    store.set("ns.access_token", "AT1")

    with sqlite3.connect(db_path) as conn:
        (raw,) = conn.execute(
            "SELECT value FROM secrets WHERE key = ?", ("ns.access_token",)
        ).fetchone()
    assert raw != "AT1"
    assert "AT1" not in raw


def test_sqlite_store_survives_reopen(tmp_path: Path) -> None:
    db_path = str(tmp_path / "secrets.db")
    SQLiteSecretStore(db_path, cipher=TokenCipherService(secret="s")).set("k", "v")

    reopened = SQLiteSecretStore(db_path, cipher=TokenCipherService(secret="s"))

    assert reopened.get("k") == "v"


def test_sqlite_store_with_wrong_secret_fails_to_decode(tmp_path: Path) -> None:
    db_path = str(tmp_path / "secrets.db")
    SQLiteSecretStore(db_path, cipher=TokenCipherService(secret="s")).set("k", "v")

    other = SQLiteSecretStore(db_path, cipher=TokenCipherService(secret="other"))

    with pytest.raises(SecretDecodingError):
        other.get("k")


def test_sqlite_store_reseals_values_written_under_retired_secret(tmp_path: Path) -> None:
    db_path = str(tmp_path / "secrets.db")
    SQLiteSecretStore(db_path, cipher=TokenCipherService(secret="old")).set("k", "v")
    rotated = SQLiteSecretStore(
        db_path, cipher=TokenCipherService(secret="new", previous_secrets=["old"])
    )

    assert rotated.get("k") == "v"

    current_only = SQLiteSecretStore(db_path, cipher=TokenCipherService(secret="new"))
    assert current_only.get("k") == "v"


def test_sqlite_backend_failures_are_wrapped(tmp_path: Path) -> None:
    # A directory cannot be opened as a database file.
    with pytest.raises(StorageBackendError):
        SQLiteSecretStore(str(tmp_path), cipher=TokenCipherService(secret="s"))
