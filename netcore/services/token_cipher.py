"""
Encryption at rest for values held by the durable secret store.

Each secret is stretched into a Fernet key with SHA-256. New values are always
sealed with the current secret; retired secrets are only used to open values
written before a rotation, so changing ``TOKEN_ENCRYPTION_SECRET`` does not
log every user out.
"""

from __future__ import annotations

import base64
import hashlib
from typing import Iterable, List

from cryptography.fernet import Fernet, InvalidToken, MultiFernet

from netcore.core.errors import SecretDecodingError


def _fernet_for(secret: str) -> Fernet:
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    return Fernet(base64.urlsafe_b64encode(digest))


class TokenCipherService:
    """Seal and open stored credentials, accepting retired secrets on read."""

    def __init__(self, *, secret: str, previous_secrets: Iterable[str] = ()) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        keys: List[Fernet] = [_fernet_for(secret)]
        keys.extend(_fernet_for(old) for old in previous_secrets if old and old != secret)
        self._current = keys[0]
        self._keys = MultiFernet(keys)

    def encrypt(self, plaintext: str) -> str:
        return self._keys.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        try:
            plaintext = self._keys.decrypt(ciphertext.encode("ascii"))
        except (InvalidToken, UnicodeEncodeError) as exc:
            raise SecretDecodingError(
                "Failed to decrypt stored value; the encryption secret may have changed."
            ) from exc
        return plaintext.decode("utf-8")

    def needs_rotation(self, ciphertext: str) -> bool:
        """True when ``ciphertext`` opens only with a retired secret."""
        try:
            self._current.decrypt(ciphertext.encode("ascii"))
        except (InvalidToken, UnicodeEncodeError):
            return True
        return False

    def rotate(self, ciphertext: str) -> str:
        """Re-seal ``ciphertext`` under the current secret."""
        try:
            return self._keys.rotate(ciphertext.encode("ascii")).decode("ascii")
        except (InvalidToken, UnicodeEncodeError) as exc:
            raise SecretDecodingError(
                "Failed to re-encrypt stored value; no configured secret opens it."
            ) from exc


__all__ = ["TokenCipherService"]
