"""Credential store.

Holds the single completion-service credential in memory and mirrors it
to a durable key-value backend under a fixed key.
"""

from ..config import CREDENTIAL_STORAGE_KEY
from ..errors import InvalidCredentialError
from .base import KeyValueStore


class CredentialStore:
    """Cached, durably mirrored bearer credential.

    The credential is stored as plain text. Only trimmed, non-empty
    values are accepted; the format is otherwise opaque.
    """

    def __init__(self, backend: KeyValueStore, key: str = CREDENTIAL_STORAGE_KEY):
        self._backend = backend
        self._key = key
        self._cached: str | None = None

    @property
    def key(self) -> str:
        """Storage key the credential is mirrored under."""
        return self._key

    @property
    def backend(self) -> KeyValueStore:
        return self._backend

    async def connect(self) -> None:
        await self._backend.connect()

    async def disconnect(self) -> None:
        await self._backend.disconnect()

    async def save(self, secret: str) -> None:
        """Store a credential, overwriting any prior value.

        Raises:
            InvalidCredentialError: If the secret is empty after trimming
        """
        value = secret.strip() if secret else ""
        if not value:
            raise InvalidCredentialError()
        await self._backend.set(self._key, value)
        self._cached = value

    async def load(self) -> str | None:
        """Return the credential, reading the backend on a cache miss."""
        if self._cached is not None:
            return self._cached
        value = await self._backend.get(self._key)
        if value:
            self._cached = value
        return self._cached

    async def clear(self) -> bool:
        """Forget the credential. Safe to call repeatedly."""
        had_cached = self._cached is not None
        self._cached = None
        removed = await self._backend.delete(self._key)
        return removed or had_cached
