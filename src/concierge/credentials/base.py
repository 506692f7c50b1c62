"""Abstract base class for durable key-value backends.

This module defines the interface the credential store persists through.
The abstraction hides:
- Storage format (dict, SQLite table)
- Persistence mechanism (process memory, file)
- Connection management
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract key-value backend.

    Values are stored as plain strings with no expiry.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Read a value, or None if the key was never set."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Write a value, overwriting any previous one."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
