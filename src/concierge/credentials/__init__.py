"""Credential storage module.

Persists the completion-service credential across sessions.
"""

from .base import KeyValueStore
from .factory import create_key_value_store
from .store import CredentialStore

__all__ = [
    "CredentialStore",
    "KeyValueStore",
    "create_key_value_store",
]
