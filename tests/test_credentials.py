"""Unit tests for the credentials module."""
import asyncio
import stat

import pytest
from hypothesis import given
from hypothesis import strategies as st

from concierge.credentials import (
    CredentialStore,
    KeyValueStore,
    create_key_value_store,
)
from concierge.credentials.in_memory import InMemoryKeyValueStore
from concierge.credentials.sqlite import SQLiteKeyValueStore
from concierge.errors import InvalidCredentialError


class TestKeyValueStoreInterface:
    """Tests for the abstract KeyValueStore interface."""

    def test_store_is_abstract(self):
        """Test that KeyValueStore cannot be instantiated directly."""
        with pytest.raises(TypeError):
            KeyValueStore()  # type: ignore


class TestKeyValueFactory:
    """Tests for create_key_value_store."""

    def test_create_memory_store(self):
        store = create_key_value_store("memory")
        assert isinstance(store, InMemoryKeyValueStore)
        assert store.backend_type == "memory"

    def test_create_sqlite_store(self, tmp_path):
        store = create_key_value_store("sqlite", path=tmp_path / "store.db")
        assert isinstance(store, SQLiteKeyValueStore)
        assert store.backend_type == "sqlite"

    def test_sqlite_requires_path(self):
        with pytest.raises(TypeError, match="requires 'path'"):
            create_key_value_store("sqlite")

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unsupported store backend"):
            create_key_value_store("redis")


class TestCredentialStore:
    """Tests for CredentialStore over the in-memory backend."""

    @pytest.mark.asyncio
    async def test_round_trip(self, credential_store):
        """Test that a saved credential loads back unchanged."""
        await credential_store.save("abc123")
        assert await credential_store.load() == "abc123"

    @pytest.mark.asyncio
    async def test_load_absent(self, credential_store):
        """Test that load returns None when nothing was ever saved."""
        assert await credential_store.load() is None

    @pytest.mark.asyncio
    async def test_save_trims(self, credential_store):
        """Test that surrounding whitespace is stripped before storing."""
        await credential_store.save("  sk-test \n")
        assert await credential_store.load() == "sk-test"
        assert await credential_store.backend.get("openai_api_key") == "sk-test"

    @pytest.mark.asyncio
    async def test_blank_secret_rejected_and_state_unchanged(self, credential_store):
        """Test that a whitespace secret fails and leaves the old value."""
        await credential_store.save("abc123")

        with pytest.raises(InvalidCredentialError):
            await credential_store.save("   ")

        assert await credential_store.load() == "abc123"

    @pytest.mark.asyncio
    async def test_blank_secret_on_empty_store(self, credential_store):
        with pytest.raises(InvalidCredentialError):
            await credential_store.save("")
        assert await credential_store.load() is None

    @pytest.mark.asyncio
    async def test_save_overwrites(self, credential_store):
        await credential_store.save("first")
        await credential_store.save("second")
        assert await credential_store.load() == "second"

    @pytest.mark.asyncio
    async def test_load_reads_backend_on_cache_miss(self, stored_credential_store):
        """Test that a key written by an earlier session is read back."""
        assert await stored_credential_store.load() == "sk-stored"

    @pytest.mark.asyncio
    async def test_cached_value_survives_backend_change(self, credential_store):
        """Test that load prefers the in-memory copy."""
        await credential_store.save("cached")
        await credential_store.backend.set("openai_api_key", "changed")
        assert await credential_store.load() == "cached"

    @pytest.mark.asyncio
    async def test_clear_is_idempotent(self, credential_store):
        await credential_store.save("abc123")

        assert await credential_store.clear() is True
        assert await credential_store.clear() is False
        assert await credential_store.load() is None

    @pytest.mark.asyncio
    async def test_custom_key(self):
        backend = create_key_value_store("memory")
        store = CredentialStore(backend, key="other_key")
        await store.save("abc")
        assert await backend.get("other_key") == "abc"
        assert await backend.get("openai_api_key") is None

    @given(st.text(alphabet=" \t\n\r", max_size=10))
    def test_blank_secrets_never_stored(self, secret: str):
        """Property test: blank input raises and leaves the stored key alone."""
        async def _run() -> str | None:
            store = CredentialStore(create_key_value_store("memory", initial={"openai_api_key": "keep"}))
            with pytest.raises(InvalidCredentialError):
                await store.save(secret)
            return await store.load()

        assert asyncio.run(_run()) == "keep"


class TestSQLiteKeyValueStore:
    """Tests for the SQLite backend."""

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_path):
        """Test that a saved credential is read back by a new store."""
        path = tmp_path / "nested" / "store.db"

        first = CredentialStore(SQLiteKeyValueStore(path))
        await first.connect()
        try:
            await first.save("sk-durable")
        finally:
            await first.disconnect()

        second = CredentialStore(SQLiteKeyValueStore(path))
        await second.connect()
        try:
            assert await second.load() == "sk-durable"
        finally:
            await second.disconnect()

    @pytest.mark.asyncio
    async def test_file_is_owner_only(self, tmp_path):
        path = tmp_path / "store.db"
        store = SQLiteKeyValueStore(path)
        await store.connect()
        try:
            mode = stat.S_IMODE(path.stat().st_mode)
            assert mode == 0o600
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_set_get_delete(self, tmp_path):
        store = SQLiteKeyValueStore(tmp_path / "store.db")
        await store.connect()
        try:
            assert await store.get("k") is None
            await store.set("k", "v1")
            await store.set("k", "v2")
            assert await store.get("k") == "v2"
            assert await store.delete("k") is True
            assert await store.delete("k") is False
        finally:
            await store.disconnect()

    @pytest.mark.asyncio
    async def test_requires_connect(self, tmp_path):
        store = SQLiteKeyValueStore(tmp_path / "store.db")
        with pytest.raises(RuntimeError, match="not connected"):
            await store.get("k")
