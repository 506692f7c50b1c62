"""SQLite key-value backend.

Provides durable storage across sessions using a SQLite database file.
Uses aiosqlite for async access.

Values are stored in plain text. The database file is restricted to
owner read/write when the backend connects.
"""

import os
from datetime import datetime
from pathlib import Path

import aiosqlite

from .base import KeyValueStore


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed key-value store."""

    def __init__(self, path: str | Path):
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database file and create the schema."""
        if self._connection is not None:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        os.chmod(self._db_path, 0o600)
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("SQLiteKeyValueStore is not connected; call connect() first")
        return self._connection

    async def get(self, key: str) -> str | None:
        conn = self._require_connection()
        async with conn.execute("SELECT value FROM kv WHERE key = ?", (key,)) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        conn = self._require_connection()
        await conn.execute("""
            INSERT INTO kv (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
        """, (key, value, datetime.now().isoformat()))
        await conn.commit()

    async def delete(self, key: str) -> bool:
        conn = self._require_connection()
        cursor = await conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        await conn.commit()
        return cursor.rowcount > 0

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
