"""
SQLite-backed key-value store using aiosqlite.

One table holds every namespaced key with its serialized value.
"""

import asyncio
from pathlib import Path

import aiosqlite

from swipelite.config import get_logger, get_settings
from swipelite.core.exceptions import StorageError
from swipelite.core.interfaces.storage import IKeyValueStore

logger = get_logger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
)
"""


class SQLiteKeyValueStore(IKeyValueStore):
    """Key-value store persisted in a single SQLite file."""

    def __init__(self, db_path: Path | None = None, busy_timeout: int | None = None):
        settings = get_settings()
        self.db_path = db_path or settings.storage.db_path
        self.busy_timeout = busy_timeout or settings.storage.busy_timeout

        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def _connection(self) -> aiosqlite.Connection:
        """Open the connection and create the schema on first use."""
        async with self._lock:
            if self._conn is not None:
                return self._conn

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = await aiosqlite.connect(self.db_path)
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA synchronous=NORMAL")
            await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
            await conn.execute(_SCHEMA)
            await conn.commit()

            self._conn = conn
            logger.info("kv_store_opened", db_path=str(self.db_path))
            return conn

    async def get(self, key: str) -> str | None:
        conn = await self._connection()
        try:
            cursor = await conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to read key '{key}': {e}") from e
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        conn = await self._connection()
        try:
            await conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            raise StorageError(f"Failed to write key '{key}': {e}") from e

    async def delete(self, key: str) -> None:
        conn = await self._connection()
        await conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        await conn.commit()

    async def close(self) -> None:
        async with self._lock:
            if self._conn is not None:
                await self._conn.close()
                self._conn = None
                logger.info("kv_store_closed")
