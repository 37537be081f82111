"""SQLite database file holding the exposures table.

The table is created on first use. When the file already holds an
``exposures`` table, its columns must match the fixed layout other readers of
the file rely on; a mismatch stops the adapter before any row is touched.
"""

import asyncio
import logging
import sqlite3
import threading
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, closing, contextmanager

import aiosqlite

from exposurelog.core.schema import COLUMNS, TABLE_NAME

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"

# Column names as reported by PRAGMA table_info, in table order.
EXPECTED_COLUMNS: tuple[str, ...] = ("id", *COLUMNS)

_CREATE_TABLE = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date_millis_since_epoch INTEGER NOT NULL,
    received_timestamp_ms INTEGER NOT NULL,
    duration_minutes INTEGER NOT NULL,
    attenuation INTEGER NOT NULL,
    risk_level INTEGER NOT NULL,
    risk_score INTEGER NOT NULL
)
"""

_CREATE_DATE_INDEX = f"""
CREATE INDEX IF NOT EXISTS idx_exposures_date
    ON {TABLE_NAME}(date_millis_since_epoch)
"""

_TABLE_INFO = f"PRAGMA table_info({TABLE_NAME})"


class SchemaMismatchError(RuntimeError):
    """An existing exposures table does not have the expected columns."""


def _check_columns(db_path: str, found: list[str]) -> None:
    if tuple(found) != EXPECTED_COLUMNS:
        raise SchemaMismatchError(
            f"Table {TABLE_NAME!r} in {db_path} has columns {found}, "
            f"expected {list(EXPECTED_COLUMNS)}"
        )


class ExposureDatabase:
    """Connections to one exposures database, async and sync.

    Async callers get aiosqlite connections, sync callers sqlite3 ones. A file
    database is switched to WAL mode and shared by both sides. A :memory:
    database only lives as long as its connection, so each side keeps one
    persistent connection and the two sides do not see each other's rows.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._async_ready = False
        self._async_lock: asyncio.Lock | None = None
        self._async_conn: aiosqlite.Connection | None = None
        self._sync_ready = False
        self._sync_lock = threading.Lock()
        self._sync_conn: sqlite3.Connection | None = None

    @property
    def is_memory(self) -> bool:
        return self.db_path == MEMORY_DB

    async def _prepare_async(self, db: aiosqlite.Connection) -> None:
        if not self.is_memory:
            await db.execute("PRAGMA journal_mode=WAL")
        await db.execute(_CREATE_TABLE)
        async with db.execute(_TABLE_INFO) as cursor:
            found = [row[1] async for row in cursor]
        _check_columns(self.db_path, found)
        await db.execute(_CREATE_DATE_INDEX)
        await db.commit()

    def _prepare_sync(self, conn: sqlite3.Connection) -> None:
        if not self.is_memory:
            conn.execute("PRAGMA journal_mode=WAL")
        conn.execute(_CREATE_TABLE)
        found = [row[1] for row in conn.execute(_TABLE_INFO)]
        _check_columns(self.db_path, found)
        conn.execute(_CREATE_DATE_INDEX)
        conn.commit()

    async def _ensure_async(self) -> None:
        if self._async_ready:
            return
        # Created lazily so the lock binds to the running event loop.
        if self._async_lock is None:
            self._async_lock = asyncio.Lock()
        async with self._async_lock:
            if self._async_ready:
                return
            if self.is_memory:
                self._async_conn = await aiosqlite.connect(MEMORY_DB)
                await self._prepare_async(self._async_conn)
            else:
                async with aiosqlite.connect(self.db_path) as db:
                    await self._prepare_async(db)
            self._async_ready = True
            logger.debug("Exposures table ready in %s", self.db_path)

    def _ensure_sync(self) -> None:
        if self._sync_ready:
            return
        with self._sync_lock:
            if self._sync_ready:
                return
            if self.is_memory:
                self._sync_conn = sqlite3.connect(MEMORY_DB, check_same_thread=False)
                self._prepare_sync(self._sync_conn)
            else:
                with closing(sqlite3.connect(self.db_path)) as conn:
                    self._prepare_sync(conn)
            self._sync_ready = True
            logger.debug("Exposures table ready in %s (sync)", self.db_path)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield an aiosqlite connection with the exposures table in place.

        File database connections are closed on exit; the :memory:
        connection stays open until close().
        """
        await self._ensure_async()
        if self._async_conn is not None:
            yield self._async_conn
            return
        db = await aiosqlite.connect(self.db_path)
        try:
            yield db
        finally:
            await db.close()

    @contextmanager
    def sync_connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a sqlite3 connection with the exposures table in place."""
        self._ensure_sync()
        if self._sync_conn is not None:
            yield self._sync_conn
            return
        with closing(sqlite3.connect(self.db_path)) as conn:
            yield conn

    async def close(self) -> None:
        """Close persistent :memory: connections, discarding their rows."""
        if self._async_conn is not None:
            await self._async_conn.close()
            self._async_conn = None
        self._async_ready = False
        self.close_sync()

    def close_sync(self) -> None:
        if self._sync_conn is not None:
            self._sync_conn.close()
            self._sync_conn = None
        self._sync_ready = False
