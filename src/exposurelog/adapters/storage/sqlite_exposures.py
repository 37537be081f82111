"""SQLite storage adapter for exposure records."""

import logging
from collections.abc import AsyncIterable

from exposurelog.adapters.storage.identity import assign_identity
from exposurelog.adapters.storage.sqlite_database import ExposureDatabase
from exposurelog.core.models import ExposureRecord
from exposurelog.core.schema import (
    COLUMNS,
    INTEGER_MAX,
    INTEGER_MIN,
    TABLE_NAME,
    from_row,
    to_row,
)

logger = logging.getLogger(__name__)

_COLUMN_LIST = ", ".join(COLUMNS)
_PLACEHOLDERS = ", ".join("?" for _ in COLUMNS)

_INSERT_EXPOSURE = f"""
INSERT INTO {TABLE_NAME} ({_COLUMN_LIST}) VALUES ({_PLACEHOLDERS})
"""

_UPSERT_EXPOSURE = f"""
INSERT OR REPLACE INTO {TABLE_NAME} (id, {_COLUMN_LIST}) VALUES (?, {_PLACEHOLDERS})
"""

_SELECT_EXPOSURES = f"""
SELECT id, {_COLUMN_LIST}
FROM {TABLE_NAME}
WHERE date_millis_since_epoch > ?
ORDER BY date_millis_since_epoch ASC, id ASC
"""

_SELECT_EXPOSURE_BY_ID = f"""
SELECT id, {_COLUMN_LIST} FROM {TABLE_NAME} WHERE id = ?
"""

_COUNT_EXPOSURES = f"""
SELECT COUNT(*) FROM {TABLE_NAME}
"""

_DELETE_EXPOSURE = f"""
DELETE FROM {TABLE_NAME} WHERE id = ?
"""

_DELETE_EXPOSURES_BEFORE = f"""
DELETE FROM {TABLE_NAME} WHERE date_millis_since_epoch < ?
"""

_CLEAR_EXPOSURES = f"""
DELETE FROM {TABLE_NAME}
"""


def _bound(millis: int) -> int:
    """Clamp a date bound into the range SQLite binds as INTEGER."""
    return max(INTEGER_MIN, min(millis, INTEGER_MAX))


class SQLiteExposureStorage:
    """SQLite implementation of ExposureStoragePort.

    Stores exposure records using aiosqlite for non-blocking async
    operations. Connections and the table layout are owned by
    ExposureDatabase; ids come from an AUTOINCREMENT primary key and are
    never reused. Date bounds beyond the 64-bit INTEGER range are clamped.

    Sync methods (write_sync, read_sync, count_sync, clear_sync) use the
    standard sqlite3 module for non-async callers. For file-based databases
    sync and async methods share the same file. For :memory: databases they
    use separate in-memory databases.
    """

    def __init__(self, db_path: str) -> None:
        self._db = ExposureDatabase(db_path)

    async def write(self, record: ExposureRecord) -> ExposureRecord:
        """Persist a record, assigning an id if it has none."""
        async with self._db.connection() as db:
            if record.id is None:
                cursor = await db.execute(_INSERT_EXPOSURE, to_row(record))
                record = assign_identity(record, cursor.lastrowid)
                logger.debug("Assigned exposure id %d", record.id)
            else:
                await db.execute(_UPSERT_EXPOSURE, (record.id, *to_row(record)))
            await db.commit()
        return record

    async def get(self, record_id: int) -> ExposureRecord | None:
        """Return the record stored under record_id, or None."""
        async with self._db.connection() as db:
            async with db.execute(_SELECT_EXPOSURE_BY_ID, (record_id,)) as cursor:
                row = await cursor.fetchone()
        return from_row(row) if row else None

    async def read(self, since: int = 0) -> AsyncIterable[ExposureRecord]:
        """Read records with date_millis_since_epoch > since."""
        async with self._db.connection() as db:
            async with db.execute(_SELECT_EXPOSURES, (_bound(since),)) as cursor:
                async for row in cursor:
                    yield from_row(row)

    async def count(self) -> int:
        """Return the number of stored records."""
        async with self._db.connection() as db:
            async with db.execute(_COUNT_EXPOSURES) as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def delete(self, record_id: int) -> bool:
        """Delete one record. Returns True if it existed."""
        async with self._db.connection() as db:
            cursor = await db.execute(_DELETE_EXPOSURE, (record_id,))
            deleted = cursor.rowcount
            await db.commit()
        return deleted > 0

    async def delete_before(self, date_millis_since_epoch: int) -> int:
        """Delete records dated strictly before the given day."""
        async with self._db.connection() as db:
            cursor = await db.execute(
                _DELETE_EXPOSURES_BEFORE, (_bound(date_millis_since_epoch),)
            )
            deleted = cursor.rowcount
            await db.commit()
        logger.debug("Deleted %d exposures before %d", deleted, date_millis_since_epoch)
        return deleted

    async def clear(self) -> None:
        """Delete all records."""
        async with self._db.connection() as db:
            await db.execute(_CLEAR_EXPOSURES)
            await db.commit()

    async def close(self) -> None:
        """Close persistent connections (for :memory: databases)."""
        await self._db.close()

    # --- Sync methods using standard sqlite3 module ---

    def write_sync(self, record: ExposureRecord) -> ExposureRecord:
        """Synchronous write for non-async contexts."""
        with self._db.sync_connection() as conn:
            if record.id is None:
                cursor = conn.execute(_INSERT_EXPOSURE, to_row(record))
                record = assign_identity(record, cursor.lastrowid)
                logger.debug("Assigned exposure id %d", record.id)
            else:
                conn.execute(_UPSERT_EXPOSURE, (record.id, *to_row(record)))
            conn.commit()
        return record

    def read_sync(self, since: int = 0) -> list[ExposureRecord]:
        """Synchronous read for non-async contexts."""
        with self._db.sync_connection() as conn:
            cursor = conn.execute(_SELECT_EXPOSURES, (_bound(since),))
            return [from_row(row) for row in cursor]

    def count_sync(self) -> int:
        """Synchronous count for non-async contexts."""
        with self._db.sync_connection() as conn:
            row = conn.execute(_COUNT_EXPOSURES).fetchone()
            return row[0] if row else 0

    def clear_sync(self) -> None:
        """Synchronous clear for non-async contexts."""
        with self._db.sync_connection() as conn:
            conn.execute(_CLEAR_EXPOSURES)
            conn.commit()
