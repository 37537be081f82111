"""In-memory storage adapter for exposure records."""

import logging
from collections.abc import AsyncIterable

from exposurelog.adapters.storage.identity import assign_identity
from exposurelog.core.models import ExposureRecord

logger = logging.getLogger(__name__)


class InMemoryExposureStorage:
    """In-memory implementation of ExposureStoragePort.

    Stores records in a dict keyed by id. Suitable for testing and hosts
    where persistence is not required. Ids start at 1 and are never reused.
    """

    def __init__(self) -> None:
        self._records: dict[int, ExposureRecord] = {}
        self._next_id = 1

    async def write(self, record: ExposureRecord) -> ExposureRecord:
        """Persist a record, assigning an id if it has none."""
        if record.id is None:
            record = assign_identity(record, self._next_id)
            logger.debug("Assigned exposure id %d", record.id)
        self._next_id = max(self._next_id, record.id + 1)
        self._records[record.id] = record
        return record

    async def get(self, record_id: int) -> ExposureRecord | None:
        """Return the record stored under record_id, or None."""
        return self._records.get(record_id)

    async def read(self, since: int = 0) -> AsyncIterable[ExposureRecord]:
        """Read records with date_millis_since_epoch > since.

        Ordered by date, then id, ascending.
        """
        filtered = [
            r for r in self._records.values() if r.date_millis_since_epoch > since
        ]
        for record in sorted(
            filtered, key=lambda r: (r.date_millis_since_epoch, r.id)
        ):
            yield record

    async def count(self) -> int:
        """Return the number of stored records."""
        return len(self._records)

    async def delete(self, record_id: int) -> bool:
        """Delete one record. Returns True if it existed."""
        return self._records.pop(record_id, None) is not None

    async def delete_before(self, date_millis_since_epoch: int) -> int:
        """Delete records dated strictly before the given day."""
        expired = [
            record_id
            for record_id, record in self._records.items()
            if record.date_millis_since_epoch < date_millis_since_epoch
        ]
        for record_id in expired:
            del self._records[record_id]
        return len(expired)

    async def clear(self) -> None:
        """Delete all records."""
        self._records.clear()
