"""Port interface for exposure storage adapters.

The core domain depends only on this protocol, not on concrete adapters.
Adapters own identity assignment: a record written without an id comes
back carrying one.
"""

from collections.abc import AsyncIterable
from typing import Protocol, runtime_checkable

from exposurelog.core.models import ExposureRecord


@runtime_checkable
class ExposureStoragePort(Protocol):
    """Port for exposure storage operations.

    Examples: InMemoryExposureStorage, SQLiteExposureStorage.
    """

    async def write(self, record: ExposureRecord) -> ExposureRecord:
        """Persist a record and return it with its storage-assigned id.

        Records that already carry an id replace the stored row for that id.
        """
        ...

    async def get(self, record_id: int) -> ExposureRecord | None:
        """Return the record stored under record_id, or None."""
        ...

    def read(self, since: int = 0) -> AsyncIterable[ExposureRecord]:
        """Read records dated after the given day.

        Args:
            since: Epoch millis. Returns records with
                   date_millis_since_epoch > since. Default 0 returns all.

        Returns:
            Async iterable ordered by date, then id, ascending.
        """
        ...

    async def count(self) -> int:
        """Return the number of stored records."""
        ...

    async def delete(self, record_id: int) -> bool:
        """Delete one record. Returns True if it existed."""
        ...

    async def delete_before(self, date_millis_since_epoch: int) -> int:
        """Delete records dated strictly before the given day.

        Returns:
            Number of records deleted.
        """
        ...

    async def clear(self) -> None:
        """Delete all records."""
        ...
