"""Storage adapters implementing core ports."""

from exposurelog.adapters.storage.in_memory import InMemoryExposureStorage
from exposurelog.adapters.storage.sqlite_exposures import SQLiteExposureStorage

__all__ = [
    "InMemoryExposureStorage",
    "SQLiteExposureStorage",
]
