"""exposurelog - storage and export for detected exposure events."""

from exposurelog.adapters.storage import InMemoryExposureStorage, SQLiteExposureStorage
from exposurelog.core.exposures import exposure, start_of_day_millis
from exposurelog.core.models import ExposureRecord, IdentityConflictError
from exposurelog.core.ports import ExposureStoragePort

__all__ = [
    "ExposureRecord",
    "ExposureStoragePort",
    "IdentityConflictError",
    "InMemoryExposureStorage",
    "SQLiteExposureStorage",
    "exposure",
    "start_of_day_millis",
]
