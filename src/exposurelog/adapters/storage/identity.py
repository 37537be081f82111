"""Surrogate identity assignment for storage adapters.

Only storage adapters give a record its id; the core model offers no way
to set or change it.
"""

from dataclasses import replace

from exposurelog.core.models import ExposureRecord, IdentityConflictError


def assign_identity(record: ExposureRecord, record_id: int) -> ExposureRecord:
    """Return the record carrying the storage-assigned id.

    Assigning the id a record already has returns an equal record.

    Raises:
        IdentityConflictError: If the record already has a different id.
    """
    if record.id is not None and record.id != record_id:
        raise IdentityConflictError(
            f"Exposure already persisted with id {record.id}, refusing {record_id}"
        )
    return replace(record, id=record_id)
