"""Column mapping between ExposureRecord and stored rows.

Storage adapters and exporters use these names so that every surface
agrees on the fixed column layout.
"""

from collections.abc import Sequence
from typing import Any

from exposurelog.core.models import ExposureRecord

TABLE_NAME = "exposures"

# Range of a stored INTEGER column (signed 64-bit).
INTEGER_MIN = -(2**63)
INTEGER_MAX = 2**63 - 1

# Stored column names, in row order (id excluded).
COLUMNS: tuple[str, ...] = (
    "date_millis_since_epoch",
    "received_timestamp_ms",
    "duration_minutes",
    "attenuation",
    "risk_level",
    "risk_score",
)


def to_row(record: ExposureRecord) -> tuple[int, ...]:
    """Convert a record to a tuple of column values in COLUMNS order."""
    return tuple(getattr(record, column) for column in COLUMNS)


def from_row(row: Sequence[Any]) -> ExposureRecord:
    """Build a record from an ``(id, *COLUMNS)`` row.

    Rows can be tuples, sqlite3.Row or aiosqlite.Row; only index access is used.
    """
    if len(row) != len(COLUMNS) + 1:
        raise ValueError(
            f"Expected {len(COLUMNS) + 1} values in exposure row, got {len(row)}"
        )
    values = {column: row[i + 1] for i, column in enumerate(COLUMNS)}
    return ExposureRecord(id=row[0], **values)


def to_dict(record: ExposureRecord) -> dict[str, int | None]:
    """Convert a record to a column-keyed dict including the id."""
    result: dict[str, int | None] = {"id": record.id}
    for column in COLUMNS:
        result[column] = getattr(record, column)
    return result
