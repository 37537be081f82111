"""NDJSON encoder for exposure records."""

import json
from collections.abc import AsyncIterable, Iterable

from exposurelog.core.models import ExposureRecord
from exposurelog.core.schema import to_dict


def _encode_lines(lines: list[str]) -> str:
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def encode_exposures(records: Iterable[ExposureRecord]) -> str:
    """Encode exposure records to newline-delimited JSON.

    Args:
        records: An iterable of ExposureRecord objects.

    Returns:
        NDJSON string with one JSON object per line, keyed by column name.
        Empty string if no records.
    """
    return _encode_lines([json.dumps(to_dict(record)) for record in records])


async def encode_exposures_async(records: AsyncIterable[ExposureRecord]) -> str:
    """Encode an async iterable of exposure records to NDJSON.

    Args:
        records: Async iterable, as returned by ExposureStoragePort.read().

    Returns:
        NDJSON string, empty if no records.
    """
    return _encode_lines([json.dumps(to_dict(record)) async for record in records])
