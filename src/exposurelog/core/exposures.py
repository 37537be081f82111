"""Helper functions for creating ExposureRecord objects."""

import time

from exposurelog.core.models import ExposureRecord

MILLIS_PER_DAY = 24 * 60 * 60 * 1000


def start_of_day_millis(timestamp_ms: int) -> int:
    """Round an epoch millis timestamp down to its UTC day boundary.

    Args:
        timestamp_ms: Epoch timestamp in milliseconds.

    Returns:
        Epoch millis of 00:00 UTC on the same day.
    """
    return timestamp_ms - timestamp_ms % MILLIS_PER_DAY


def now_millis() -> int:
    """Return the current epoch time in milliseconds."""
    return int(time.time() * 1000)


def exposure(
    date_millis_since_epoch: int,
    duration_minutes: int,
    attenuation: int,
    risk_level: int,
    risk_score: int,
    received_timestamp_ms: int | None = None,
) -> ExposureRecord:
    """Create an exposure record with automatic received timestamp.

    Args:
        date_millis_since_epoch: Day of the exposure in epoch millis
        duration_minutes: Duration of the exposure
        attenuation: Signal attenuation in dBm
        risk_level: Categorical risk bucket
        risk_score: Computed risk score
        received_timestamp_ms: Receive time; defaults to now

    Returns:
        Unpersisted ExposureRecord
    """
    if received_timestamp_ms is None:
        received_timestamp_ms = now_millis()
    return ExposureRecord.create(
        date_millis_since_epoch,
        received_timestamp_ms,
        duration_minutes,
        attenuation,
        risk_level,
        risk_score,
    )
