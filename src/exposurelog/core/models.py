"""Core domain model for detected exposure events."""

from dataclasses import dataclass, replace

# Fields that may be corrected after construction via with_changes().
_CORRECTABLE_FIELDS = frozenset(
    {
        "date_millis_since_epoch",
        "received_timestamp_ms",
        "duration_minutes",
        "attenuation",
        "risk_level",
        "risk_score",
    }
)


class IdentityConflictError(ValueError):
    """Raised when a persisted record is given a different identity."""


@dataclass(frozen=True)
class ExposureRecord:
    """A single exposure event surfaced for display and export.

    Hosts storing these records on device are expected to apply a daily
    TTL and whatever encryption and retention rules apply to end user data.

    Attributes:
        date_millis_since_epoch: Date of the exposure in epoch millis,
            rounded to the day by the caller.
        received_timestamp_ms: Epoch millis at which the exposure update
            was received by the app.
        duration_minutes: Duration of the exposure.
        attenuation: Signal attenuation in dBm.
        risk_level: Categorical risk bucket.
        risk_score: Computed risk score.
        id: Surrogate key. None until assigned by a storage adapter.
    """

    date_millis_since_epoch: int
    received_timestamp_ms: int
    duration_minutes: int
    attenuation: int
    risk_level: int
    risk_score: int
    id: int | None = None

    @classmethod
    def create(
        cls,
        date_millis_since_epoch: int,
        received_timestamp_ms: int,
        duration_minutes: int,
        attenuation: int,
        risk_level: int,
        risk_score: int,
    ) -> "ExposureRecord":
        """Create an unpersisted exposure record.

        No validation is applied to any argument.
        """
        return cls(
            date_millis_since_epoch=date_millis_since_epoch,
            received_timestamp_ms=received_timestamp_ms,
            duration_minutes=duration_minutes,
            attenuation=attenuation,
            risk_level=risk_level,
            risk_score=risk_score,
        )

    @property
    def is_persisted(self) -> bool:
        """Return True once a storage adapter has assigned an id."""
        return self.id is not None

    def with_changes(self, **changes: int) -> "ExposureRecord":
        """Return a copy with the given non-identity fields replaced.

        Raises:
            TypeError: If ``id`` or an unknown field name is given.
        """
        if "id" in changes:
            raise TypeError("id is assigned by storage and cannot be changed")
        unknown = set(changes) - _CORRECTABLE_FIELDS
        if unknown:
            raise TypeError(f"Unknown exposure fields: {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def with_date_millis_since_epoch(self, value: int) -> "ExposureRecord":
        return self.with_changes(date_millis_since_epoch=value)

    def with_duration_minutes(self, value: int) -> "ExposureRecord":
        return self.with_changes(duration_minutes=value)

    def with_attenuation(self, value: int) -> "ExposureRecord":
        return self.with_changes(attenuation=value)

    def with_risk_level(self, value: int) -> "ExposureRecord":
        return self.with_changes(risk_level=value)

    def with_risk_score(self, value: int) -> "ExposureRecord":
        return self.with_changes(risk_score=value)

    def debug_string(self) -> str:
        """Render the exposure for debug logs. Not for end-user display."""
        # Existing log consumers diff this text; "Attenuation:" has no space.
        return (
            f"Duration: {self.duration_minutes} minutes\n"
            f"Attenuation:{self.attenuation} dBm\n"
            f"Risk level: {self.risk_level}\n"
            f"Risk score: {self.risk_score}"
        )

