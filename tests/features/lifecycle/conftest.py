"""BDD step definitions for the exposure lifecycle feature."""

import asyncio
import dataclasses
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from exposurelog.adapters.storage.in_memory import InMemoryExposureStorage
from exposurelog.core.models import ExposureRecord


@dataclass
class LifecycleContext:
    """Shared state between steps in a lifecycle scenario."""

    storage: InMemoryExposureStorage = field(default_factory=InMemoryExposureStorage)
    record: ExposureRecord | None = None
    stored: ExposureRecord | None = None


@pytest.fixture
def ctx() -> LifecycleContext:
    """Fresh scenario context for each test."""
    return LifecycleContext()


# === Given ===


@given(
    parsers.parse(
        "an exposure with duration {duration:d}, attenuation {attenuation:d}, "
        "risk level {level:d} and risk score {score:d}"
    )
)
def given_exposure(
    ctx: LifecycleContext, duration: int, attenuation: int, level: int, score: int
) -> None:
    ctx.record = ExposureRecord.create(
        86_400_000, 1_600_000_000_000, duration, attenuation, level, score
    )


# === When ===


@when("the exposure is written to storage")
def when_written(ctx: LifecycleContext) -> None:
    ctx.stored = asyncio.run(ctx.storage.write(ctx.record))


@when("the stored exposure is written again")
def when_written_again(ctx: LifecycleContext) -> None:
    ctx.stored = asyncio.run(ctx.storage.write(ctx.stored))


@when(parsers.parse("the stored exposure is corrected to risk score {score:d} and written"))
def when_corrected(ctx: LifecycleContext, score: int) -> None:
    ctx.stored = asyncio.run(ctx.storage.write(ctx.stored.with_risk_score(score)))


@when("the stored exposure is deleted")
def when_deleted(ctx: LifecycleContext) -> None:
    asyncio.run(ctx.storage.delete(ctx.stored.id))


# === Then ===


@then("the exposure has no id")
def then_no_id(ctx: LifecycleContext) -> None:
    assert ctx.record.id is None


@then(parsers.parse('the debug text reads "{text}"'))
def then_debug_text(ctx: LifecycleContext, text: str) -> None:
    assert ctx.record.debug_string() == text.replace("|", "\n")


@then(parsers.parse("the stored exposure has id {record_id:d}"))
def then_stored_id(ctx: LifecycleContext, record_id: int) -> None:
    assert ctx.stored.id == record_id


@then(parsers.re(r"storage holds (?P<count>\d+) exposures?"))
def then_storage_count(ctx: LifecycleContext, count: str) -> None:
    assert asyncio.run(ctx.storage.count()) == int(count)


@then(parsers.parse("storage returns risk score {score:d} for id {record_id:d}"))
def then_stored_score(ctx: LifecycleContext, score: int, record_id: int) -> None:
    stored = asyncio.run(ctx.storage.get(record_id))
    assert stored is not None
    assert stored.risk_score == score


@then("changing the id of the stored exposure is rejected")
def then_id_rejected(ctx: LifecycleContext) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.stored.id = 99
    with pytest.raises(TypeError):
        ctx.stored.with_changes(id=99)
