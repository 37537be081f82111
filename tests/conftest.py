"""Shared test fixtures for all test modules."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from exposurelog.adapters.storage.in_memory import InMemoryExposureStorage
from exposurelog.adapters.storage.sqlite_exposures import SQLiteExposureStorage
from exposurelog.core.models import ExposureRecord

try:
    import httpx
except ImportError:
    httpx = None

DAY_MS = 86_400_000


@pytest.fixture
def exposure_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for exposure storage tests."""
    return str(tmp_path / "exposures.db")


@pytest.fixture
def make_record():
    """Factory fixture for unpersisted records with overridable fields.

    Usage:
        def test_something(make_record):
            record = make_record(day=3, risk_score=90)
    """

    def _make(
        day: int = 1,
        received_timestamp_ms: int = 1_600_000_000_000,
        duration_minutes: int = 15,
        attenuation: int = -70,
        risk_level: int = 3,
        risk_score: int = 85,
    ) -> ExposureRecord:
        return ExposureRecord.create(
            day * DAY_MS,
            received_timestamp_ms,
            duration_minutes,
            attenuation,
            risk_level,
            risk_score,
        )

    return _make


@pytest.fixture
async def exposure_storage() -> InMemoryExposureStorage:
    """Fixture providing an empty in-memory exposure storage."""
    return InMemoryExposureStorage()


@pytest.fixture
async def memory_sqlite_storage() -> AsyncGenerator[SQLiteExposureStorage]:
    """In-memory SQLite exposure storage with proper cleanup."""
    storage = SQLiteExposureStorage(":memory:")
    yield storage
    await storage.close()


@pytest.fixture
def asgi_send_capture():
    """Fixture that returns a send callable and a responses list for capture."""

    responses: list[dict[str, object]] = []

    async def send(message: dict[str, object]) -> None:
        """Capture ASGI messages."""
        responses.append(message)

    return send, responses


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_asgi_app(storage)
            async with asgi_test_client(app) as client:
                response = await client.get("/exposures")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
