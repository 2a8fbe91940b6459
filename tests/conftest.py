"""Global pytest configuration and fixtures."""

import asyncio
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from logging import Logger
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from batchsync import setup_test_logging
from batchsync.config import Settings
from batchsync.exceptions import DownloadError
from batchsync.host.clock import ManualClock
from batchsync.host.memory import InMemoryHostScheduler
from batchsync.interfaces.pipelines import DownloadPipeline, ProcessingPipeline
from batchsync.interfaces.signals import AuthorizationSignal, HealthStatusProvider
from batchsync.models.domain.batch import Batch, BatchSet, ProcessingOutcome
from batchsync.scheduler.service import BatchDownloadScheduler
from batchsync.storage.engine import create_state_tables
from batchsync.storage.memory import InMemoryPersistentState
from batchsync.types import (
    AuthorizationStatus,
    DownloadRequirement,
    Environment,
    HealthStatus,
)

TEST_TZ = timezone(timedelta(hours=2))


def at(hour: int, minute: int = 0, day: int = 17) -> datetime:
    """Instant on an October 2026 test day in the test timezone."""
    return datetime(2026, 10, day, hour, minute, tzinfo=TEST_TZ)


class StubAuthorization(AuthorizationSignal):
    """Authorization signal whose status tests can flip."""

    def __init__(self, status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED):
        self.status = status

    def current_status(self) -> AuthorizationStatus:
        return self.status


class StubHealth(HealthStatusProvider):
    """Health status provider whose status tests can flip."""

    def __init__(self, status: HealthStatus = HealthStatus.HEALTHY):
        self.status = status

    def current_status(self) -> HealthStatus:
        return self.status


class StubDownloadPipeline(DownloadPipeline):
    """Download pipeline that can fail or block until released."""

    def __init__(self) -> None:
        self.requirements: list[DownloadRequirement] = []
        self.discarded: list[BatchSet] = []
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.was_cancelled = False

    async def fetch(self, requirement: DownloadRequirement) -> BatchSet:
        self.requirements.append(requirement)
        try:
            if self.gate is not None:
                await self.gate.wait()
        except asyncio.CancelledError:
            self.was_cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return BatchSet(
            requirement=requirement,
            batches=[Batch(name="batch-7d", interval_days=7)],
        )

    def discard(self, batches: BatchSet) -> None:
        self.discarded.append(batches)


class StubProcessingPipeline(ProcessingPipeline):
    """Processing pipeline that can fail or advance the clock while running."""

    def __init__(self, clock: ManualClock) -> None:
        self.clock = clock
        self.processed: list[BatchSet] = []
        self.error: Exception | None = None
        self.duration = timedelta(0)
        self.gate: asyncio.Event | None = None

    async def process(self, batches: BatchSet) -> ProcessingOutcome:
        self.processed.append(batches)
        if self.gate is not None:
            await self.gate.wait()
        self.clock.advance(self.duration)
        if self.error is not None:
            raise self.error
        return ProcessingOutcome(
            processed_at=self.clock.now(), batch_count=len(batches.batches)
        )


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    from batchsync import get_logger

    return get_logger("test")


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the testing environment with the default 08:00-20:00/4h window."""
    return Settings(environment=Environment.TESTING, app_identifier="com.example.app")


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at 14:00 on the test day."""
    return ManualClock(at(14))


@pytest.fixture
def host(clock: ManualClock) -> InMemoryHostScheduler:
    return InMemoryHostScheduler(clock)


@pytest.fixture
def authorization() -> StubAuthorization:
    return StubAuthorization()


@pytest.fixture
def health() -> StubHealth:
    return StubHealth()


@pytest.fixture
def download() -> StubDownloadPipeline:
    return StubDownloadPipeline()


@pytest.fixture
def processing(clock: ManualClock) -> StubProcessingPipeline:
    return StubProcessingPipeline(clock)


@pytest.fixture
def state() -> InMemoryPersistentState:
    return InMemoryPersistentState()


@pytest.fixture
def scheduler(
    host: InMemoryHostScheduler,
    authorization: StubAuthorization,
    health: StubHealth,
    download: StubDownloadPipeline,
    processing: StubProcessingPipeline,
    state: InMemoryPersistentState,
    clock: ManualClock,
    test_settings: Settings,
) -> BatchDownloadScheduler:
    """Fully wired scheduler backed by in-memory collaborators."""
    return BatchDownloadScheduler(
        host=host,
        authorization=authorization,
        health=health,
        download=download,
        processing=processing,
        state=state,
        clock=clock,
        settings=test_settings,
    )


@pytest.fixture
def mock_db_engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """Create a real database engine for testing using a file-based database."""
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={
            "check_same_thread": False,
            "timeout": 60.0,
        },
    )
    create_state_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def download_error() -> DownloadError:
    return DownloadError("server returned 503")
