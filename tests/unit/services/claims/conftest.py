"""Fixtures for claim workflow tests."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from themenschaedel.services.claims import ClaimCoordinator, ClaimRepository


class RecordingEventSink:
    """Event sink that keeps every published event."""

    def __init__(self) -> None:
        self.events: list = []

    async def publish(self, event) -> None:
        self.events.append(event)


class StubOracle:
    """Authorization oracle with a fixed answer that records its calls."""

    def __init__(self, allow: bool = True) -> None:
        self.allow = allow
        self.calls: list[tuple] = []

    def allows(self, user, ability, episode) -> bool:
        self.calls.append((user, ability, episode))
        return self.allow


class StepClock:
    """Clock advancing one minute per call."""

    def __init__(self) -> None:
        self.now = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def sink() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def oracle() -> StubOracle:
    return StubOracle(allow=True)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def repository(db_session: AsyncSession) -> ClaimRepository:
    return ClaimRepository(db_session)


@pytest.fixture
def coordinator(
    repository: ClaimRepository,
    oracle: StubOracle,
    sink: RecordingEventSink,
    clock: StepClock,
) -> ClaimCoordinator:
    return ClaimCoordinator(repository, oracle, sink, clock=clock)
