from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from task_tracker_api.app.storage import InMemoryTaskRepository
from task_tracker_api.config.settings import Settings
from task_tracker_api.main import create_app


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime | None = None, step: timedelta | None = None) -> None:
        self.current = start or datetime(2024, 5, 1, 9, 0, tzinfo=UTC)
        self.step = step if step is not None else timedelta(seconds=1)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository(clock: FakeClock) -> InMemoryTaskRepository:
    return InMemoryTaskRepository(clock=clock)


@pytest.fixture
def client() -> Iterator[TestClient]:
    app = create_app(
        storage=InMemoryTaskRepository(),
        settings_override=Settings(default_page_size=10, max_page_size=100),
    )
    with TestClient(app) as test_client:
        yield test_client
