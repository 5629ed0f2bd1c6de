"""Test configuration."""

import os
import time
from collections.abc import Iterator
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from helpers import FakeClock

from focusnotes.core.config import Settings
from focusnotes.core.storage import MemStorage
from focusnotes.main import create_app


@pytest.fixture
def east_of_utc() -> Iterator[None]:
    """Run with the local timezone three hours ahead of UTC."""
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "MSK-3"
    time.tzset()
    try:
        yield
    finally:
        if previous is None:
            del os.environ["TZ"]
        else:
            os.environ["TZ"] = previous
        time.tzset()


@pytest.fixture
def clock() -> FakeClock:
    """A clock pinned to 2024-05-01 09:30 local time."""
    return FakeClock(datetime(2024, 5, 1, 9, 30).astimezone())  # noqa: DTZ001


@pytest.fixture
def storage(clock: FakeClock) -> MemStorage:
    """An empty store driven by the fake clock."""
    return MemStorage(clock=clock)


@pytest.fixture
def test_client(storage: MemStorage) -> Iterator[TestClient]:
    """Create a test client around a fresh store."""
    with TestClient(create_app(storage=storage, settings=Settings())) as client:
        yield client
