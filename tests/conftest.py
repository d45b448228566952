"""Shared pytest fixtures and configuration."""

import os
import tempfile

import pytest

from sleeptracker.database import SleepDatabase
from sleeptracker.formatting import Resources


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    database = SleepDatabase(db_path)
    yield database

    # Dispose engine to release file locks (Windows)
    database.close()

    # Cleanup
    try:
        os.unlink(db_path)
    except PermissionError:
        pass


@pytest.fixture
def resources():
    return Resources.load("en")


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


@pytest.fixture
def clock():
    return FakeClock()
