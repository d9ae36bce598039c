"""Shared pytest fixtures for IntervalFlow tests."""

import sys
import pytest

from PyQt6.QtWidgets import QApplication

from intervalflow.database.db import configure_engine, init_db
from intervalflow.timer.clock import ManualClock
from intervalflow.timer.config import IntervalConfig
from intervalflow.timer.engine import TimerEngine
from intervalflow.timer.events import RecordingSink


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def make_engine(clock, sink):
    """Factory: engine over the shared manual clock and recording sink."""

    def _make(**overrides) -> TimerEngine:
        return TimerEngine(IntervalConfig(**overrides), sink, clock)

    return _make


@pytest.fixture
def engine(make_engine):
    """Default config: 30s work, 10 reps, 5s gap, 60s break every 5."""
    return make_engine()


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    from loguru import logger

    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
