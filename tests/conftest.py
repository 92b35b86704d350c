"""
Pytest fixtures and test configuration for tasknote tests.
"""

import logging

import pytest

from tasknote.config import get_settings
from tasknote.host import OFFLINE_NODE, FixedClock, StaticCaller
from tasknote.service import TodoService, set_service
from tasknote.storage import SQLiteStore


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point settings at a temp data dir and reset process-wide state."""
    for var in (
        "TASKNOTE_DATA_DIR",
        "TASKNOTE_DB_FILENAME",
        "TASKNOTE_LOG_LEVEL",
        "TASKNOTE_ID_MAX_RETRIES",
        "TASKNOTE_OFFLINE_HOST",
        "TASKNOTE_CALLER_ID",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TASKNOTE_DATA_DIR", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    set_service(None)

    logger = logging.getLogger("tasknote")
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    set_service(None)
    get_settings.cache_clear()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "tasknote.db"


@pytest.fixture
def store(db_path):
    """SQLiteStore on a temp database file."""
    s = SQLiteStore(db_path)
    yield s
    s.close()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def caller():
    return StaticCaller(OFFLINE_NODE)


@pytest.fixture
def service(store, clock, caller):
    """TodoService on the offline host."""
    return TodoService(store, clock, caller)


class StepClock:
    """Clock advancing by ``step`` on every read; records each reading."""

    def __init__(self, start: int = 1_700_000_000_000_000_000, step: int = 1000):
        self.value = start
        self.step = step
        self.readings = []

    def now(self) -> int:
        self.value += self.step
        self.readings.append(self.value)
        return self.value


@pytest.fixture
def step_clock():
    return StepClock()
