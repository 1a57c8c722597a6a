from datetime import datetime, timedelta, UTC

import pytest
from pytest import MonkeyPatch

from ttlshortener.constants import ENV
from ttlshortener.dao import LinkMemoryDAO


class FakeClock:
    """Manually advanced clock for exact expiry boundaries."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch, tmp_path) -> None:
    """Isolate tests from the caller's environment."""
    for name in ENV.App:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(ENV.App.PROJECT_ROOT, str(tmp_path))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def registry(clock) -> LinkMemoryDAO:
    return LinkMemoryDAO(clock=clock)
