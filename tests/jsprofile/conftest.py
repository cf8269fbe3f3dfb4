from __future__ import annotations

from collections.abc import Callable

import pytest

from jsprofile.profile.model import TimelineRecord
from jsprofile.runtime.work_queue import RuntimeWorkQueue
from jsprofile.v8.engine import LogEngine


class FakeClock:
    """Time source that advances a fixed step on every read."""

    def __init__(self, step_seconds: float = 0.0) -> None:
        self.now = 0.0
        self.step_seconds = step_seconds
        self.reads = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step_seconds
        self.reads += 1
        return value


@pytest.fixture
def engine() -> LogEngine:
    return LogEngine()


@pytest.fixture
def record() -> TimelineRecord:
    return TimelineRecord(sequence=7)


@pytest.fixture
def work_queue() -> RuntimeWorkQueue:
    return RuntimeWorkQueue()


@pytest.fixture
def feed(engine: LogEngine, record: TimelineRecord) -> Callable[..., None]:
    """Decode the given lines synchronously into `record`."""

    def _feed(*lines: str) -> None:
        engine.parse_raw_event("\n".join(lines), record, record.profile)

    return _feed


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
