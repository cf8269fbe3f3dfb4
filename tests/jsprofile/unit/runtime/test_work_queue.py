from __future__ import annotations

import pytest

from jsprofile.api.work_queue import create_work_queue
from jsprofile.runtime.work_queue import RuntimeWorkQueue


class _Job:
    def __init__(self, name: str, calls: list[str]) -> None:
        self.name = name
        self.calls = calls

    @property
    def description(self) -> str:
        return f"job {self.name}"

    def execute(self) -> None:
        self.calls.append(self.name)


def test_append_runs_in_fifo_order_and_prepend_jumps_ahead() -> None:
    queue = RuntimeWorkQueue()
    calls: list[str] = []
    queue.append(_Job("a", calls))
    queue.append(_Job("b", calls))
    queue.prepend(_Job("urgent", calls))

    assert queue.descriptions() == ["job urgent", "job a", "job b"]
    assert queue.run_until_empty() == 3
    assert calls == ["urgent", "a", "b"]
    assert queue.executed_count == 3


def test_run_next_on_empty_queue_returns_false() -> None:
    queue = RuntimeWorkQueue()
    assert queue.run_next() is False
    assert queue.pending_count == 0


def test_run_until_empty_honours_max_jobs() -> None:
    queue = RuntimeWorkQueue()
    calls: list[str] = []
    for name in "abc":
        queue.append(_Job(name, calls))
    assert queue.run_until_empty(max_jobs=2) == 2
    assert queue.pending_count == 1
    with pytest.raises(ValueError):
        queue.run_until_empty(max_jobs=-1)


def test_job_may_prepend_its_continuation() -> None:
    queue = RuntimeWorkQueue()
    calls: list[str] = []

    class _Chunked:
        description = "chunked"

        def __init__(self, remaining: int) -> None:
            self.remaining = remaining

        def execute(self) -> None:
            calls.append(f"chunk{self.remaining}")
            if self.remaining > 1:
                queue.prepend(_Chunked(self.remaining - 1))

    queue.append(_Chunked(3))
    queue.append(_Job("after", calls))
    queue.run_until_empty()
    assert calls == ["chunk3", "chunk2", "chunk1", "after"]


def test_create_work_queue_returns_runtime_queue() -> None:
    assert isinstance(create_work_queue(), RuntimeWorkQueue)
