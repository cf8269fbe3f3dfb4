"""Cooperative queue of chunked jobs."""

from __future__ import annotations

from collections import deque

from jsprofile.api.work_queue import WorkJob


class RuntimeWorkQueue:
    """FIFO job queue where a job may push its continuation to the front.

    The queue never runs on its own; the host calls `run_next` whenever it
    has time to spare, one job per call.
    """

    def __init__(self) -> None:
        self._jobs: deque[WorkJob] = deque()
        self._executed_count = 0

    @property
    def pending_count(self) -> int:
        return len(self._jobs)

    @property
    def executed_count(self) -> int:
        return self._executed_count

    def append(self, job: WorkJob) -> None:
        self._jobs.append(job)

    def prepend(self, job: WorkJob) -> None:
        self._jobs.appendleft(job)

    def descriptions(self) -> list[str]:
        """Return descriptions of queued jobs, next-to-run first."""
        return [job.description for job in self._jobs]

    def run_next(self) -> bool:
        """Execute the next job. Return False when the queue is empty."""
        if not self._jobs:
            return False
        job = self._jobs.popleft()
        job.execute()
        self._executed_count += 1
        return True

    def run_until_empty(self, *, max_jobs: int | None = None) -> int:
        """Run jobs until none remain or `max_jobs` have run."""
        if max_jobs is not None and max_jobs < 0:
            raise ValueError("max_jobs must be >= 0")
        executed = 0
        while max_jobs is None or executed < max_jobs:
            if not self.run_next():
                break
            executed += 1
        return executed

    def clear(self) -> None:
        self._jobs.clear()
