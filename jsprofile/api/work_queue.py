"""Public chunked work-queue contracts."""

from __future__ import annotations

from typing import Protocol


class WorkJob(Protocol):
    """One unit of deferred work."""

    @property
    def description(self) -> str:
        """Human-readable summary for debugging."""

    def execute(self) -> None:
        """Run the job."""


class WorkQueue(Protocol):
    """Queue that the decoder appends and prepends jobs to."""

    def append(self, job: WorkJob) -> None:
        """Run `job` after everything already queued."""

    def prepend(self, job: WorkJob) -> None:
        """Run `job` next."""


def create_work_queue() -> WorkQueue:
    """Create default work-queue implementation."""
    from jsprofile.runtime.work_queue import RuntimeWorkQueue

    return RuntimeWorkQueue()
