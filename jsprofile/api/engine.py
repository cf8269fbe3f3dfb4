"""Public log-engine API contracts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from jsprofile.api.profile import ProfileRecord, ProfileTarget, TimeSource
from jsprofile.api.work_queue import WorkQueue

if TYPE_CHECKING:
    from jsprofile.diagnostics.hub import DiagnosticHub
    from jsprofile.runtime.config import EngineConfig
    from jsprofile.v8.engine import LogCursor, LogEngine


class ProfileLogParser(Protocol):
    """Decode raw profiler payloads into caller-owned profiles."""

    def parse_raw_event(
        self,
        payload: str | None,
        record: ProfileRecord,
        profile: ProfileTarget,
    ) -> "LogCursor | None":
        """Decode or enqueue one payload."""

    def reset(self) -> None:
        """Discard all session state."""


def create_log_engine(
    config: "EngineConfig | None" = None,
    *,
    work_queue: WorkQueue | None = None,
    time_source: TimeSource | None = None,
    hub: "DiagnosticHub | None" = None,
) -> "LogEngine":
    """Create a log engine from configuration.

    When the configuration enables the work queue and none is given, a
    `RuntimeWorkQueue` is created and exposed as `engine.work_queue`.
    """
    from jsprofile.diagnostics.hub import DiagnosticHub
    from jsprofile.runtime.config import load_engine_config
    from jsprofile.runtime.work_queue import RuntimeWorkQueue
    from jsprofile.v8.engine import LogEngine

    resolved = config if config is not None else load_engine_config()
    if resolved.use_work_queue and work_queue is None:
        work_queue = RuntimeWorkQueue()
    if not resolved.use_work_queue:
        work_queue = None
    if hub is None and resolved.diagnostics_enabled:
        hub = DiagnosticHub(capacity=resolved.diagnostics_buffer_cap)
    return LogEngine(
        work_queue=work_queue,
        time_source=time_source,
        chunk_time_ms=resolved.chunk_time_ms,
        chunk_check_lines=resolved.chunk_check_lines,
        hub=hub,
    )
