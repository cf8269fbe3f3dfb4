"""Public API contracts."""

from jsprofile.api.engine import ProfileLogParser, create_log_engine
from jsprofile.api.logging import LoggingConfig
from jsprofile.api.profile import ProfileRecord, ProfileTarget, Sanitizer, TimeSource
from jsprofile.api.work_queue import WorkJob, WorkQueue, create_work_queue

__all__ = [
    "LoggingConfig",
    "ProfileLogParser",
    "ProfileRecord",
    "ProfileTarget",
    "Sanitizer",
    "TimeSource",
    "WorkJob",
    "WorkQueue",
    "create_log_engine",
    "create_work_queue",
]
