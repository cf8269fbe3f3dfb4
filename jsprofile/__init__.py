"""V8 profiler log decoding into bottom-up JavaScript profiles."""

from jsprofile.api.engine import create_log_engine
from jsprofile.profile.model import JavaScriptProfile, TimelineRecord, VmState
from jsprofile.profile.node import ProfileNode
from jsprofile.runtime.errors import LogFormatError
from jsprofile.v8.engine import LogCursor, LogEngine, ProcessingState

__all__ = [
    "JavaScriptProfile",
    "LogCursor",
    "LogEngine",
    "LogFormatError",
    "ProcessingState",
    "ProfileNode",
    "TimelineRecord",
    "VmState",
    "create_log_engine",
]
