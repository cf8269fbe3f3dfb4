"""Runtime implementations: configuration, logging, work queue."""

from jsprofile.runtime.config import EngineConfig, load_engine_config, resolve_log_level_name
from jsprofile.runtime.errors import LogFormatError
from jsprofile.runtime.logging import configure_logging, setup_logging, shutdown_logging
from jsprofile.runtime.work_queue import RuntimeWorkQueue

__all__ = [
    "EngineConfig",
    "LogFormatError",
    "RuntimeWorkQueue",
    "configure_logging",
    "load_engine_config",
    "resolve_log_level_name",
    "setup_logging",
    "shutdown_logging",
]
