"""Engine configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CHUNK_TIME_MS = 60
DEFAULT_CHUNK_CHECK_LINES = 10


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable log engine configuration."""

    use_work_queue: bool = True
    chunk_time_ms: int = DEFAULT_CHUNK_TIME_MS
    chunk_check_lines: int = DEFAULT_CHUNK_CHECK_LINES
    diagnostics_enabled: bool = False
    diagnostics_buffer_cap: int = 1_000
    log_level: str = "INFO"


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with package-prefixed override."""
    value = os.getenv("JSPROFILE_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_engine_config() -> EngineConfig:
    """Load immutable engine configuration from env vars."""
    return EngineConfig(
        use_work_queue=_flag("JSPROFILE_USE_WORK_QUEUE", True),
        chunk_time_ms=max(1, _int("JSPROFILE_CHUNK_TIME_MS", DEFAULT_CHUNK_TIME_MS)),
        chunk_check_lines=max(1, _int("JSPROFILE_CHUNK_CHECK_LINES", DEFAULT_CHUNK_CHECK_LINES)),
        diagnostics_enabled=_flag("JSPROFILE_DIAGNOSTICS_ENABLED", False),
        diagnostics_buffer_cap=max(10, _int("JSPROFILE_DIAGNOSTICS_BUFFER_CAP", 1_000)),
        log_level=resolve_log_level_name(),
    )
