from __future__ import annotations

from jsprofile.api.engine import create_log_engine
from jsprofile.runtime.config import EngineConfig, load_engine_config, resolve_log_level_name
from jsprofile.runtime.work_queue import RuntimeWorkQueue


def test_load_engine_config_defaults(monkeypatch) -> None:
    for name in (
        "JSPROFILE_USE_WORK_QUEUE",
        "JSPROFILE_CHUNK_TIME_MS",
        "JSPROFILE_CHUNK_CHECK_LINES",
        "JSPROFILE_DIAGNOSTICS_ENABLED",
        "JSPROFILE_DIAGNOSTICS_BUFFER_CAP",
        "JSPROFILE_LOG_LEVEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    assert load_engine_config() == EngineConfig()


def test_load_engine_config_parses_env(monkeypatch) -> None:
    monkeypatch.setenv("JSPROFILE_USE_WORK_QUEUE", "off")
    monkeypatch.setenv("JSPROFILE_CHUNK_TIME_MS", "15")
    monkeypatch.setenv("JSPROFILE_CHUNK_CHECK_LINES", "50")
    monkeypatch.setenv("JSPROFILE_DIAGNOSTICS_ENABLED", "yes")
    monkeypatch.setenv("JSPROFILE_DIAGNOSTICS_BUFFER_CAP", "250")
    monkeypatch.setenv("JSPROFILE_LOG_LEVEL", "debug")

    cfg = load_engine_config()
    assert cfg.use_work_queue is False
    assert cfg.chunk_time_ms == 15
    assert cfg.chunk_check_lines == 50
    assert cfg.diagnostics_enabled is True
    assert cfg.diagnostics_buffer_cap == 250
    assert cfg.log_level == "DEBUG"


def test_load_engine_config_clamps_and_ignores_garbage(monkeypatch) -> None:
    monkeypatch.setenv("JSPROFILE_CHUNK_TIME_MS", "0")
    monkeypatch.setenv("JSPROFILE_CHUNK_CHECK_LINES", "many")
    monkeypatch.setenv("JSPROFILE_DIAGNOSTICS_BUFFER_CAP", "1")
    cfg = load_engine_config()
    assert cfg.chunk_time_ms == 1
    assert cfg.chunk_check_lines == 10
    assert cfg.diagnostics_buffer_cap == 10


def test_resolve_log_level_prefers_package_prefix(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("JSPROFILE_LOG_LEVEL", "ERROR")
    assert resolve_log_level_name() == "ERROR"
    monkeypatch.delenv("JSPROFILE_LOG_LEVEL")
    assert resolve_log_level_name() == "WARNING"


def test_create_log_engine_from_config() -> None:
    engine = create_log_engine(EngineConfig(use_work_queue=True, diagnostics_enabled=True, diagnostics_buffer_cap=20))
    assert isinstance(engine.work_queue, RuntimeWorkQueue)
    assert engine.hub is not None
    assert engine.hub.capacity == 20

    sync_engine = create_log_engine(EngineConfig(use_work_queue=False), work_queue=RuntimeWorkQueue())
    assert sync_engine.work_queue is None
    assert sync_engine.hub is None
