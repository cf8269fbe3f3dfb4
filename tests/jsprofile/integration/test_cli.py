from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from jsprofile.cli import main, run_log
from jsprofile.diagnostics.json_codec import loads

_LOG_TEXT = "\n".join(
    [
        'profiler,"begin",1',
        "alias,cc,code-creation",
        "alias,t,tick",
        'cc,LazyCompile,0x100,16,"render"',
        'cc,Function,0x200,16,"main"',
        "repeat,4,t,0x100,0x0,0,0x200",
        "t,0x300,0x0,1",
        "code-move,0x100,0x400",
        "t,0x400,0x0,0",
        "",
    ]
)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield
    root.handlers.clear()
    root.handlers.extend(original_handlers)
    root.setLevel(original_level)


def test_run_log_synchronous_and_chunked_agree() -> None:
    sync_engine, sync_record, sync_jobs = run_log(_LOG_TEXT, chunked=False)
    chunked_engine, chunked_record, chunked_jobs = run_log(_LOG_TEXT, chunked=True)

    assert sync_jobs == 1
    assert chunked_jobs >= 2
    assert sync_record.has_javascript_profile is True
    assert chunked_record.has_javascript_profile is True
    assert sync_record.profile.state_times == chunked_record.profile.state_times
    root = chunked_record.profile.bottom_up_profile
    assert root is not None
    render = root.child("render")
    assert render is not None and render.self_time == 5.0
    assert sync_engine.stats.as_dict() == chunked_engine.stats.as_dict()


def test_cli_prints_tree_and_exports_json(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "v8.log"
    log_file.write_text(_LOG_TEXT, encoding="utf-8")
    out = tmp_path / "profile.json"

    assert main([str(log_file), "--breakdown", "--json", str(out)]) == 0

    printed = capsys.readouterr().out
    assert "render" in printed
    assert "unknown - Garbage Collection" in printed
    assert "Records per command" in printed
    payload = loads(out.read_bytes())
    assert payload["state_times"]["JavaScript"] == 5.0


def test_cli_reports_empty_profile(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "v8.log"
    log_file.write_text('code-creation,Function,0x100,16,"foo"\n', encoding="utf-8")
    assert main([str(log_file), "--chunked"]) == 0
    assert "No ticks in log." in capsys.readouterr().out


def test_cli_exits_non_zero_on_format_error(tmp_path: Path) -> None:
    log_file = tmp_path / "v8.log"
    log_file.write_text("tick,0x1,0x0,0\ntick,0xqq,0x0,0\n", encoding="utf-8")
    assert main([str(log_file)]) == 1


def test_run_log_follows_environment_diagnostics_switch(monkeypatch) -> None:
    monkeypatch.setenv("JSPROFILE_DIAGNOSTICS_ENABLED", "1")
    monkeypatch.setenv("JSPROFILE_USE_WORK_QUEUE", "0")
    engine, _, jobs = run_log("frobnicate,1\n" + _LOG_TEXT, chunked=True)

    assert jobs >= 2
    assert engine.work_queue is not None
    assert engine.hub is not None
    assert [event.short_name for event in engine.hub.snapshot()] == ["unknown_command"]

    monkeypatch.delenv("JSPROFILE_DIAGNOSTICS_ENABLED")
    engine, _, _ = run_log(_LOG_TEXT, chunked=False)
    assert engine.hub is None
    assert engine.work_queue is None


def test_cli_prints_debug_stats_and_decoder_events(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "v8.log"
    log_file.write_text("alias,x,nothing\nfrobnicate,1\n" + _LOG_TEXT, encoding="utf-8")

    assert main([str(log_file), "--events", "5"]) == 0

    printed = capsys.readouterr().out
    assert "Debug stats" in printed
    assert "Unknown Commands" in printed
    assert "Decoder events" in printed
    assert "alias_miss" in printed
    assert "unknown_command" in printed
