from __future__ import annotations

import pytest

from jsprofile.diagnostics import DiagnosticEvent, DiagnosticHub


def test_hub_reports_and_filters_by_name() -> None:
    hub = DiagnosticHub(capacity=10)
    hub.emit(
        DiagnosticEvent(
            ts_utc="2026-01-01T00:00:00.000+00:00",
            sequence=1,
            category="v8log",
            name="v8log.unknown_command",
        )
    )
    hub.report(category="V8Log", name="v8log.alias_miss", sequence=2, message="no such command")
    hub.report(category="v8log", name="v8log.format_error", sequence=3, message="bad", level="error", line_number=4)

    assert [event.name for event in hub.snapshot()] == [
        "v8log.unknown_command",
        "v8log.alias_miss",
        "v8log.format_error",
    ]
    [alias_miss] = hub.snapshot(name="v8log.alias_miss")
    assert alias_miss.category == "v8log"
    assert alias_miss.sequence == 2
    assert alias_miss.line_number is None
    assert [event.line_number for event in hub.snapshot(limit=1)] == [4]
    assert hub.snapshot(limit=0) == []


def test_hub_drops_oldest_beyond_capacity() -> None:
    hub = DiagnosticHub(capacity=2)
    for sequence in range(4):
        hub.report(category="v8log", name=f"e{sequence}", sequence=sequence, message="")
    assert [event.name for event in hub.snapshot()] == ["e2", "e3"]
    assert hub.dropped == 2
    assert hub.capacity == 2


def test_event_short_name_strips_category_prefix() -> None:
    event = DiagnosticEvent(ts_utc="t", sequence=1, category="v8log", name="v8log.profiler_ignored")
    assert event.short_name == "profiler_ignored"
    assert DiagnosticEvent(ts_utc="t", sequence=1, category="v8log", name="other").short_name == "other"


def test_hub_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError):
        DiagnosticHub(capacity=0)
