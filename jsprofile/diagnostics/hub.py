"""Bounded store of decoder diagnostics."""

from __future__ import annotations

from collections import deque

from jsprofile.diagnostics.event import DiagnosticEvent, utc_now_iso


class DiagnosticHub:
    """Keep the most recent decoder events; older ones fall off the front."""

    def __init__(self, *, capacity: int = 1_000) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._events: deque[DiagnosticEvent] = deque(maxlen=int(capacity))
        self._dropped = 0

    @property
    def capacity(self) -> int:
        return self._events.maxlen or 0

    @property
    def dropped(self) -> int:
        """Events evicted because the buffer was full."""
        return self._dropped

    def emit(self, event: DiagnosticEvent) -> None:
        if len(self._events) == self.capacity:
            self._dropped += 1
        self._events.append(event)

    def report(
        self,
        *,
        category: str,
        name: str,
        sequence: int,
        message: str,
        level: str = "info",
        line_number: int | None = None,
    ) -> None:
        self.emit(
            DiagnosticEvent(
                ts_utc=utc_now_iso(),
                sequence=int(sequence),
                category=category.strip().lower(),
                name=name,
                level=level,
                message=message,
                line_number=line_number,
            )
        )

    def snapshot(self, *, limit: int | None = None, name: str | None = None) -> list[DiagnosticEvent]:
        """Return retained events oldest first, optionally the last `limit` only."""
        events = list(self._events)
        if name is not None:
            events = [event for event in events if event.name == name]
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

