"""Decoder diagnostic event."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    """One decoder message, tied to the timeline record being decoded.

    `line_number` is 1-based within the payload and only set for messages
    that point at a specific line (format errors).
    """

    ts_utc: str
    sequence: int
    category: str
    name: str
    level: str = "info"
    message: str = ""
    line_number: int | None = None

    @property
    def short_name(self) -> str:
        prefix = f"{self.category}."
        return self.name[len(prefix) :] if self.name.startswith(prefix) else self.name


def utc_now_iso() -> str:
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds")
