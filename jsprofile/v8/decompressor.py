"""Back-reference line decompression and record tokenizing."""

from __future__ import annotations

from collections import deque

from jsprofile.runtime.errors import LogFormatError, parse_int

BACK_REFERENCE_MARKER = "#"


class LogDecompressor:
    """Expand V8 back-reference compressed log lines.

    A compressed line ends with `#N` or `#N:M`: the text after the marker is
    replaced by the N-th most recent decompressed line (1-based), starting at
    character M. Lines ending in a quote are never compressed, which keeps
    `#` inside quoted names intact. The window is order-dependent: each call
    must see every line of the log exactly once, in sequence. `LogEngine`
    drops blank lines before they get here, so they never take a window
    slot; V8 itself only writes a trailing blank line.
    """

    def __init__(self, window_size: int) -> None:
        if window_size <= 0:
            raise ValueError("window_size must be > 0")
        self._window: deque[str] = deque(maxlen=window_size)

    @property
    def window_size(self) -> int:
        return self._window.maxlen or 0

    def decompress_log_entry(self, line: str) -> str:
        marker_pos = line.rfind(BACK_REFERENCE_MARKER)
        if marker_pos != -1 and not line.endswith('"'):
            line = line[:marker_pos] + self._resolve(line[marker_pos + 1 :])
        self._window.appendleft(line)
        return line

    def _resolve(self, reference: str) -> str:
        index_text, _, offset_text = reference.partition(":")
        index = parse_int(index_text, what="back reference")
        offset = parse_int(offset_text, what="back reference offset") if offset_text else 0
        if not 1 <= index <= len(self._window):
            raise LogFormatError(f"back reference #{index} outside window of {len(self._window)}")
        return self._window[index - 1][offset:]


def split_payload_lines(payload: str) -> list[str]:
    """Split a log payload into records on `\\n` only.

    `str.splitlines` would also break on form feeds and Unicode line
    separators, which may legitimately appear inside quoted names. A trailing
    `\\r` is dropped so CRLF logs decode the same as LF ones.
    """
    return [line[:-1] if line.endswith("\r") else line for line in payload.split("\n")]


def split_log_line(line: str) -> list[str]:
    """Split a record on commas that are not inside a quoted field.

    Quotes are kept on the field; a backslash inside quotes escapes the next
    character.
    """
    if not line:
        return []
    fields: list[str] = []
    start = 0
    in_quotes = False
    escaped = False
    for pos, char in enumerate(line):
        if escaped:
            escaped = False
        elif in_quotes and char == "\\":
            escaped = True
        elif char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(line[start:pos])
            start = pos + 1
    fields.append(line[start:])
    return fields


def strip_quotes(value: str) -> str:
    start = 1 if value.startswith('"') else 0
    end = len(value) - 1 if len(value) > start and value.endswith('"') else len(value)
    return value[start:end]
