"""Log decoding error types."""

from __future__ import annotations

import re

# int() also accepts whitespace, underscores and radix prefixes; log tokens never carry them.
_DIGITS: dict[int, re.Pattern[str]] = {
    8: re.compile(r"[0-7]+"),
    10: re.compile(r"-?[0-9]+"),
    16: re.compile(r"[0-9a-fA-F]+"),
}


class LogFormatError(ValueError):
    """Raised when a log record cannot be decoded.

    Malformed numeric tokens, broken back references and truncated records
    end processing of the payload that contains them.
    """

    def __init__(self, message: str, *, line_number: int | None = None, line: str | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.line = line

    def with_location(self, line_number: int, line: str) -> LogFormatError:
        """Return a copy of this error annotated with the offending line."""
        return LogFormatError(
            f"line {line_number}: {self.args[0]} ({line!r})",
            line_number=line_number,
            line=line,
        )


def parse_int(token: str, *, base: int = 10, what: str = "integer") -> int:
    """Parse `token` or raise `LogFormatError` naming the field."""
    if _DIGITS[base].fullmatch(token) is None:
        raise LogFormatError(f"malformed {what}: {token!r}")
    return int(token, base)
