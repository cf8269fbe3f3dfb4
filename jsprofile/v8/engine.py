"""V8 profiler log engine: record dispatch and time-sliced driver."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from time import monotonic

from jsprofile.api.profile import ProfileRecord, ProfileTarget, Sanitizer, TimeSource
from jsprofile.api.work_queue import WorkQueue
from jsprofile.diagnostics.hub import DiagnosticHub
from jsprofile.diagnostics.stats import DebugStats
from jsprofile.profile.tree import ProfileTreeBuilder
from jsprofile.runtime.config import DEFAULT_CHUNK_CHECK_LINES, DEFAULT_CHUNK_TIME_MS
from jsprofile.runtime.errors import LogFormatError, parse_int
from jsprofile.runtime.sanitize import scrub_markup
from jsprofile.v8.address import (
    ADDRESS_TAG_CODE,
    ADDRESS_TAG_CODE_MOVE,
    ADDRESS_TAG_SCRATCH,
    ADDRESS_TAG_STACK,
    AddressCodec,
)
from jsprofile.v8.aliases import ActionCode, AliasRegistry
from jsprofile.v8.decompressor import LogDecompressor, split_log_line, split_payload_lines, strip_quotes
from jsprofile.v8.symbols import Symbol, SymbolTable

_LOG = logging.getLogger(__name__)

DIAGNOSTICS_CATEGORY = "v8log"


class ProcessingState(Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUSPENDED = "suspended"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True, eq=False)
class LogCursor:
    """Resumable position within one profile payload."""

    record: ProfileRecord
    profile: ProfileTarget
    payload: str | None = None
    lines: list[str] = field(default_factory=list)
    offset: int = 0
    state: ProcessingState = ProcessingState.IDLE
    generation: int = 0

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def finished(self) -> bool:
        return self.state in {ProcessingState.DONE, ProcessingState.FAILED}


LogAction = Callable[[LogCursor, list[str]], None]


class _NewProfileDataJob:
    def __init__(self, engine: LogEngine, cursor: LogCursor) -> None:
        self._engine = engine
        self._cursor = cursor

    @property
    def description(self) -> str:
        return f"NewProfileDataJob seq {self._cursor.record.sequence}"

    def execute(self) -> None:
        self._engine.load_lines(self._cursor)
        self._engine.schedule_continuation(self._cursor)


class _LogLinesJob:
    def __init__(self, engine: LogEngine, cursor: LogCursor) -> None:
        self._engine = engine
        self._cursor = cursor

    @property
    def description(self) -> str:
        return f"LogLinesJob seq {self._cursor.record.sequence} offset {self._cursor.offset}"

    def execute(self) -> None:
        self._engine.process_log_lines(self._cursor)


class LogEngine:
    """Fold V8 profiler logs into a symbol table and bottom-up profiles.

    Session state (address bases, aliases, symbols, the decompression window
    and the debug counters) outlives individual payloads: a profile recorded
    later in a session resolves ticks against code created by earlier ones.

    With a work queue, each payload is decoded in slices of roughly
    `chunk_time_ms`; the clock is consulted every `chunk_check_lines` lines
    and a slice that runs over re-queues itself at the front of the queue.
    Without one, payloads are decoded synchronously.
    """

    def __init__(
        self,
        *,
        work_queue: WorkQueue | None = None,
        time_source: TimeSource | None = None,
        chunk_time_ms: float = DEFAULT_CHUNK_TIME_MS,
        chunk_check_lines: int = DEFAULT_CHUNK_CHECK_LINES,
        sanitizer: Sanitizer | None = None,
        hub: DiagnosticHub | None = None,
    ) -> None:
        if chunk_time_ms <= 0:
            raise ValueError("chunk_time_ms must be > 0")
        if chunk_check_lines <= 0:
            raise ValueError("chunk_check_lines must be > 0")
        self._work_queue = work_queue
        self._time_source = time_source or monotonic
        self._chunk_seconds = chunk_time_ms / 1000.0
        self._chunk_check_lines = int(chunk_check_lines)
        self._sanitizer = sanitizer or scrub_markup
        self._hub = hub
        self._generation = 0
        self.stats = DebugStats()
        self._start_session()
        self._handlers: dict[int, LogAction] = {
            ActionCode.ALIAS: self._parse_alias_entry,
            ActionCode.PROFILER: self._parse_profiler_entry,
            ActionCode.CODE_CREATION: self._parse_code_creation_entry,
            ActionCode.CODE_MOVE: self._parse_code_move_entry,
            ActionCode.CODE_DELETE: self._parse_code_delete_entry,
            ActionCode.TICK: self._parse_tick_entry,
            ActionCode.REPEAT: self._parse_repeat_entry,
        }

    def _start_session(self) -> None:
        self.codec = AddressCodec()
        self.aliases = AliasRegistry(stats=self.stats)
        self.symbols = SymbolTable(stats=self.stats)
        self.tree_builder = ProfileTreeBuilder(
            symbols=self.symbols,
            aliases=self.aliases,
            stats=self.stats,
        )
        self._decompressor: LogDecompressor | None = None

    @property
    def decompressor(self) -> LogDecompressor | None:
        return self._decompressor

    @property
    def work_queue(self) -> WorkQueue | None:
        return self._work_queue

    @property
    def hub(self) -> DiagnosticHub | None:
        return self._hub

    def reset(self) -> None:
        """End the session; queued work for earlier payloads is dropped."""
        self._generation += 1
        self.stats.reset()
        self._start_session()

    def find_symbol(self, address: int) -> Symbol | None:
        return self.symbols.lookup(address)

    def parse_raw_event(
        self,
        payload: str | None,
        record: ProfileRecord,
        profile: ProfileTarget,
    ) -> LogCursor | None:
        """Decode one profile payload into `profile` on behalf of `record`."""
        if not payload:
            record.set_has_javascript_profile(False)
            return None
        cursor = LogCursor(record=record, profile=profile, payload=payload, generation=self._generation)
        if self._work_queue is None:
            self.load_lines(cursor)
            self.process_log_lines(cursor)
        else:
            record.set_processing_javascript_profile()
            self._work_queue.append(_NewProfileDataJob(self, cursor))
        return cursor

    def load_lines(self, cursor: LogCursor) -> None:
        if cursor.payload is not None:
            cursor.lines = split_payload_lines(cursor.payload)
            cursor.payload = None

    def schedule_continuation(self, cursor: LogCursor) -> None:
        if self._work_queue is None:
            raise RuntimeError("continuations require a work queue")
        cursor.state = ProcessingState.SUSPENDED
        self._work_queue.prepend(_LogLinesJob(self, cursor))

    def process_log_lines(self, cursor: LogCursor) -> bool:
        """Run one slice over `cursor`. Return True once the payload is done."""
        if cursor.generation != self._generation:
            _LOG.debug("log_cursor_stale seq=%s offset=%s", cursor.record.sequence, cursor.offset)
            cursor.state = ProcessingState.DONE
            return True
        cursor.state = ProcessingState.PROCESSING
        end_time = self._time_source() + self._chunk_seconds
        start = cursor.offset
        line_count = len(cursor.lines)
        offset = start
        while offset < line_count:
            # Yield only at line boundaries, and only after making progress.
            if (
                self._work_queue is not None
                and offset != start
                and offset % self._chunk_check_lines == 0
                and self._time_source() >= end_time
            ):
                break
            line = cursor.lines[offset]
            try:
                self._process_line(cursor, line)
            except LogFormatError as exc:
                cursor.offset = offset
                cursor.state = ProcessingState.FAILED
                located = exc.with_location(offset + 1, line)
                self._emit(cursor, "format_error", str(exc), level="error", line_number=offset + 1)
                raise located from exc
            offset += 1
        cursor.offset = offset

        if offset < line_count:
            self.schedule_continuation(cursor)
            return False
        cursor.state = ProcessingState.DONE
        cursor.lines = []
        cursor.record.set_has_javascript_profile(cursor.profile.bottom_up_profile is not None)
        return True

    def _process_line(self, cursor: LogCursor, line: str) -> None:
        if not line:
            return
        if self._decompressor is not None:
            line = self._decompressor.decompress_log_entry(line)
        fields = split_log_line(line)
        if fields:
            self.parse_log_entry(cursor, fields)

    def parse_log_entry(self, cursor: LogCursor, fields: list[str]) -> None:
        """Dispatch one tokenized record by its (possibly aliased) command."""
        command = fields[0]
        action = self.aliases.action_type(command)
        handler = self._handlers.get(action.value) if action is not None else None
        if handler is None:
            self.stats.unknown_commands += 1
            self._diagnostic(cursor, "unknown_command", f"Unknown v8 profiler command: {command}")
            return
        handler(cursor, fields)

    def _parse_alias_entry(self, cursor: LogCursor, fields: list[str]) -> None:
        _require_fields(fields, 3)
        if not self.aliases.alias(fields[1], fields[2]):
            self._emit(cursor, "alias_miss", f"Unable to find command: {fields[2]!r} to match alias: {fields[1]}")

    def _parse_profiler_entry(self, cursor: LogCursor, fields: list[str]) -> None:
        _require_fields(fields, 2)
        kind = fields[1]
        if kind == '"compression"':
            _require_fields(fields, 3)
            window_size = parse_int(fields[2], what="compression window")
            if window_size <= 0:
                raise LogFormatError(f"compression window must be > 0, got {window_size}")
            self._decompressor = LogDecompressor(window_size)
        elif kind.endswith('"begin"'):
            self.codec.reset()
        elif kind == '"pause"' or kind.endswith('"resume"'):
            return
        else:
            self._diagnostic(cursor, "profiler_ignored", "Ignoring profiler command: " + ",".join(fields))

    def _parse_code_creation_entry(self, cursor: LogCursor, fields: list[str]) -> None:
        # code-creation,<type>,<address>,<size>,"<name>"
        _require_fields(fields, 5)
        symbol_type = self.aliases.symbol_type_code(fields[1])
        name = strip_quotes(fields[4])
        address = self.codec.parse_address(fields[2], ADDRESS_TAG_CODE)
        size = parse_int(fields[3], what="code size")
        self.symbols.add(Symbol(self._sanitizer(name), symbol_type, address, size))

    def _parse_code_move_entry(self, cursor: LogCursor, fields: list[str]) -> None:
        # code-move,<from>,<to>
        _require_fields(fields, 3)
        from_address = self.codec.parse_address(fields[1], ADDRESS_TAG_CODE)
        to_address = self.codec.parse_address(fields[2], ADDRESS_TAG_CODE_MOVE)
        symbol = self.symbols.lookup(from_address)
        if symbol is None:
            self.stats.move_misses += 1
            return
        self.symbols.remove(symbol)
        self.symbols.add(symbol.moved_to(to_address))

    def _parse_code_delete_entry(self, cursor: LogCursor, fields: list[str]) -> None:
        # code-delete,<address>
        _require_fields(fields, 2)
        address = self.codec.parse_address(fields[1], ADDRESS_TAG_CODE)
        self.symbols.remove_address(address)

    def _parse_tick_entry(self, cursor: LogCursor, fields: list[str]) -> None:
        # tick,<pc>,<sp>,<vm state>[,<caller pc>...]  e.g. t,-7364bb,+45c,0
        _require_fields(fields, 4)
        address = self.codec.parse_address(fields[1], ADDRESS_TAG_CODE)
        # Only parsed to keep the stack base current.
        self.codec.parse_address(fields[2], ADDRESS_TAG_STACK)
        vm_state = parse_int(fields[3], what="vm state")
        self.codec.set_base(ADDRESS_TAG_SCRATCH, address)
        stack = [address]
        stack.extend(self.codec.parse_address(token, ADDRESS_TAG_SCRATCH) for token in fields[4:])

        cursor.profile.add_state_time(vm_state, 1.0)
        root = cursor.profile.get_or_create_bottom_up_profile()
        self.tree_builder.record_tick(root, stack, vm_state)

    def _parse_repeat_entry(self, cursor: LogCursor, fields: list[str]) -> None:
        # repeat,<count>,<record...>
        _require_fields(fields, 3)
        count = parse_int(fields[1], what="repeat count")
        sub_fields = fields[2:]
        for _ in range(count):
            self.parse_log_entry(cursor, sub_fields)

    def _diagnostic(self, cursor: LogCursor, name: str, message: str) -> None:
        _LOG.info("%s seq=%s", message, cursor.record.sequence)
        self._emit(cursor, name, message)

    def _emit(
        self,
        cursor: LogCursor,
        name: str,
        message: str,
        *,
        level: str = "warning",
        line_number: int | None = None,
    ) -> None:
        if self._hub is None:
            return
        self._hub.report(
            category=DIAGNOSTICS_CATEGORY,
            name=f"{DIAGNOSTICS_CATEGORY}.{name}",
            sequence=cursor.record.sequence,
            message=message,
            level=level,
            line_number=line_number,
        )


def _require_fields(fields: list[str], count: int) -> None:
    if len(fields) < count:
        raise LogFormatError(f"{fields[0]} record needs {count} fields, got {len(fields)}")
