"""Command and code-kind vocabularies with runtime aliasing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from jsprofile.diagnostics.stats import DebugStats

_LOG = logging.getLogger(__name__)

NOT_FOUND = -1


class ActionCode(IntEnum):
    ALIAS = 1
    PROFILER = 2
    CODE_CREATION = 3
    CODE_MOVE = 4
    CODE_DELETE = 5
    TICK = 6
    REPEAT = 7


ACTION_NAMES: tuple[tuple[str, ActionCode], ...] = (
    ("alias", ActionCode.ALIAS),
    ("profiler", ActionCode.PROFILER),
    ("code-creation", ActionCode.CODE_CREATION),
    ("code-move", ActionCode.CODE_MOVE),
    ("code-delete", ActionCode.CODE_DELETE),
    ("tick", ActionCode.TICK),
    ("repeat", ActionCode.REPEAT),
)

# V8 code kinds as written in code-creation records.
SYMBOL_TYPE_NAMES: tuple[tuple[str, int], ...] = (
    ("Builtin", 8),
    ("CallDebugBreak", 9),
    ("CallDebugPrepareStepIn", 10),
    ("CallIC", 11),
    ("CallInitialize", 12),
    ("CallMegamorphic", 13),
    ("CallMiss", 14),
    ("CallNormal", 15),
    ("CallPreMonomorphic", 16),
    ("Callback", 17),
    ("Eval", 18),
    ("Function", 19),
    ("KeyedCallIC", 21),
    ("KeyedLoadIC", 22),
    ("KeyedStoreIC", 23),
    ("LazyCompile", 24),
    ("LoadIC", 20),
    ("RegExp", 25),
    ("Script", 26),
    ("StoreIC", 27),
    ("Stub", 28),
)


@dataclass(frozen=True, slots=True)
class AliasableEntry:
    """A name bound to a numeric constant; aliases share the same object."""

    name: str
    value: int

    def __str__(self) -> str:
        return f"{self.name}:{self.value}"


class ActionType(AliasableEntry):
    pass


class SymbolType(AliasableEntry):
    pass


class AliasRegistry:
    """Name lookups for log commands and code kinds.

    Compressed logs rename both vocabularies with `alias` records, e.g.
    `alias,t,tick` or `alias,lic,LoadIC`.
    """

    def __init__(self, *, stats: DebugStats | None = None) -> None:
        self._stats = stats if stats is not None else DebugStats()
        self._action_types: dict[str, ActionType] = {}
        self._symbol_types: dict[str, SymbolType] = {}
        self._symbol_types_by_code: dict[int, SymbolType] = {}
        for name, code in ACTION_NAMES:
            self.create_action_type(name, int(code))
        for name, code in SYMBOL_TYPE_NAMES:
            self.create_symbol_type(name, code)

    def create_action_type(self, name: str, value: int) -> ActionType:
        entry = ActionType(name, value)
        self._action_types[name] = entry
        return entry

    def create_symbol_type(self, name: str, value: int) -> SymbolType:
        entry = SymbolType(name, value)
        self._symbol_types[name] = entry
        self._symbol_types_by_code[value] = entry
        return entry

    def alias(self, alias_name: str, original_name: str) -> bool:
        """Make `alias_name` resolve to the entry named `original_name`."""
        symbol_type = self._symbol_types.get(original_name)
        if symbol_type is not None:
            self._symbol_types[alias_name] = symbol_type
            return True
        action_type = self._action_types.get(original_name)
        if action_type is not None:
            self._action_types[alias_name] = action_type
            return True
        self._stats.alias_misses += 1
        _LOG.info("alias_miss original=%r alias=%r", original_name, alias_name)
        return False

    def action_type(self, name: str) -> ActionType | None:
        return self._action_types.get(name)

    def action_code(self, name: str) -> int:
        entry = self._action_types.get(name)
        return NOT_FOUND if entry is None else entry.value

    def symbol_type(self, name: str) -> SymbolType | None:
        return self._symbol_types.get(name)

    def symbol_type_code(self, name: str) -> int:
        """Return the code for a code-kind name, or -1 when unknown."""
        entry = self._symbol_types.get(name)
        return NOT_FOUND if entry is None else entry.value

    def symbol_type_name(self, code: int) -> str | None:
        """Return the canonical name for a code-kind constant."""
        entry = self._symbol_types_by_code.get(code)
        return None if entry is None else entry.name
