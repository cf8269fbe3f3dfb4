"""Address-keyed store of the VM's live code objects."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from jsprofile.diagnostics.stats import DebugStats


@dataclass(frozen=True, slots=True)
class Symbol:
    """One code object created by the VM."""

    name: str
    symbol_type: int
    address: int
    size: int

    def moved_to(self, address: int) -> Symbol:
        return Symbol(self.name, self.symbol_type, address, self.size)


class SymbolTable:
    """Point lookups from code address to symbol.

    Addresses are reused by the VM, so collisions and misses are counted in
    `DebugStats` rather than treated as errors.
    """

    def __init__(self, *, stats: DebugStats | None = None) -> None:
        self._stats = stats if stats is not None else DebugStats()
        self._symbols: dict[int, Symbol] = {}

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, address: object) -> bool:
        return address in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(tuple(self._symbols.values()))

    def add(self, symbol: Symbol) -> None:
        if symbol.address in self._symbols:
            self._stats.add_collisions += 1
        self._symbols[symbol.address] = symbol

    def remove(self, symbol: Symbol) -> bool:
        return self.remove_address(symbol.address) is not None

    def remove_address(self, address: int) -> Symbol | None:
        removed = self._symbols.pop(address, None)
        if removed is None:
            self._stats.remove_misses += 1
        return removed

    def lookup(self, address: int) -> Symbol | None:
        return self._symbols.get(address)
