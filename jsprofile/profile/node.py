"""Bottom-up profile tree nodes."""

from __future__ import annotations


class ProfileNode:
    """A call-tree node keyed by symbol name under its parent.

    Self time and total time are accumulated independently on each visit;
    a node's total is not derived from its children.
    """

    __slots__ = ("symbol_name", "symbol_type", "self_time", "time", "_children")

    def __init__(self, symbol_name: str) -> None:
        self.symbol_name = symbol_name
        self.symbol_type: str | None = None
        self.self_time = 0.0
        self.time = 0.0
        self._children: dict[str, ProfileNode] = {}

    def __repr__(self) -> str:
        return (
            f"ProfileNode({self.symbol_name!r}, self_time={self.self_time}, "
            f"time={self.time}, children={len(self._children)})"
        )

    @property
    def children(self) -> tuple[ProfileNode, ...]:
        return tuple(self._children.values())

    def child(self, symbol_name: str) -> ProfileNode | None:
        return self._children.get(symbol_name)

    def get_or_insert_child(self, symbol_name: str) -> ProfileNode:
        node = self._children.get(symbol_name)
        if node is None:
            node = ProfileNode(symbol_name)
            self._children[symbol_name] = node
        return node

    def add_self_time(self, amount: float) -> None:
        self.self_time += amount
        self.time += amount

    def add_time(self, amount: float) -> None:
        self.time += amount

    def set_symbol_type(self, symbol_type: str) -> None:
        self.symbol_type = symbol_type
