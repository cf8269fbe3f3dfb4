"""Bottom-up attribution of sampled stacks."""

from __future__ import annotations

from collections.abc import Sequence

from jsprofile.diagnostics.stats import DebugStats
from jsprofile.profile.model import state_to_string
from jsprofile.profile.node import ProfileNode
from jsprofile.v8.aliases import AliasRegistry
from jsprofile.v8.symbols import SymbolTable

UNKNOWN_PREFIX = "unknown - "


class ProfileTreeBuilder:
    """Extend a bottom-up tree with one path per sampled stack.

    The innermost resolved frame receives self time, every resolved frame
    outside it only total time. Frames that do not resolve are skipped and
    the path continues from the last resolved node.
    """

    def __init__(
        self,
        *,
        symbols: SymbolTable,
        aliases: AliasRegistry,
        stats: DebugStats | None = None,
    ) -> None:
        self._symbols = symbols
        self._aliases = aliases
        self._stats = stats if stats is not None else DebugStats()

    def record_address_in_profile(
        self,
        parent: ProfileNode,
        address: int,
        self_time_recorded: bool,
    ) -> ProfileNode:
        found = self._symbols.lookup(address)
        if found is None:
            self._stats.lookup_misses += 1
            return parent
        child = parent.get_or_insert_child(found.name)
        if self_time_recorded:
            child.add_time(1.0)
            return child
        child.add_self_time(1.0)
        type_name = self._aliases.symbol_type_name(found.symbol_type)
        if type_name is not None:
            child.set_symbol_type(type_name)
        return child

    def record_tick(self, root: ProfileNode, addresses: Sequence[int], vm_state: int) -> ProfileNode:
        """Record one sample whose stack is `addresses`, innermost first.

        Returns the outermost node touched.
        """
        root.add_time(1.0)
        node = root
        for address in addresses:
            node = self.record_address_in_profile(node, address, node is not root)
        # Nothing on the stack resolved; the sample still has to land somewhere.
        if node is root:
            node = root.get_or_insert_child(UNKNOWN_PREFIX + state_to_string(vm_state))
            node.add_self_time(1.0)
        return node
