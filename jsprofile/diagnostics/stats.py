"""Per-session consistency counters for log decoding."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(slots=True)
class DebugStats:
    """Counters for tolerated inconsistencies in a VM log.

    The log is VM-emitted and occasionally lossy, so these conditions never
    stop processing; they are only tallied here for the debug dump.
    """

    add_collisions: int = 0
    lookup_misses: int = 0
    remove_misses: int = 0
    move_misses: int = 0
    alias_misses: int = 0
    unknown_commands: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    def reset(self) -> None:
        self.add_collisions = 0
        self.lookup_misses = 0
        self.remove_misses = 0
        self.move_misses = 0
        self.alias_misses = 0
        self.unknown_commands = 0
