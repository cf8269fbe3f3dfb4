"""Profile aggregate and timeline record defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from jsprofile.profile.node import ProfileNode

BOTTOM_UP_ROOT_NAME = "<root>"


class VmState(IntEnum):
    JS = 0
    GC = 1
    COMPILER = 2
    OTHER = 3
    EXTERNAL = 4


_STATE_NAMES: dict[int, str] = {
    VmState.JS: "JavaScript",
    VmState.GC: "Garbage Collection",
    VmState.COMPILER: "Compiler",
    VmState.OTHER: "Other",
    VmState.EXTERNAL: "External",
}


def state_to_string(state: int) -> str:
    return _STATE_NAMES.get(state, "Unknown")


class JavaScriptProfile:
    """Samples per VM state plus the bottom-up call tree of one record."""

    def __init__(self) -> None:
        self._state_times: dict[int, float] = {}
        self._bottom_up: ProfileNode | None = None

    @property
    def bottom_up_profile(self) -> ProfileNode | None:
        return self._bottom_up

    @property
    def state_times(self) -> dict[int, float]:
        return dict(self._state_times)

    @property
    def total_time(self) -> float:
        return sum(self._state_times.values())

    def add_state_time(self, state: int, amount: float) -> None:
        self._state_times[state] = self._state_times.get(state, 0.0) + amount

    def get_state_time(self, state: int) -> float:
        return self._state_times.get(state, 0.0)

    def get_or_create_bottom_up_profile(self) -> ProfileNode:
        if self._bottom_up is None:
            self._bottom_up = ProfileNode(BOTTOM_UP_ROOT_NAME)
        return self._bottom_up


@dataclass(slots=True)
class TimelineRecord:
    """Minimal timeline event that owns a JavaScript profile."""

    sequence: int
    has_javascript_profile: bool | None = None
    processing_javascript_profile: bool = False
    profile: JavaScriptProfile = field(default_factory=JavaScriptProfile)

    def set_has_javascript_profile(self, value: bool) -> None:
        self.has_javascript_profile = value
        self.processing_javascript_profile = False

    def set_processing_javascript_profile(self) -> None:
        self.processing_javascript_profile = True
