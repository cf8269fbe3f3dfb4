"""Public contracts for the records and profiles the decoder writes to."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from jsprofile.profile.node import ProfileNode

Sanitizer = Callable[[str], str]
TimeSource = Callable[[], float]


class ProfileRecord(Protocol):
    """Timeline event that carries a profile payload."""

    @property
    def sequence(self) -> int:
        """Monotonic record number, used in diagnostics."""

    def set_has_javascript_profile(self, value: bool) -> None:
        """Mark whether decoding produced a profile."""

    def set_processing_javascript_profile(self) -> None:
        """Mark the profile as queued for decoding."""


class ProfileTarget(Protocol):
    """Aggregate that receives VM-state time and the bottom-up tree."""

    @property
    def bottom_up_profile(self) -> ProfileNode | None:
        """Return the tree root if one was created."""

    def add_state_time(self, state: int, amount: float) -> None:
        """Accumulate samples for one VM state."""

    def get_or_create_bottom_up_profile(self) -> ProfileNode:
        """Return the tree root, creating it on first use."""
