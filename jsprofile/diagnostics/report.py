"""Text and JSON reports over decoded profiles."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any

from jsprofile.diagnostics.json_codec import dumps_bytes
from jsprofile.diagnostics.stats import DebugStats
from jsprofile.profile.model import JavaScriptProfile, state_to_string
from jsprofile.profile.node import ProfileNode
from jsprofile.v8.decompressor import split_payload_lines

PROFILE_EXPORT_SCHEMA_VERSION = "jsprofile.profile.v1"

_STAT_LABELS: tuple[tuple[str, str], ...] = (
    ("add_collisions", "Add Collisions"),
    ("lookup_misses", "Lookup Misses"),
    ("remove_misses", "Remove Misses"),
    ("move_misses", "Move Misses"),
    ("alias_misses", "Alias Misses"),
    ("unknown_commands", "Unknown Commands"),
)


def format_debug_stats(stats: DebugStats) -> str:
    values = stats.as_dict()
    width = max(len(label) for _, label in _STAT_LABELS)
    return "\n".join(f"{label:<{width}}  {values[key]}" for key, label in _STAT_LABELS)


def command_breakdown(payload: str | None) -> dict[str, int]:
    """Count records per command token, most frequent first.

    Tokens are counted as written, so aliased commands show up under their
    alias.
    """
    if not payload:
        return {}
    counts = Counter(line.split(",", 1)[0] for line in split_payload_lines(payload) if line)
    return dict(counts.most_common())


def node_to_dict(node: ProfileNode) -> dict[str, Any]:
    return {
        "name": node.symbol_name,
        "type": node.symbol_type,
        "self_time": node.self_time,
        "time": node.time,
        "children": [
            node_to_dict(child)
            for child in sorted(node.children, key=lambda item: item.time, reverse=True)
        ],
    }


def _state_label(state: int) -> str:
    label = state_to_string(state)
    return f"{label} ({state})" if label == "Unknown" else label


def profile_to_dict(profile: JavaScriptProfile) -> dict[str, Any]:
    root = profile.bottom_up_profile
    return {
        "schema_version": PROFILE_EXPORT_SCHEMA_VERSION,
        "state_times": {_state_label(state): value for state, value in sorted(profile.state_times.items())},
        "bottom_up": None if root is None else node_to_dict(root),
    }


def export_profile_json(profile: JavaScriptProfile, *, path: Path, stats: DebugStats | None = None) -> Path:
    payload = profile_to_dict(profile)
    if stats is not None:
        payload["debug_stats"] = stats.as_dict()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_bytes(payload, pretty=True))
    return path
