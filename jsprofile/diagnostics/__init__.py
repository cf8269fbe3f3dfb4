"""Decoder diagnostics package."""

from jsprofile.diagnostics.event import DiagnosticEvent
from jsprofile.diagnostics.hub import DiagnosticHub
from jsprofile.diagnostics.report import (
    command_breakdown,
    export_profile_json,
    format_debug_stats,
    profile_to_dict,
)
from jsprofile.diagnostics.stats import DebugStats

__all__ = [
    "DebugStats",
    "DiagnosticEvent",
    "DiagnosticHub",
    "command_breakdown",
    "export_profile_json",
    "format_debug_stats",
    "profile_to_dict",
]
