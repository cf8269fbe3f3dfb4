"""Default markup scrubbing for symbol names."""

from __future__ import annotations

import html


def scrub_markup(value: str) -> str:
    """Neutralize markup in text that reports may render as HTML."""
    return html.escape(value, quote=False)
