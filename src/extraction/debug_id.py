# src/extraction/debug_id.py — v1
"""Debug ID extraction from bundle source.

An earlier build step injects a `sentry-dbid-<uuid>` marker into every
bundle. This module finds that marker and returns the embedded UUID.
"""

from __future__ import annotations

import re

DEBUG_ID_MARKER = "sentry-dbid-"

_DEBUG_ID_RE = re.compile(
    re.escape(DEBUG_ID_MARKER)
    + r"([0-9a-fA-F]{8}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{12})"
)


def extract_debug_id(code: str) -> str | None:
    """Return the debug ID embedded in bundle source, or None.

    The first marker wins. Case is preserved.
    """
    match = _DEBUG_ID_RE.search(code)
    if match is None:
        return None
    return match.group(1)
