# src/sourcemap/transformer.py — v2
"""Source-map transformer — inject the debug ID and rewrite `sources`.

The transformed map is written under the staging directory next to the
renamed bundle. Nothing is written when the input cannot be read or parsed.
"""

from __future__ import annotations

import json
import logging
import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from debugid_uploader.core.errors import (
    SourceMapParseError,
    SourceMapReadError,
    SourceMapRewriteError,
    SourceMapWriteError,
)
from debugid_uploader.storage.base_output_writer import BaseOutputWriter
from debugid_uploader.storage.local_writer import LocalWriter

logger = logging.getLogger(__name__)

RewriteSourcesHook = Callable[[str, dict[str, Any]], str]

# Both keys are written until one becomes the standard.
DEBUG_ID_FIELDS = ("debug_id", "debugId")

_PROTOCOL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+\-.]*://")


def default_rewrite_sources_hook(source: str, source_map: dict[str, Any]) -> str:
    """Make a `sources` entry upload-clean.

    URLs lose their `scheme://` prefix; anything else is normalized and made
    relative to the current working directory.
    """
    if not source:
        return source
    if _PROTOCOL_RE.match(source):
        return _PROTOCOL_RE.sub("", source, count=1)
    return os.path.relpath(os.path.normpath(source), os.getcwd())


def inject_debug_id(source_map: dict[str, Any], debug_id: str) -> dict[str, Any]:
    """Set every debug ID field on the parsed map (in place)."""
    for field in DEBUG_ID_FIELDS:
        source_map[field] = debug_id
    return source_map


def rewrite_sources(
    source_map: dict[str, Any],
    rewrite_sources_hook: RewriteSourcesHook,
) -> dict[str, Any]:
    """Replace each `sources` entry with the hook's result (in place).

    Length and order are preserved. Maps without a `sources` list are left
    untouched.
    """
    sources = source_map.get("sources")
    if isinstance(sources, list):
        source_map["sources"] = [
            rewrite_sources_hook(source, source_map) for source in sources
        ]
    return source_map


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def parse_source_map(content: str, source_map_path: Path) -> dict[str, Any]:
    """Parse source map text into a JSON object.

    Raises:
        SourceMapParseError: Content is not valid JSON or not an object.
    """
    try:
        parsed = json.loads(content, parse_constant=_reject_constant)
    except ValueError as exc:
        raise SourceMapParseError(source_map_path, str(exc)) from exc
    if not isinstance(parsed, dict):
        raise SourceMapParseError(
            source_map_path, f"expected a JSON object, got {type(parsed).__name__}",
        )
    return parsed


async def prepare_source_map(
    source_map_path: Path,
    target_path: Path,
    debug_id: str,
    rewrite_sources_hook: RewriteSourcesHook = default_rewrite_sources_hook,
    writer: BaseOutputWriter | None = None,
) -> dict[str, Any]:
    """Read a source map, inject the debug ID, rewrite sources and write it.

    Args:
        source_map_path: Map file located for the bundle.
        target_path: Destination inside the staging directory.
        debug_id: Debug ID extracted from the bundle.
        rewrite_sources_hook: Called as `hook(source, map)` for each entry.
        writer: File access backend.

    Returns:
        The transformed map document.

    Raises:
        SourceMapReadError: Map file could not be read.
        SourceMapParseError: Map content is malformed.
        SourceMapRewriteError: The rewrite hook failed on an entry.
        SourceMapWriteError: Destination could not be written.
    """
    writer = writer or LocalWriter()

    try:
        content = await writer.read_text(source_map_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceMapReadError(source_map_path, str(exc)) from exc

    source_map = parse_source_map(content, source_map_path)
    inject_debug_id(source_map, debug_id)
    try:
        rewrite_sources(source_map, rewrite_sources_hook)
    except Exception as exc:
        raise SourceMapRewriteError(source_map_path, str(exc)) from exc

    try:
        await writer.write_text(target_path, json.dumps(source_map, allow_nan=False))
    except (OSError, ValueError) as exc:
        raise SourceMapWriteError(source_map_path, str(exc)) from exc

    logger.debug("Staged source map %s -> %s", source_map_path, target_path.name)
    return source_map
