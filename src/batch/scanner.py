# src/batch/scanner.py — v2
"""Candidate discovery — resolve glob patterns to bundle files.

Patterns follow shell glob syntax with `**` for recursive matching and are
resolved against the current working directory unless absolute.
"""

from __future__ import annotations

import glob
import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS: tuple[str, ...] = (".js", ".mjs", ".cjs")

Patterns = str | Iterable[str]


def _as_list(patterns: Patterns | None) -> list[str]:
    if patterns is None:
        return []
    if isinstance(patterns, str):
        return [patterns]
    return [str(p) for p in patterns]


def expand_globs(
    patterns: Patterns | None,
    ignore: Patterns | None = None,
) -> list[Path]:
    """Resolve glob patterns to absolute, deduplicated file paths.

    Args:
        patterns: One pattern or a list of patterns.
        ignore: Patterns whose matches are removed from the result.

    Returns:
        Sorted list of absolute paths to regular files.
    """
    ignored = {
        Path(p).resolve()
        for pattern in _as_list(ignore)
        for p in glob.glob(pattern, recursive=True)
    }

    found: set[Path] = set()
    for pattern in _as_list(patterns):
        for match in glob.glob(pattern, recursive=True):
            path = Path(match).resolve()
            if path in ignored or not path.is_file():
                continue
            found.add(path)
    return sorted(found)


def discover_candidates(
    assets: Patterns | None,
    build_artifact_paths: Iterable[str | Path],
    ignore: Patterns | None = None,
) -> list[Path]:
    """Build the candidate set for a debug-ID upload.

    Falls back to the build artifact paths supplied by the build tool when
    no assets are configured. Only `.js`, `.mjs` and `.cjs` files are kept.
    """
    if assets is None:
        logger.debug(
            "No `sourcemaps.assets` option provided, falling back to uploading "
            "detected build artifacts."
        )
        patterns: list[str] = [str(p) for p in build_artifact_paths]
    else:
        patterns = _as_list(assets)

    return [
        path for path in expand_globs(patterns, ignore)
        if path.name.endswith(SCRIPT_EXTENSIONS)
    ]
