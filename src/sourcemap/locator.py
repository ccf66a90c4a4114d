# src/sourcemap/locator.py — v1
"""Source-map locator — find the companion map for a bundle.

Heuristics, in decreasing order of reliability:
    1. A `//# sourceMappingURL=<value>` comment on its own line
    2. A sibling file at `<bundle_path>.map`
    3. Nothing (many build setups do not emit maps)

Only paths are resolved here; the map content is not inspected.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from debugid_uploader.storage.base_output_writer import BaseOutputWriter
from debugid_uploader.storage.local_writer import LocalWriter

logger = logging.getLogger(__name__)

_SOURCE_MAPPING_URL_RE = re.compile(r"^//# sourceMappingURL=(.*?)\s*$", re.MULTILINE)


def find_source_mapping_url(code: str) -> str | None:
    """Return the value of the trailing `sourceMappingURL` comment, if any."""
    matches = _SOURCE_MAPPING_URL_RE.findall(code)
    if not matches:
        return None
    return matches[-1]


async def determine_source_map_path(
    bundle_path: Path,
    bundle_code: str,
    writer: BaseOutputWriter | None = None,
) -> Path | None:
    """Apply the locator heuristics to find a bundle's source map.

    Args:
        bundle_path: Absolute path of the bundle on disk.
        bundle_code: Bundle text (already read).
        writer: File access backend used for the existence probe.

    Returns:
        Path to the source map, or None when none could be found.
    """
    writer = writer or LocalWriter()

    source_mapping_url = find_source_mapping_url(bundle_code)
    if source_mapping_url:
        normalized = Path(os.path.normpath(source_mapping_url))
        if normalized.is_absolute():
            return normalized
        return Path(os.path.normpath(bundle_path.parent / normalized))

    adjacent = bundle_path.with_name(bundle_path.name + ".map")
    if await writer.exists(adjacent):
        return adjacent

    # Debug only: some frameworks emit many bundles without maps.
    logger.debug(
        "Could not determine source map path for bundle: %s - "
        "Did you turn on source map generation in your bundler?",
        bundle_path,
    )
    return None
