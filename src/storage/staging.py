# src/storage/staging.py — v1
"""Temporary staging directory for artifact bundles.

Staged files are named `<debug_id>-<chunk_index>.js` and
`<debug_id>-<chunk_index>.js.map`. The directory lives only for the duration
of one batch and is removed on every exit path.
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from debugid_uploader.core.models import staged_basename
from debugid_uploader.storage.base_output_writer import BaseOutputWriter
from debugid_uploader.storage.local_writer import LocalWriter

logger = logging.getLogger(__name__)

STAGING_DIR_PREFIX = "sentry-bundler-plugin-upload-"
BUNDLE_SUFFIX = ".js"
SOURCE_MAP_SUFFIX = ".js.map"


def staged_bundle_path(staging_dir: Path, debug_id: str, chunk_index: int) -> Path:
    """Return the staged bundle path for a debug ID and chunk index."""
    return staging_dir / f"{staged_basename(debug_id, chunk_index)}{BUNDLE_SUFFIX}"


def staged_source_map_path(staging_dir: Path, debug_id: str, chunk_index: int) -> Path:
    """Return the staged source map path for a debug ID and chunk index."""
    return staging_dir / f"{staged_basename(debug_id, chunk_index)}{SOURCE_MAP_SUFFIX}"


@asynccontextmanager
async def staging_directory(
    writer: BaseOutputWriter | None = None,
    parent: Path | None = None,
) -> AsyncIterator[Path]:
    """Create a temporary staging directory and always remove it on exit.

    Removal is awaited, so it happens only after every write issued inside
    the block has settled.

    Args:
        writer: File access backend used for removal.
        parent: Parent directory (defaults to the system temp dir).
    """
    writer = writer or LocalWriter()
    path = Path(
        await asyncio.to_thread(
            tempfile.mkdtemp,
            prefix=STAGING_DIR_PREFIX,
            dir=str(parent) if parent else None,
        )
    )
    logger.debug("Created staging directory %s", path)
    try:
        yield path
    finally:
        await writer.remove_tree(path)
        logger.debug("Removed staging directory %s", path)
