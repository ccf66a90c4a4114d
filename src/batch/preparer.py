# src/batch/preparer.py — v1
"""Bundle preparer — stage one bundle and its source map for upload.

Workflow for a single candidate file:
    1. Read the bundle text
    2. Extract the debug ID (no ID -> skip)
    3. Append a `//# debugId=` comment to the in-memory text
    4. Concurrently write the stamped bundle and run locate + transform
       for its source map

The two branches in step 4 are independent: a failure in one is logged and
never prevents the other from completing.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from debugid_uploader.core.errors import (
    BundleReadError,
    SourceMapError,
    SourceMapParseError,
    SourceMapReadError,
    SourceMapRewriteError,
    SourceMapWriteError,
)
from debugid_uploader.core.models import BundleRecord, PreparedBundle, SourceMapStatus
from debugid_uploader.extraction.debug_id import extract_debug_id
from debugid_uploader.logging.context import set_bundle_context, set_debug_id_context
from debugid_uploader.sourcemap.locator import determine_source_map_path
from debugid_uploader.sourcemap.transformer import (
    RewriteSourcesHook,
    default_rewrite_sources_hook,
    prepare_source_map,
)
from debugid_uploader.storage.base_output_writer import BaseOutputWriter
from debugid_uploader.storage.local_writer import LocalWriter
from debugid_uploader.storage.staging import staged_bundle_path, staged_source_map_path

logger = logging.getLogger(__name__)

_MAP_ERROR_STATUS: dict[type[Exception], SourceMapStatus] = {
    SourceMapReadError: "read_error",
    SourceMapParseError: "parse_error",
    SourceMapRewriteError: "rewrite_error",
    SourceMapWriteError: "write_error",
}


def stamp_debug_id(code: str, debug_id: str) -> str:
    """Append the `//# debugId=` comment so the ID survives marker stripping."""
    return f"{code}\n//# debugId={debug_id}"


async def read_bundle(bundle_path: Path, writer: BaseOutputWriter) -> str:
    """Read bundle text.

    Raises:
        BundleReadError: File missing, unreadable or not UTF-8.
    """
    try:
        return await writer.read_text(bundle_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise BundleReadError(bundle_path, str(exc)) from exc


async def prepare_bundle_for_upload(
    bundle_path: Path,
    staging_dir: Path,
    chunk_index: int,
    rewrite_sources_hook: RewriteSourcesHook = default_rewrite_sources_hook,
    writer: BaseOutputWriter | None = None,
) -> PreparedBundle:
    """Stage one bundle (and its source map, if any) under staging_dir.

    Never raises for per-file problems; the outcome is reported in the
    returned PreparedBundle and in the log.

    Args:
        bundle_path: Absolute path of the candidate bundle.
        staging_dir: Temporary directory collecting the artifact bundle.
        chunk_index: Position of the bundle in the candidate set.
        rewrite_sources_hook: Rewrites each `sources` entry of the map.
        writer: File access backend.
    """
    writer = writer or LocalWriter()
    set_bundle_context(str(bundle_path), chunk_index)

    try:
        code = await read_bundle(bundle_path, writer)
    except BundleReadError:
        logger.error(
            "Could not read bundle to determine debug ID and source map: %s",
            bundle_path, exc_info=True,
        )
        return PreparedBundle(
            source_path=bundle_path, chunk_index=chunk_index, status="read_error",
        )

    record = BundleRecord(
        source_path=bundle_path,
        code=code,
        debug_id=extract_debug_id(code),
        chunk_index=chunk_index,
    )
    if record.debug_id is None:
        logger.debug(
            "Could not determine debug ID from bundle. This can happen if you did "
            "not clean your output folder before installing the plugin. File will "
            "not be source mapped: %s",
            bundle_path,
        )
        return PreparedBundle(
            source_path=bundle_path, chunk_index=chunk_index, status="no_debug_id",
        )

    set_debug_id_context(record.debug_id)
    stamped = stamp_debug_id(record.code, record.debug_id)
    bundle_target = staged_bundle_path(staging_dir, record.debug_id, chunk_index)
    map_target = staged_source_map_path(staging_dir, record.debug_id, chunk_index)

    bundle_written, (map_path, map_status) = await asyncio.gather(
        _write_bundle(bundle_target, stamped, writer),
        _stage_source_map(
            bundle_path, record.debug_id, stamped, map_target,
            rewrite_sources_hook, writer,
        ),
    )

    return PreparedBundle(
        source_path=bundle_path,
        chunk_index=chunk_index,
        status="staged" if bundle_written else "write_error",
        debug_id=record.debug_id,
        staged_bundle_path=bundle_target if bundle_written else None,
        source_map_path=map_path,
        staged_source_map_path=map_target if map_status == "staged" else None,
        source_map_status=map_status,
    )


async def _write_bundle(target: Path, content: str, writer: BaseOutputWriter) -> bool:
    try:
        await writer.write_text(target, content)
    except OSError:
        logger.error("Failed to stage bundle for debug ID upload: %s", target, exc_info=True)
        return False
    return True


async def _stage_source_map(
    bundle_path: Path,
    debug_id: str,
    stamped_code: str,
    target: Path,
    rewrite_sources_hook: RewriteSourcesHook,
    writer: BaseOutputWriter,
) -> tuple[Path | None, SourceMapStatus]:
    """Locate and transform the source map; returns (map path, status)."""
    try:
        map_path = await determine_source_map_path(bundle_path, stamped_code, writer)
    except OSError:
        logger.error(
            "Failed to locate source map for bundle: %s", bundle_path, exc_info=True,
        )
        return None, "not_found"
    if map_path is None:
        return None, "not_found"

    try:
        await prepare_source_map(
            map_path, target, debug_id, rewrite_sources_hook, writer,
        )
    except SourceMapError as exc:
        logger.error(
            "Failed to prepare source map for debug ID upload: %s", exc,
            exc_info=not isinstance(exc, SourceMapParseError),
        )
        return map_path, _MAP_ERROR_STATUS.get(type(exc), "read_error")
    return map_path, "staged"
