# src/batch/orchestrator.py — v2
"""Batch orchestrator — discover, stage, upload, clean up.

Run lifecycle (linear):
    INIT -> STAGE_DIR_CREATED -> DISCOVER -> PREPARE_ALL -> UPLOAD
         -> DELETE_SOURCES (optional) -> CLEANUP

Any failure after the staging directory exists is caught once, reported to
telemetry and handed to the recoverable-error callback. The staging
directory is removed on every path.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path

from debugid_uploader.batch.models import BatchResult
from debugid_uploader.batch.preparer import prepare_bundle_for_upload
from debugid_uploader.batch.scanner import Patterns, discover_candidates, expand_globs
from debugid_uploader.core.models import PreparedBundle
from debugid_uploader.logging.context import set_batch_context
from debugid_uploader.sourcemap.transformer import (
    RewriteSourcesHook,
    default_rewrite_sources_hook,
)
from debugid_uploader.storage.base_output_writer import BaseOutputWriter
from debugid_uploader.storage.local_writer import LocalWriter
from debugid_uploader.storage.staging import staging_directory
from debugid_uploader.upload.base_uploader import BaseArtifactUploader
from debugid_uploader.upload.models import UNDEFINED_RELEASE, UploadInclude
from debugid_uploader.upload.telemetry import NullTelemetrySink, TelemetrySink

logger = logging.getLogger(__name__)

TELEMETRY_MESSAGE = 'Error in "debugIdUploadPlugin" writeBundle hook'

RecoverableErrorHandler = Callable[[BaseException], None]


class DebugIdUploader:
    """Stage debug-ID bundles and their source maps, then upload them.

    Workflow:
        1. Create a temporary staging directory
        2. Discover candidate bundles (assets or build artifacts, minus ignore)
        3. Prepare every candidate concurrently
        4. Upload the staging directory as one artifact bundle
        5. Optionally delete files after upload
        6. Remove the staging directory
    """

    def __init__(
        self,
        uploader: BaseArtifactUploader,
        handle_recoverable_error: RecoverableErrorHandler,
        assets: Patterns | None = None,
        ignore: Patterns | None = None,
        release_name: str | None = None,
        dist: str | None = None,
        rewrite_sources_hook: RewriteSourcesHook | None = None,
        delete_files_after_upload: Patterns | None = None,
        telemetry: TelemetrySink | None = None,
        writer: BaseOutputWriter | None = None,
        staging_parent: Path | None = None,
    ) -> None:
        self._uploader = uploader
        self._handle_recoverable_error = handle_recoverable_error
        if assets is not None and not isinstance(assets, str):
            assets = list(assets)
        self._assets = assets
        self._ignore = ignore
        self._release_name = release_name
        self._dist = dist
        self._rewrite_sources_hook = rewrite_sources_hook or default_rewrite_sources_hook
        self._delete_files_after_upload = delete_files_after_upload
        self._telemetry = telemetry or NullTelemetrySink()
        self._writer = writer or LocalWriter()
        self._staging_parent = staging_parent

    @property
    def release(self) -> str:
        return self._release_name or UNDEFINED_RELEASE

    async def run(self, build_artifact_paths: Iterable[str | Path] = ()) -> BatchResult:
        """Execute one upload run. Never raises for batch-level failures."""
        t0 = time.perf_counter()
        result = BatchResult(
            batch_id=uuid.uuid4().hex[:12], release=self.release, dist=self._dist,
        )
        set_batch_context(result.batch_id)

        try:
            async with staging_directory(self._writer, self._staging_parent) as staging_dir:
                await self._run_in_staging(staging_dir, list(build_artifact_paths), result)
        except Exception as exc:
            result.failed = True
            self._telemetry.capture_exception(TELEMETRY_MESSAGE)
            await self._telemetry.flush()
            self._handle_recoverable_error(exc)

        result.duration_seconds = round(time.perf_counter() - t0, 3)
        logger.info(
            "Debug ID upload finished: %d candidates, %d bundles, %d source maps, "
            "%d skipped, uploaded=%s",
            result.total_candidates, result.staged_bundles,
            result.staged_source_maps, result.skipped, result.uploaded,
        )
        return result

    async def _run_in_staging(
        self,
        staging_dir: Path,
        build_artifact_paths: list[str | Path],
        result: BatchResult,
    ) -> None:
        candidates = await asyncio.to_thread(
            discover_candidates, self._assets, build_artifact_paths, self._ignore,
        )
        result.total_candidates = len(candidates)

        if self._assets == []:
            logger.debug(
                "Empty `sourcemaps.assets` option provided. Will not upload "
                "sourcemaps with debug ID."
            )
        elif not candidates:
            logger.warning(
                "Didn't find any matching sources for debug ID upload. Please "
                "check the `sourcemaps.assets` option."
            )
        else:
            entries = await self.prepare_all(candidates, staging_dir)
            result.entries = entries
            result.staged_bundles = sum(e.bundle_staged for e in entries)
            result.staged_source_maps = sum(e.source_map_staged for e in entries)
            result.skipped = len(entries) - result.staged_bundles

            await self._uploader.upload_source_maps(
                self.release,
                [UploadInclude(paths=[str(staging_dir)], rewrite=False, dist=self._dist)],
                use_artifact_bundle=True,
            )
            result.uploaded = True

        if self._delete_files_after_upload:
            result.deleted_files = await self.delete_files_after_upload()

    async def prepare_all(
        self, candidates: list[Path], staging_dir: Path,
    ) -> list[PreparedBundle]:
        """Prepare every candidate concurrently; the chunk index is its position."""
        return list(
            await asyncio.gather(
                *(
                    prepare_bundle_for_upload(
                        path, staging_dir, chunk_index,
                        self._rewrite_sources_hook, self._writer,
                    )
                    for chunk_index, path in enumerate(candidates)
                )
            )
        )

    async def delete_files_after_upload(self) -> list[str]:
        """Remove files matching the post-upload deletion patterns."""
        paths = await asyncio.to_thread(expand_globs, self._delete_files_after_upload)
        for path in paths:
            logger.debug("Deleting asset after upload: %s", path)
        await asyncio.gather(*(self._writer.remove(path) for path in paths))
        return [str(p) for p in paths]


def create_debug_id_upload_function(
    uploader: BaseArtifactUploader,
    handle_recoverable_error: RecoverableErrorHandler,
    **options: object,
) -> Callable[[Iterable[str | Path]], Awaitable[BatchResult]]:
    """Return a coroutine function suitable as a post-build hook.

    Keyword options are passed through to DebugIdUploader.
    """
    orchestrator = DebugIdUploader(
        uploader=uploader,
        handle_recoverable_error=handle_recoverable_error,
        **options,  # type: ignore[arg-type]
    )
    return orchestrator.run
