# src/api/facade.py — v2
"""Public API facade — single entry point for debug-ID uploads.

Usage:
    from debugid_uploader.api.facade import upload_debug_ids
    result = await upload_debug_ids(["dist/**/*.js"])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from debugid_uploader.batch.orchestrator import DebugIdUploader, RecoverableErrorHandler
from debugid_uploader.config.settings import Settings

if TYPE_CHECKING:
    from debugid_uploader.batch.models import BatchResult
    from debugid_uploader.sourcemap.transformer import RewriteSourcesHook
    from debugid_uploader.upload.base_uploader import BaseArtifactUploader
    from debugid_uploader.upload.telemetry import TelemetrySink

logger = logging.getLogger(__name__)


def log_recoverable_error(error: BaseException) -> None:
    """Default recoverable-error policy: log with traceback and continue."""
    logger.error("Debug ID upload failed: %s", error, exc_info=error)


def build_uploader(
    settings: Settings,
    uploader: BaseArtifactUploader | None = None,
    telemetry: TelemetrySink | None = None,
    rewrite_sources_hook: RewriteSourcesHook | None = None,
    handle_recoverable_error: RecoverableErrorHandler | None = None,
) -> DebugIdUploader:
    """Wire settings and collaborators into a DebugIdUploader."""
    if uploader is None:
        from debugid_uploader.upload.uploader_factory import create_uploader

        uploader = create_uploader(settings)

    if telemetry is None:
        from debugid_uploader.upload.telemetry import LoggingTelemetrySink

        telemetry = LoggingTelemetrySink()

    return DebugIdUploader(
        uploader=uploader,
        handle_recoverable_error=handle_recoverable_error or log_recoverable_error,
        assets=settings.sourcemaps_assets_list,
        ignore=settings.sourcemaps_ignore_list,
        release_name=settings.release_name or None,
        dist=settings.dist or None,
        rewrite_sources_hook=rewrite_sources_hook,
        delete_files_after_upload=settings.sourcemaps_delete_after_upload_list or None,
        telemetry=telemetry,
    )


async def upload_debug_ids(
    build_artifact_paths: Iterable[str | Path] = (),
    settings: Settings | None = None,
    uploader: BaseArtifactUploader | None = None,
    telemetry: TelemetrySink | None = None,
    rewrite_sources_hook: RewriteSourcesHook | None = None,
    handle_recoverable_error: RecoverableErrorHandler | None = None,
) -> BatchResult:
    """Stage and upload debug-ID bundles end-to-end.

    Args:
        build_artifact_paths: Files emitted by the build, used when no
            `SOURCEMAPS_ASSETS` are configured.
        settings: Global settings. Loaded from .env if None.
        uploader: Upload client. Built from settings if None.
        telemetry: Error telemetry sink. Logging sink if None.
        rewrite_sources_hook: Custom `sources` rewrite. Default strips URL
            schemes and relativizes local paths.
        handle_recoverable_error: Called with any batch-level failure.
            Defaults to logging it.

    Returns:
        BatchResult summarizing the run.
    """
    settings = settings or Settings()
    orchestrator = build_uploader(
        settings,
        uploader=uploader,
        telemetry=telemetry,
        rewrite_sources_hook=rewrite_sources_hook,
        handle_recoverable_error=handle_recoverable_error,
    )
    return await orchestrator.run(build_artifact_paths)
