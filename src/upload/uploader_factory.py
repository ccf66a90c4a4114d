# src/upload/uploader_factory.py — v1
"""Factory: instantiate the upload client from configuration."""

from __future__ import annotations

from debugid_uploader.config.settings import Settings
from debugid_uploader.upload.base_uploader import BaseArtifactUploader
from debugid_uploader.upload.cli_uploader import SentryCliUploader


def create_uploader(settings: Settings) -> BaseArtifactUploader:
    """Create the upload client for the given settings.

    Raises:
        ValueError: If no CLI executable is configured.
    """
    if not settings.sentry_cli_path:
        raise ValueError("SENTRY_CLI_PATH must not be empty")
    return SentryCliUploader(settings.cli_options(), executable=settings.sentry_cli_path)
