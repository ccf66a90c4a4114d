# src/core/errors.py — v1
"""Typed errors raised while preparing bundles for upload.

Per-file errors never escape a preparation unit: the preparer catches them,
logs them and moves on. Batch-level failures are handled by the orchestrator.
"""

from __future__ import annotations

from pathlib import Path


class DebugIdUploadError(Exception):
    """Base class for all errors raised by this package."""


class _PathError(DebugIdUploadError):
    """Error tied to a single file on disk."""

    action = "Failed to process"

    def __init__(self, path: Path | str, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        msg = f"{self.action} {self.path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class BundleReadError(_PathError):
    """Bundle file could not be read."""

    action = "Could not read bundle"


class SourceMapError(_PathError):
    """Base class for source-map preparation failures."""


class SourceMapReadError(SourceMapError):
    """Source map file could not be read."""

    action = "Failed to read source map"


class SourceMapParseError(SourceMapError):
    """Source map content is not a JSON object."""

    action = "Failed to parse source map"


class SourceMapRewriteError(SourceMapError):
    """Rewrite hook raised while processing `sources`."""

    action = "Failed to rewrite sources in source map"


class SourceMapWriteError(SourceMapError):
    """Transformed source map could not be written to the staging directory."""

    action = "Failed to write source map"


class UploadError(DebugIdUploadError):
    """External upload client reported a failure."""
