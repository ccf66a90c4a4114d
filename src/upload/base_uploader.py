# src/upload/base_uploader.py — v1
"""Abstract artifact uploader interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from debugid_uploader.upload.models import UploadInclude


class BaseArtifactUploader(ABC):
    """Uploads a staged directory of bundles and source maps.

    Implementations own transport, authentication and retries.
    """

    @abstractmethod
    async def upload_source_maps(
        self,
        release: str,
        include: list[UploadInclude],
        use_artifact_bundle: bool = True,
    ) -> None:
        """Upload every include entry, tagged with the release."""
