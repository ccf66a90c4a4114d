# src/batch/models.py — v2
"""Batch upload models: BatchResult."""

from __future__ import annotations

from pydantic import BaseModel, Field

from debugid_uploader.core.models import PreparedBundle


class BatchResult(BaseModel):
    """Summary result of one debug-ID upload run."""

    batch_id: str
    release: str
    dist: str | None = None
    total_candidates: int = 0
    staged_bundles: int = 0
    staged_source_maps: int = 0
    skipped: int = 0
    uploaded: bool = False
    failed: bool = False
    deleted_files: list[str] = Field(default_factory=list)
    entries: list[PreparedBundle] = Field(default_factory=list)
    duration_seconds: float = 0.0
