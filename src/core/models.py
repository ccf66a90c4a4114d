# src/core/models.py — v1
"""Core data models shared across the preparation pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEBUG_ID_LENGTH = 36

SourceMapStatus = Literal[
    "staged", "not_found", "read_error", "parse_error", "rewrite_error",
    "write_error", "skipped",
]
BundleStatus = Literal["staged", "no_debug_id", "read_error", "write_error"]


class BundleRecord(BaseModel):
    """In-memory view of one candidate bundle during preparation."""

    source_path: Path
    code: str
    debug_id: str | None = Field(
        default=None, min_length=DEBUG_ID_LENGTH, max_length=DEBUG_ID_LENGTH,
    )
    chunk_index: int = Field(ge=0)

    @property
    def upload_name(self) -> str:
        """Basename shared by the staged bundle and its source map."""
        if self.debug_id is None:
            msg = f"Bundle {self.source_path} has no debug ID"
            raise ValueError(msg)
        return staged_basename(self.debug_id, self.chunk_index)


class PreparedBundle(BaseModel):
    """Outcome of preparing a single bundle for upload."""

    source_path: Path
    chunk_index: int
    status: BundleStatus
    debug_id: str | None = None
    staged_bundle_path: Path | None = None
    source_map_path: Path | None = None
    staged_source_map_path: Path | None = None
    source_map_status: SourceMapStatus = "skipped"

    @property
    def bundle_staged(self) -> bool:
        return self.status == "staged"

    @property
    def source_map_staged(self) -> bool:
        return self.source_map_status == "staged"


def staged_basename(debug_id: str, chunk_index: int) -> str:
    """Return `<debug_id>-<chunk_index>`, the collision-free staging name."""
    return f"{debug_id}-{chunk_index}"
