# src/storage/local_writer.py — v3
"""Local filesystem writer (default backend).

Blocking filesystem calls run in worker threads so that many preparation
units can be in flight on one event loop.
"""

from __future__ import annotations

import asyncio
import os
import shutil
from pathlib import Path

from debugid_uploader.storage.base_output_writer import BaseOutputWriter


class LocalWriter(BaseOutputWriter):
    """Read and write files on the local filesystem."""

    def __init__(self, base_path: str | Path | None = None) -> None:
        """Initialize with optional base path.

        Args:
            base_path: Root directory for relative paths. If None, relative
                paths resolve against the current working directory.
        """
        self._base = Path(base_path) if base_path else None

    def _resolve(self, path: Path | str) -> Path:
        p = Path(path)
        if self._base is not None and not p.is_absolute():
            return self._base / p
        return p

    async def read_text(self, path: Path) -> str:
        return await asyncio.to_thread(self._resolve(path).read_text, encoding="utf-8")

    async def write_text(self, path: Path, content: str) -> None:
        await asyncio.to_thread(self._resolve(path).write_text, content, encoding="utf-8")

    async def exists(self, path: Path) -> bool:
        # Mirrors an access(F_OK) probe rather than is_file().
        return await asyncio.to_thread(os.access, self._resolve(path), os.F_OK)

    async def remove(self, path: Path) -> None:
        await asyncio.to_thread(self._resolve(path).unlink, missing_ok=True)

    async def remove_tree(self, path: Path) -> None:
        p = self._resolve(path)
        await asyncio.to_thread(shutil.rmtree, p, ignore_errors=True)
