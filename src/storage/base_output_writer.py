# src/storage/base_output_writer.py — v2
"""Abstract file access interface used by the preparation pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class BaseOutputWriter(ABC):
    """Unified async interface for reading bundles and writing staged output."""

    @abstractmethod
    async def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file."""

    @abstractmethod
    async def write_text(self, path: Path, content: str) -> None:
        """Write a UTF-8 text file."""

    @abstractmethod
    async def exists(self, path: Path) -> bool:
        """Check if path is accessible."""

    @abstractmethod
    async def remove(self, path: Path) -> None:
        """Remove a file. Missing files are not an error."""

    @abstractmethod
    async def remove_tree(self, path: Path) -> None:
        """Remove a directory and everything under it. Missing is not an error."""
