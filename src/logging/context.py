# src/logging/context.py — v2
"""Contextual logging support — attach batch_id, bundle, chunk_index to records.

Each preparation unit runs in its own asyncio task, and tasks copy the
context at creation, so concurrent units never see each other's values.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_batch_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "batch_id", default=None
)
_bundle: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "bundle", default=None
)
_chunk_index: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "chunk_index", default=None
)
_debug_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "debug_id", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    batch_id: str | None = None
    bundle: str | None = None
    chunk_index: int | None = None
    debug_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        batch_id=_batch_id.get(),
        bundle=_bundle.get(),
        chunk_index=_chunk_index.get(),
        debug_id=_debug_id.get(),
    )


def set_batch_context(batch_id: str) -> None:
    """Set batch-level context (called once per upload run)."""
    _batch_id.set(batch_id)


def set_bundle_context(bundle: str, chunk_index: int) -> None:
    """Set bundle-level context (called at the start of each unit)."""
    _bundle.set(bundle)
    _chunk_index.set(chunk_index)
    _debug_id.set(None)


def set_debug_id_context(debug_id: str | None) -> None:
    """Record the debug ID once it has been extracted."""
    _debug_id.set(debug_id)


def clear_context() -> None:
    """Reset all context variables."""
    _batch_id.set(None)
    _bundle.set(None)
    _chunk_index.set(None)
    _debug_id.set(None)
