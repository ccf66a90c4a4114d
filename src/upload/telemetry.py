# src/upload/telemetry.py — v2
"""Error telemetry sinks used on the batch failure path."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class TelemetrySink(ABC):
    """Reports batch-level failures to an error tracking backend."""

    @abstractmethod
    def capture_exception(self, message: str) -> None:
        """Record a failure message."""

    @abstractmethod
    async def flush(self) -> None:
        """Deliver everything captured so far."""


class NullTelemetrySink(TelemetrySink):
    """Discards everything."""

    def capture_exception(self, message: str) -> None:
        pass

    async def flush(self) -> None:
        pass


class LoggingTelemetrySink(TelemetrySink):
    """Logs captured messages; flush only drops the pending queue."""

    def __init__(self) -> None:
        self.pending: list[str] = []

    def capture_exception(self, message: str) -> None:
        logger.error("Telemetry: %s", message)
        self.pending.append(message)

    async def flush(self) -> None:
        if self.pending:
            logger.debug("Telemetry: flushed %d captured message(s)", len(self.pending))
        self.pending.clear()
