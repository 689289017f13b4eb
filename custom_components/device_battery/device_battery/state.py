"""Memoization cell for the acquired battery handle.

This module is part of the internal API package and intentionally avoids
Home Assistant imports.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .exceptions import ResourceStateError

if TYPE_CHECKING:
    from .manager import BatteryManager


class CacheStatus(StrEnum):
    """Lifecycle of the cached battery handle."""

    EMPTY = "empty"
    ACQUIRING = "acquiring"
    READY = "ready"
    FAILED = "failed"


@dataclass(slots=True)
class ResourceState:
    """Cached acquisition outcome.

    Attributes:
        handle: Acquired battery manager; set once and never replaced.
        pending: Future shared by every caller while acquisition is in flight.
        failed: Sticky flag; once set, acquisition is never attempted again.
    """

    handle: BatteryManager | None = None
    pending: asyncio.Future[BatteryManager | None] | None = None
    failed: bool = False

    @property
    def status(self) -> CacheStatus:
        """Return the current lifecycle status."""
        if self.failed:
            return CacheStatus.FAILED
        if self.handle is not None:
            return CacheStatus.READY
        if self.pending is not None:
            return CacheStatus.ACQUIRING
        return CacheStatus.EMPTY

    def mark_acquiring(self, pending: asyncio.Future[BatteryManager | None]) -> None:
        """Record the in-flight acquisition.

        Raises:
            ResourceStateError: If the cell is not empty.
        """
        if self.status is not CacheStatus.EMPTY:
            raise ResourceStateError(f"Cannot start acquisition while {self.status}")
        self.pending = pending

    def mark_ready(self, handle: BatteryManager) -> None:
        """Store the acquired handle and clear the pending future.

        Raises:
            ResourceStateError: If no acquisition is in flight.
        """
        if self.status is not CacheStatus.ACQUIRING:
            raise ResourceStateError(f"Cannot store a handle while {self.status}")
        self.pending = None
        self.handle = handle

    def mark_failed(self) -> None:
        """Record a permanent acquisition failure.

        Raises:
            ResourceStateError: If no acquisition is in flight.
        """
        if self.status is not CacheStatus.ACQUIRING:
            raise ResourceStateError(f"Cannot record a failure while {self.status}")
        self.pending = None
        self.failed = True
