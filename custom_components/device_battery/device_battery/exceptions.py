"""Internal API exception types.

These exceptions are raised by the standalone battery package. None of them
reach accessor callers; the Home Assistant integration only sees them in logs.

This module intentionally avoids Home Assistant imports.
"""

from __future__ import annotations


class DeviceBatteryError(Exception):
    """Base exception for device battery failures."""


class DeviceBatteryNotFoundError(DeviceBatteryError):
    """The platform supports battery queries but reports no battery."""


class DeviceBatteryReadError(DeviceBatteryError):
    """The operating system failed to report battery status."""


class ResourceStateError(DeviceBatteryError):
    """A cache transition was attempted out of order.

    The cache only moves forward (empty, acquiring, then ready or failed), so
    this always indicates a programming error.
    """
