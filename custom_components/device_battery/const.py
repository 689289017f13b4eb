"""Constants for the Device Battery integration.

This module centralizes configuration keys, defaults, and platform registration.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Final

from homeassistant.const import Platform

DOMAIN: Final = "device_battery"

# Use a stable logger name so users can configure logging via
# `logger: default: ... logs: { custom_components.device_battery: debug }`.
LOGGER_NAME: Final = f"custom_components.{DOMAIN}"

CONF_SCAN_INTERVAL: Final = "scan_interval"

DEFAULT_TITLE: Final = "Device Battery"
DEFAULT_SCAN_INTERVAL: Final = timedelta(seconds=60)
MIN_SCAN_INTERVAL_SECONDS: Final[int] = 5
MAX_SCAN_INTERVAL_SECONDS: Final[int] = 3600

PLATFORMS: Final[list[Platform]] = [
    Platform.BINARY_SENSOR,
    Platform.SENSOR,
]
