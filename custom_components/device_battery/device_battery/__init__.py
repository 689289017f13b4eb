"""Internal device battery package.

This package holds the battery behavior so Home Assistant platform files can
stay small and focused.

The package provides:
    - A psutil-backed battery handle with change notifications
    - Lazy, single-flight acquisition with a memoized outcome
    - Bridging of native change notifications to named triggers
    - Readers with fallbacks for when no battery is available
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
from .accessors import (
    FALLBACK_CHARGE_TIME,
    FALLBACK_CHARGING,
    FALLBACK_DISCHARGE_TIME,
    FALLBACK_LEVEL,
    BatteryAccessors,
    charging_state,
    level_percent,
    seconds_to_empty,
    seconds_to_full,
)
from .bridge import (
    CHANNEL_TRIGGERS,
    EVENT_CHARGE_TIME_CHANGED,
    EVENT_CHARGING_CHANGED,
    EVENT_DISCHARGE_TIME_CHANGED,
    EVENT_LEVEL_CHANGED,
    EventBridge,
    TriggerSink,
)
from .exceptions import (
    DeviceBatteryError,
    DeviceBatteryNotFoundError,
    DeviceBatteryReadError,
    ResourceStateError,
)
from .manager import (
    BatteryChannel,
    BatteryManager,
    BatterySample,
    PsutilBatteryManager,
    async_get_battery,
    psutil_battery_supported,
)
from .pipeline import AcquisitionPipeline
from .state import CacheStatus, ResourceState

__all__ = [
    "AcquisitionPipeline",
    "BatteryAccessors",
    "BatteryChannel",
    "BatteryManager",
    "BatterySample",
    "CHANNEL_TRIGGERS",
    "CacheStatus",
    "DeviceBatteryError",
    "DeviceBatteryNotFoundError",
    "DeviceBatteryReadError",
    "EVENT_CHARGE_TIME_CHANGED",
    "EVENT_CHARGING_CHANGED",
    "EVENT_DISCHARGE_TIME_CHANGED",
    "EVENT_LEVEL_CHANGED",
    "EventBridge",
    "FALLBACK_CHARGE_TIME",
    "FALLBACK_CHARGING",
    "FALLBACK_DISCHARGE_TIME",
    "FALLBACK_LEVEL",
    "PsutilBatteryManager",
    "ResourceState",
    "ResourceStateError",
    "TriggerSink",
    "async_get_battery",
    "charging_state",
    "level_percent",
    "psutil_battery_supported",
    "seconds_to_empty",
    "seconds_to_full",
]
