"""Forward native battery notifications to named triggers.

This module is part of the internal API package and intentionally avoids
Home Assistant imports.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Final, Protocol

from .exceptions import ResourceStateError
from .manager import BatteryChannel, BatteryManager

EVENT_CHARGING_CHANGED: Final = "device_battery_charging_changed"
EVENT_LEVEL_CHANGED: Final = "device_battery_level_changed"
EVENT_CHARGE_TIME_CHANGED: Final = "device_battery_charge_time_changed"
EVENT_DISCHARGE_TIME_CHANGED: Final = "device_battery_discharge_time_changed"

CHANNEL_TRIGGERS: Final[dict[BatteryChannel, str]] = {
    BatteryChannel.CHARGING: EVENT_CHARGING_CHANGED,
    BatteryChannel.LEVEL: EVENT_LEVEL_CHANGED,
    BatteryChannel.CHARGING_TIME: EVENT_CHARGE_TIME_CHANGED,
    BatteryChannel.DISCHARGING_TIME: EVENT_DISCHARGE_TIME_CHANGED,
}


class TriggerSink(Protocol):
    """Host event-dispatch system."""

    def fire(self, event_name: str) -> None:
        """Re-evaluate handlers listening for `event_name`."""
        ...


class EventBridge:
    """Subscribe once to a battery's channels and fire the matching triggers."""

    def __init__(self, sink: TriggerSink) -> None:
        self._sink = sink
        self._unsubscribers: list[Callable[[], None]] = []
        self._wired = False
        self._closed = False

    @property
    def wired(self) -> bool:
        return self._wired

    def wire(self, battery: BatteryManager) -> None:
        """Subscribe to all four channels of `battery`.

        A detached bridge stays closed and ignores the call.

        Raises:
            ResourceStateError: If the bridge was already wired.
        """
        if self._closed:
            return
        if self._wired:
            raise ResourceStateError("Event bridge is already wired")
        self._wired = True
        for channel, event_name in CHANNEL_TRIGGERS.items():
            self._unsubscribers.append(
                battery.add_listener(channel, partial(self._sink.fire, event_name))
            )

    def detach(self) -> None:
        """Remove the native subscriptions. Triggers stop firing afterwards."""
        self._closed = True
        while self._unsubscribers:
            self._unsubscribers.pop()()
