"""Shared entity helpers for the Device Battery integration.

Entities never poll. They read an accessor once when added and again each time
the matching trigger event is fired on the bus.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import Event, callback
from homeassistant.helpers.entity import Entity

from .device_battery import BatteryAccessors
from .hub import DeviceBatteryHub


@dataclass(frozen=True)
class BatteryRef:
    """Reference to one accessor and the trigger event that invalidates it."""

    key: str
    name: str
    icon: str | None
    event_name: str
    read_fn: Callable[[BatteryAccessors], asyncio.Future[Any]]


class DeviceBatteryEntity(Entity):
    """Base entity reading a battery accessor."""

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(
        self, hub: DeviceBatteryHub, entry: ConfigEntry, *, ref: BatteryRef
    ) -> None:
        """Initialize the entity."""
        super().__init__()
        self._hub = hub
        self._ref = ref

        self._attr_unique_id = f"{entry.entry_id}_{ref.key}"
        self._attr_name = ref.name
        self._attr_icon = ref.icon
        self._attr_device_info = hub.device_info

    def _apply_value(self, value: Any) -> None:
        """Store an accessor value on the entity."""
        raise NotImplementedError

    @callback
    def _handle_value(self, future: asyncio.Future[Any]) -> None:
        self._apply_value(future.result())
        if self.hass is not None:
            self.async_write_ha_state()

    @callback
    def _watch(self, future: asyncio.Future[Any]) -> None:
        """Write the state once a deferred value arrives, unless removed first."""
        future.add_done_callback(self._handle_value)
        self.async_on_remove(partial(future.remove_done_callback, self._handle_value))

    @callback
    def _async_read(self) -> None:
        """Read the accessor; the state is written once the value is ready."""
        future = self._ref.read_fn(self._hub.accessors)
        if future.done():
            self._handle_value(future)
        else:
            self._watch(future)

    @callback
    def _handle_trigger(self, _event: Event) -> None:
        self._async_read()

    async def async_added_to_hass(self) -> None:
        """Listen for the trigger event and seed the initial state.

        Adding the entity never waits for battery acquisition; the state stays
        unknown until the first value arrives.
        """
        self.async_on_remove(
            self.hass.bus.async_listen(self._ref.event_name, self._handle_trigger)
        )
        future = self._ref.read_fn(self._hub.accessors)
        if future.done():
            # The platform writes the state once this returns.
            self._apply_value(future.result())
        else:
            self._watch(future)
