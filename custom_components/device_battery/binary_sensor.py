"""Binary sensors for Device Battery.

This platform exposes whether the device is charging.
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .device_battery import EVENT_CHARGING_CHANGED
from .entity import BatteryRef, DeviceBatteryEntity
from .hub import DeviceBatteryHub

CHARGING_REF = BatteryRef(
    key="charging",
    name="Charging",
    icon=None,
    event_name=EVENT_CHARGING_CHANGED,
    read_fn=lambda accessors: accessors.charging(),
)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up Device Battery binary sensors from a config entry."""
    hub: DeviceBatteryHub = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([DeviceBatteryChargingBinarySensor(hub, entry, ref=CHARGING_REF)])


class DeviceBatteryChargingBinarySensor(DeviceBatteryEntity, BinarySensorEntity):
    """On while charging, and when no battery data is available."""

    _attr_device_class = BinarySensorDeviceClass.BATTERY_CHARGING

    def _apply_value(self, value: Any) -> None:
        self._attr_is_on = bool(value)
