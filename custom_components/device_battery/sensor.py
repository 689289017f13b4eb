"""Sensors for Device Battery.

This platform exposes:
- Battery level.
- Estimated time until charged and until empty.

Entities are trigger-driven and do not poll independently.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE, UnitOfTime
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .device_battery import (
    EVENT_CHARGE_TIME_CHANGED,
    EVENT_DISCHARGE_TIME_CHANGED,
    EVENT_LEVEL_CHANGED,
)
from .entity import BatteryRef, DeviceBatteryEntity
from .hub import DeviceBatteryHub, finite_or_none


@dataclass(frozen=True)
class _SensorRef(BatteryRef):
    native_unit: str | None = None
    device_class: SensorDeviceClass | None = None
    state_class: SensorStateClass | None = None
    display_precision: int | None = None


SENSOR_REFS: tuple[_SensorRef, ...] = (
    _SensorRef(
        key="level",
        name="Battery level",
        icon=None,
        event_name=EVENT_LEVEL_CHANGED,
        read_fn=lambda accessors: accessors.level(),
        native_unit=PERCENTAGE,
        device_class=SensorDeviceClass.BATTERY,
        state_class=SensorStateClass.MEASUREMENT,
        display_precision=0,
    ),
    _SensorRef(
        key="charge_time",
        name="Time until charged",
        icon="mdi:battery-clock",
        event_name=EVENT_CHARGE_TIME_CHANGED,
        read_fn=lambda accessors: accessors.charge_time(),
        native_unit=UnitOfTime.SECONDS,
        device_class=SensorDeviceClass.DURATION,
    ),
    _SensorRef(
        key="discharge_time",
        name="Time until empty",
        icon="mdi:battery-clock-outline",
        event_name=EVENT_DISCHARGE_TIME_CHANGED,
        read_fn=lambda accessors: accessors.discharge_time(),
        native_unit=UnitOfTime.SECONDS,
        device_class=SensorDeviceClass.DURATION,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up Device Battery sensors from a config entry."""
    hub: DeviceBatteryHub = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [DeviceBatterySensor(hub, entry, ref=ref) for ref in SENSOR_REFS]
    )


class DeviceBatterySensor(DeviceBatteryEntity, SensorEntity):
    """Numeric battery reading."""

    def __init__(
        self, hub: DeviceBatteryHub, entry: ConfigEntry, *, ref: _SensorRef
    ) -> None:
        super().__init__(hub, entry, ref=ref)
        self._attr_native_unit_of_measurement = ref.native_unit
        self._attr_device_class = ref.device_class
        self._attr_state_class = ref.state_class
        self._attr_suggested_display_precision = ref.display_precision

    def _apply_value(self, value: Any) -> None:
        # An infinite estimate means "not applicable"; report it as unknown.
        self._attr_native_value = finite_or_none(float(value))
