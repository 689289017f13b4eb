"""Tests for Device Battery binary_sensor platform."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, cast

from homeassistant.components.binary_sensor import BinarySensorDeviceClass
from homeassistant.helpers.device_registry import DeviceInfo
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.device_battery.binary_sensor import (
    CHARGING_REF,
    DeviceBatteryChargingBinarySensor,
)
from custom_components.device_battery.const import DOMAIN


async def test_charging_binary_sensor_follows_accessor():
    loop = asyncio.get_running_loop()
    futures: list[asyncio.Future[Any]] = []

    def _charging() -> asyncio.Future[Any]:
        future = loop.create_future()
        futures.append(future)
        return future

    hub = SimpleNamespace(
        accessors=SimpleNamespace(charging=_charging),
        device_info=DeviceInfo(identifiers={(DOMAIN, "TEST")}),
    )
    entry = MockConfigEntry(domain=DOMAIN, data={})

    sensor = DeviceBatteryChargingBinarySensor(
        cast(Any, hub), cast(Any, entry), ref=CHARGING_REF
    )
    assert sensor.device_class == BinarySensorDeviceClass.BATTERY_CHARGING
    assert sensor.unique_id == f"{entry.entry_id}_charging"
    assert CHARGING_REF.event_name == "device_battery_charging_changed"

    sensor._async_read()
    futures[0].set_result(False)
    await asyncio.sleep(0)
    assert sensor.is_on is False

    # A bus event re-reads the accessor.
    sensor._handle_trigger(cast(Any, None))
    futures[1].set_result(True)
    await asyncio.sleep(0)
    assert sensor.is_on is True
