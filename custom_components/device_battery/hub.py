"""Hub wiring the battery package into Home Assistant.

The hub owns one acquisition pipeline per config entry. Trigger events are
fired on the Home Assistant event bus so automations can listen for them, and
the psutil reading is refreshed on a timer to produce change notifications.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Any, Callable, Coroutine

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.event import async_track_time_interval

from .const import CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL, DOMAIN, LOGGER_NAME
from .device_battery import (
    AcquisitionPipeline,
    BatteryAccessors,
    BatteryManager,
    CacheStatus,
    EventBridge,
    async_get_battery,
    psutil_battery_supported,
)

_LOGGER = logging.getLogger(LOGGER_NAME)


class HassTriggerSink:
    """Fire trigger events on the Home Assistant event bus."""

    def __init__(self, hass: HomeAssistant) -> None:
        self._hass = hass

    @callback
    def fire(self, event_name: str) -> None:
        self._hass.bus.async_fire(event_name)


class DeviceBatteryHub:
    """Manage the battery pipeline for a config entry."""

    def __init__(
        self,
        hass: HomeAssistant,
        entry: ConfigEntry,
        *,
        supported: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the hub.

        Args:
            hass: Home Assistant instance.
            entry: Config entry.
            supported: Capability probe; defaults to the psutil probe.
        """
        self._hass = hass
        self._entry = entry
        self._bridge = EventBridge(HassTriggerSink(hass))
        self.pipeline = AcquisitionPipeline(
            acquire=self._async_acquire,
            bridge=self._bridge,
            supported=supported or psutil_battery_supported,
            logger=_LOGGER,
            loop=hass.loop,
            create_task=self._create_task,
        )
        self.accessors = BatteryAccessors(self.pipeline)
        self._unsub_refresh: Callable[[], None] | None = None

    @property
    def scan_interval(self) -> timedelta:
        seconds: Any = self._entry.options.get(CONF_SCAN_INTERVAL)
        if isinstance(seconds, int) and seconds > 0:
            return timedelta(seconds=seconds)
        return DEFAULT_SCAN_INTERVAL

    @property
    def device_info(self) -> DeviceInfo:
        """Return DeviceInfo for the host's battery."""
        return DeviceInfo(
            identifiers={(DOMAIN, self._entry.entry_id)},
            name=self._entry.title or "Device Battery",
            model="Battery",
        )

    async def _async_acquire(self) -> BatteryManager:
        return await async_get_battery(
            self._hass.async_add_executor_job, logger=_LOGGER
        )

    def _create_task(self, coro: Coroutine[Any, Any, None]) -> Any:
        return self._hass.async_create_task(coro, f"{DOMAIN} battery acquisition")

    @callback
    def async_start(self) -> None:
        """Request the battery right away and start periodic refresh.

        The warm-up request makes sure trigger events are wired before any
        automation could need them.
        """
        self.pipeline.request()
        self._unsub_refresh = async_track_time_interval(
            self._hass,
            self._async_refresh,
            self.scan_interval,
            name=f"{DOMAIN} battery refresh",
        )

    @callback
    def async_stop(self) -> None:
        """Stop refreshing and detach trigger events."""
        if self._unsub_refresh is not None:
            self._unsub_refresh()
            self._unsub_refresh = None
        self._bridge.detach()

    async def _async_refresh(self, _now: datetime | None = None) -> None:
        """Re-read the battery; changed fields fire their trigger events."""
        battery = await self.pipeline.request()
        if battery is None:
            if self._unsub_refresh is not None and (
                self.pipeline.status is CacheStatus.FAILED
                or not self.pipeline.supported
            ):
                _LOGGER.debug("No battery available; stopping refresh")
                self._unsub_refresh()
                self._unsub_refresh = None
            return
        await battery.async_update()

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly summary for diagnostics."""
        battery = self.pipeline.battery
        reading: dict[str, Any] | None = None
        if battery is not None:
            reading = {
                "charging": battery.charging,
                "level": battery.level,
                "charging_time": finite_or_none(battery.charging_time),
                "discharging_time": finite_or_none(battery.discharging_time),
            }
        return {
            "status": str(self.pipeline.status),
            "supported": self.pipeline.supported,
            "scan_interval_seconds": self.scan_interval.total_seconds(),
            "battery": reading,
        }


def finite_or_none(value: float) -> float | None:
    """Return `value`, or None for infinite or NaN estimates."""
    return value if math.isfinite(value) else None
