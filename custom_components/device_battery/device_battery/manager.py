"""Native battery source backed by psutil.

The handle type mirrors the Battery Status API: four readings plus four
change channels. psutil only offers a point-in-time reading, so the manager
re-reads on `async_update()` and raises a change notification for every field
that moved.

This module is part of the internal API package and intentionally avoids
Home Assistant imports.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Awaitable, Callable, Protocol

import psutil

from .exceptions import DeviceBatteryNotFoundError, DeviceBatteryReadError

_LOGGER = logging.getLogger(__name__)

Executor = Callable[..., Awaitable[Any]]
Listener = Callable[[], None]


class BatteryChannel(StrEnum):
    """Native change-notification channels, in notification order."""

    CHARGING = "chargingchange"
    LEVEL = "levelchange"
    CHARGING_TIME = "chargingtimechange"
    DISCHARGING_TIME = "dischargingtimechange"


class BatteryManager(Protocol):
    """Handle to the device battery."""

    @property
    def charging(self) -> bool: ...

    @property
    def level(self) -> float: ...

    @property
    def charging_time(self) -> float: ...

    @property
    def discharging_time(self) -> float: ...

    def add_listener(
        self, channel: BatteryChannel, listener: Listener
    ) -> Callable[[], None]: ...

    async def async_update(self) -> None: ...


# -----------------------------------------------------------------------------
# Readings
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class BatterySample:
    """One battery reading.

    Attributes:
        charging: True while charging, when full on external power, or when
            the platform cannot tell.
        level: Charge level as a fraction in `[0, 1]`.
        charging_time: Seconds until full; `0` when full, `inf` when unknown.
        discharging_time: Seconds until empty; `inf` when charging or unknown.
    """

    charging: bool
    level: float
    charging_time: float
    discharging_time: float

    @classmethod
    def from_psutil(cls, raw: Any) -> BatterySample:
        """Build a sample from a `psutil.sensors_battery()` result.

        Args:
            raw: psutil `sbattery` tuple (percent, secsleft, power_plugged).

        Returns:
            Normalized sample.
        """
        percent: Any = getattr(raw, "percent", None)
        if isinstance(percent, (int, float)) and not isinstance(percent, bool):
            level = min(max(float(percent) / 100.0, 0.0), 1.0)
        else:
            level = 1.0

        # psutil reports None when it cannot tell whether AC is connected.
        charging = getattr(raw, "power_plugged", None) is not False

        charging_time = 0.0 if charging and level >= 1.0 else math.inf

        # Negative values are POWER_TIME_UNKNOWN / POWER_TIME_UNLIMITED.
        secsleft: Any = getattr(raw, "secsleft", None)
        discharging_time = math.inf
        if (
            not charging
            and isinstance(secsleft, (int, float))
            and not isinstance(secsleft, bool)
            and secsleft >= 0
        ):
            discharging_time = float(secsleft)

        return cls(
            charging=charging,
            level=level,
            charging_time=charging_time,
            discharging_time=discharging_time,
        )

    def changed_channels(self, other: BatterySample) -> list[BatteryChannel]:
        """Return the channels whose field differs from `other`."""
        changed: list[BatteryChannel] = []
        if self.charging != other.charging:
            changed.append(BatteryChannel.CHARGING)
        if self.level != other.level:
            changed.append(BatteryChannel.LEVEL)
        if self.charging_time != other.charging_time:
            changed.append(BatteryChannel.CHARGING_TIME)
        if self.discharging_time != other.discharging_time:
            changed.append(BatteryChannel.DISCHARGING_TIME)
        return changed


# -----------------------------------------------------------------------------
# Manager
# -----------------------------------------------------------------------------


async def _async_run_in_executor(func: Callable[..., Any], *args: Any) -> Any:
    return await asyncio.get_running_loop().run_in_executor(None, func, *args)


class PsutilBatteryManager:
    """Battery handle refreshed from psutil."""

    def __init__(
        self,
        sample: BatterySample,
        *,
        executor: Executor | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._sample = sample
        self._executor: Executor = executor or _async_run_in_executor
        self._logger = logger or _LOGGER
        self._listeners: dict[BatteryChannel, list[Listener]] = {
            channel: [] for channel in BatteryChannel
        }

    @property
    def sample(self) -> BatterySample:
        return self._sample

    @property
    def charging(self) -> bool:
        return self._sample.charging

    @property
    def level(self) -> float:
        return self._sample.level

    @property
    def charging_time(self) -> float:
        return self._sample.charging_time

    @property
    def discharging_time(self) -> float:
        return self._sample.discharging_time

    def add_listener(
        self, channel: BatteryChannel, listener: Listener
    ) -> Callable[[], None]:
        """Register a listener for one change channel.

        Returns:
            Callable that removes the listener.
        """
        listeners = self._listeners[BatteryChannel(channel)]
        listeners.append(listener)

        def _remove() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return _remove

    def apply(self, sample: BatterySample) -> list[BatteryChannel]:
        """Replace the current reading and notify listeners of changed fields.

        Args:
            sample: New reading.

        Returns:
            Channels that were notified.
        """
        changed = sample.changed_channels(self._sample)
        self._sample = sample
        for channel in changed:
            for listener in list(self._listeners[channel]):
                listener()
        return changed

    async def async_update(self) -> None:
        """Re-read psutil and notify listeners of any change.

        A failed read keeps the previous sample.
        """
        try:
            raw = await self._executor(psutil.sensors_battery)
        except (OSError, psutil.Error) as err:
            self._logger.debug("Battery refresh failed: %s", err)
            return
        if raw is None:
            self._logger.debug("Battery no longer reported; keeping last reading")
            return
        self.apply(BatterySample.from_psutil(raw))


# -----------------------------------------------------------------------------
# Platform
# -----------------------------------------------------------------------------


def psutil_battery_supported() -> bool:
    """Return True when psutil can query batteries on this platform."""
    return callable(getattr(psutil, "sensors_battery", None))


async def async_get_battery(
    executor: Executor | None = None,
    *,
    logger: logging.Logger | None = None,
) -> PsutilBatteryManager:
    """Acquire the battery handle.

    Args:
        executor: Coroutine function running blocking calls off the loop, such
            as `hass.async_add_executor_job`. Defaults to the loop's executor.
        logger: Logger used by the returned manager.

    Returns:
        Manager seeded with the current reading.

    Raises:
        DeviceBatteryNotFoundError: psutil reports no battery.
        DeviceBatteryReadError: The operating system query failed.
    """
    run: Executor = executor or _async_run_in_executor
    try:
        raw = await run(psutil.sensors_battery)
    except (OSError, psutil.Error) as err:
        raise DeviceBatteryReadError(f"Could not read battery status: {err}") from err
    if raw is None:
        raise DeviceBatteryNotFoundError("No battery reported by the operating system")
    return PsutilBatteryManager(
        BatterySample.from_psutil(raw), executor=run, logger=logger
    )
