"""Battery readers with fallbacks.

Each reader asks the pipeline for the handle and applies a pure extraction.
Without a battery the readers report "no constraint": always charging, full,
instantly charged, never empty.

This module is part of the internal API package and intentionally avoids
Home Assistant imports.
"""

from __future__ import annotations

import asyncio
import math
from typing import Callable, Final, TypeVar

from .manager import BatteryManager
from .pipeline import AcquisitionPipeline

_T = TypeVar("_T")

FALLBACK_CHARGING: Final = True
FALLBACK_LEVEL: Final = 100.0
FALLBACK_CHARGE_TIME: Final = 0.0
FALLBACK_DISCHARGE_TIME: Final = math.inf


# -----------------------------------------------------------------------------
# Extraction
# -----------------------------------------------------------------------------


def charging_state(battery: BatteryManager | None) -> bool:
    if battery is None:
        return FALLBACK_CHARGING
    return battery.charging


def level_percent(battery: BatteryManager | None) -> float:
    if battery is None:
        return FALLBACK_LEVEL
    return battery.level * 100


def seconds_to_full(battery: BatteryManager | None) -> float:
    if battery is None:
        return FALLBACK_CHARGE_TIME
    return battery.charging_time


def seconds_to_empty(battery: BatteryManager | None) -> float:
    if battery is None:
        return FALLBACK_DISCHARGE_TIME
    return battery.discharging_time


def then(
    source: asyncio.Future[BatteryManager | None],
    extract: Callable[[BatteryManager | None], _T],
) -> asyncio.Future[_T]:
    """Map a handle future through `extract`.

    The returned future is settled immediately when `source` is.
    """
    result: asyncio.Future[_T] = source.get_loop().create_future()
    if source.done():
        result.set_result(extract(source.result()))
        return result

    def _resolve(done: asyncio.Future[BatteryManager | None]) -> None:
        if not result.done():
            result.set_result(extract(done.result()))

    source.add_done_callback(_resolve)
    return result


# -----------------------------------------------------------------------------
# Accessors
# -----------------------------------------------------------------------------


class BatteryAccessors:
    """The four readers exposed to the host."""

    def __init__(self, pipeline: AcquisitionPipeline) -> None:
        self._pipeline = pipeline

    def charging(self) -> asyncio.Future[bool]:
        return then(self._pipeline.request(), charging_state)

    def level(self) -> asyncio.Future[float]:
        return then(self._pipeline.request(), level_percent)

    def charge_time(self) -> asyncio.Future[float]:
        return then(self._pipeline.request(), seconds_to_full)

    def discharge_time(self) -> asyncio.Future[float]:
        return then(self._pipeline.request(), seconds_to_empty)
