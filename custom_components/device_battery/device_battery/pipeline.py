"""Lazy, single-flight acquisition of the battery handle.

The first `request()` starts acquisition; callers arriving while it is in
flight share the same future; afterwards every request resolves immediately
from the cache. Failure is permanent for the lifetime of the pipeline.

This module is part of the internal API package and intentionally avoids
Home Assistant imports.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine

from .bridge import EventBridge
from .manager import BatteryManager
from .state import CacheStatus, ResourceState

_LOGGER = logging.getLogger(__name__)

Acquire = Callable[[], Awaitable[BatteryManager]]
TaskFactory = Callable[[Coroutine[Any, Any, None]], Any]


class AcquisitionPipeline:
    """Obtain the battery handle once and memoize the outcome."""

    def __init__(
        self,
        *,
        acquire: Acquire,
        bridge: EventBridge,
        supported: Callable[[], bool],
        logger: logging.Logger | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        create_task: TaskFactory | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            acquire: Coroutine function returning the handle or raising.
            bridge: Event bridge wired once on successful acquisition.
            supported: Capability probe; False short-circuits to `None`.
            logger: Sink for the acquisition failure message.
            loop: Event loop owning the futures; defaults to the running loop.
            create_task: Schedules the acquisition coroutine; defaults to
                `loop.create_task`.
        """
        self._acquire = acquire
        self._bridge = bridge
        self._supported = supported
        self._logger = logger or _LOGGER
        self._loop = loop
        self._create_task = create_task
        self._state = ResourceState()
        self._task: Any = None

    @property
    def status(self) -> CacheStatus:
        return self._state.status

    @property
    def battery(self) -> BatteryManager | None:
        """Return the cached handle, if acquired."""
        return self._state.handle

    @property
    def supported(self) -> bool:
        return bool(self._supported())

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def _settled(
        self, battery: BatteryManager | None
    ) -> asyncio.Future[BatteryManager | None]:
        future: asyncio.Future[BatteryManager | None] = self._get_loop().create_future()
        future.set_result(battery)
        return future

    def request(self) -> asyncio.Future[BatteryManager | None]:
        """Return a future for the battery handle, or `None` when unavailable.

        The future is already settled when the outcome is cached. It never
        carries an exception.
        """
        state = self._state
        if not self._supported() or state.failed:
            return self._settled(None)
        if state.handle is not None:
            return self._settled(state.handle)
        if state.pending is not None:
            return state.pending

        # Record the waiter before scheduling so an eagerly started task
        # always finds the cell in the acquiring state.
        waiter: asyncio.Future[BatteryManager | None] = self._get_loop().create_future()
        state.mark_acquiring(waiter)
        coro = self._async_acquire(waiter)
        if self._create_task is not None:
            self._task = self._create_task(coro)
        else:
            self._task = self._get_loop().create_task(coro)
        return waiter

    async def _async_acquire(
        self, waiter: asyncio.Future[BatteryManager | None]
    ) -> None:
        try:
            battery = await self._acquire()
        except Exception as err:  # noqa: BLE001
            self._state.mark_failed()
            self._logger.warning("Could not get battery: %s", err)
            waiter.set_result(None)
            return

        self._state.mark_ready(battery)
        self._bridge.wire(battery)
        waiter.set_result(battery)
