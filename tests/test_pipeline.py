"""Tests for lazy single-flight battery acquisition."""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from custom_components.device_battery.device_battery import (
    AcquisitionPipeline,
    BatteryChannel,
    CacheStatus,
    EventBridge,
    ResourceState,
    ResourceStateError,
)

_LOGGER_NAME = "tests.device_battery.pipeline"


class _FakeBattery:
    def __init__(
        self,
        *,
        charging: bool = False,
        level: float = 0.42,
        charging_time: float = 1800.0,
        discharging_time: float = math.inf,
    ) -> None:
        self.charging = charging
        self.level = level
        self.charging_time = charging_time
        self.discharging_time = discharging_time
        self.listeners: dict[BatteryChannel, list[Callable[[], None]]] = {
            channel: [] for channel in BatteryChannel
        }

    def add_listener(
        self, channel: BatteryChannel, listener: Callable[[], None]
    ) -> Callable[[], None]:
        self.listeners[channel].append(listener)
        return lambda: self.listeners[channel].remove(listener)

    def emit(self, channel: BatteryChannel) -> None:
        for listener in list(self.listeners[channel]):
            listener()

    async def async_update(self) -> None:
        return None


@dataclass
class _RecordingSink:
    fired: list[str] = field(default_factory=list)

    def fire(self, event_name: str) -> None:
        self.fired.append(event_name)


class _Acquirer:
    """Acquisition coroutine gated by an event so tests control completion."""

    def __init__(
        self, battery: Any = None, *, error: Exception | None = None
    ) -> None:
        self.battery = battery
        self.error = error
        self.calls = 0
        self.gate = asyncio.Event()

    async def __call__(self) -> Any:
        self.calls += 1
        await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.battery


def _pipeline(
    acquire: Any,
    *,
    sink: _RecordingSink | None = None,
    supported: bool = True,
) -> tuple[AcquisitionPipeline, EventBridge]:
    bridge = EventBridge(sink or _RecordingSink())
    pipeline = AcquisitionPipeline(
        acquire=acquire,
        bridge=bridge,
        supported=lambda: supported,
        logger=logging.getLogger(_LOGGER_NAME),
    )
    return pipeline, bridge


async def test_concurrent_requests_share_one_acquisition() -> None:
    battery = _FakeBattery()
    acquire = _Acquirer(battery)
    pipeline, _ = _pipeline(acquire)

    futures = [pipeline.request() for _ in range(5)]
    assert all(f is futures[0] for f in futures)
    assert not futures[0].done()
    assert pipeline.status is CacheStatus.ACQUIRING

    acquire.gate.set()
    results = await asyncio.gather(*futures)

    assert acquire.calls == 1
    assert all(r is battery for r in results)
    assert pipeline.status is CacheStatus.READY
    assert pipeline.battery is battery


async def test_cached_handle_resolves_immediately_and_never_changes() -> None:
    battery = _FakeBattery()
    acquire = _Acquirer(battery)
    acquire.gate.set()
    pipeline, _ = _pipeline(acquire)

    assert await pipeline.request() is battery

    for _ in range(100):
        future = pipeline.request()
        assert future.done()
        assert future.result() is battery

    assert acquire.calls == 1
    assert pipeline.status is CacheStatus.READY


async def test_failure_is_permanent_and_logged_once(
    caplog: pytest.LogCaptureFixture,
) -> None:
    acquire = _Acquirer(error=PermissionError("denied"))
    acquire.gate.set()
    pipeline, bridge = _pipeline(acquire)

    with caplog.at_level(logging.WARNING, logger=_LOGGER_NAME):
        assert await pipeline.request() is None
        for _ in range(1000):
            future = pipeline.request()
            assert future.done()
            assert future.result() is None

    assert acquire.calls == 1
    assert pipeline.status is CacheStatus.FAILED
    assert pipeline.battery is None
    assert bridge.wired is False
    records = [r for r in caplog.records if r.name == _LOGGER_NAME]
    assert len(records) == 1
    assert "denied" in records[0].getMessage()


async def test_waiters_during_failure_all_resolve_to_none() -> None:
    acquire = _Acquirer(error=RuntimeError("platform fault"))
    pipeline, _ = _pipeline(acquire)

    first = pipeline.request()
    second = pipeline.request()
    acquire.gate.set()

    assert await first is None
    assert await second is None
    assert acquire.calls == 1


async def test_unsupported_platform_never_acquires() -> None:
    acquire = _Acquirer(_FakeBattery())
    pipeline, _ = _pipeline(acquire, supported=False)

    future = pipeline.request()
    assert future.done()
    assert future.result() is None

    await asyncio.sleep(0)
    assert acquire.calls == 0
    assert pipeline.status is CacheStatus.EMPTY
    assert pipeline.supported is False


async def test_bridge_is_wired_before_waiters_resolve() -> None:
    battery = _FakeBattery()
    acquire = _Acquirer(battery)
    pipeline, bridge = _pipeline(acquire)

    seen: list[tuple[bool, int]] = []
    future = pipeline.request()
    future.add_done_callback(
        lambda _f: seen.append(
            (bridge.wired, len(battery.listeners[BatteryChannel.LEVEL]))
        )
    )

    acquire.gate.set()
    await future

    assert seen == [(True, 1)]


async def test_level_notification_fires_only_after_acquisition() -> None:
    battery = _FakeBattery()
    acquire = _Acquirer(battery)
    sink = _RecordingSink()
    pipeline, _ = _pipeline(acquire, sink=sink)

    future = pipeline.request()
    battery.emit(BatteryChannel.LEVEL)
    assert sink.fired == []

    acquire.gate.set()
    await future
    battery.emit(BatteryChannel.LEVEL)

    assert sink.fired == ["device_battery_level_changed"]


async def test_eager_task_factory_settles_before_request_returns() -> None:
    battery = _FakeBattery()

    async def _acquire_now() -> Any:
        return battery

    bridge = EventBridge(_RecordingSink())
    pipeline = AcquisitionPipeline(
        acquire=_acquire_now,
        bridge=bridge,
        supported=lambda: True,
        create_task=lambda coro: asyncio.Task(
            coro, loop=asyncio.get_running_loop(), eager_start=True
        ),
    )

    future = pipeline.request()

    assert future.done()
    assert future.result() is battery
    assert pipeline.status is CacheStatus.READY
    assert bridge.wired is True


async def test_resource_state_only_moves_forward() -> None:
    state = ResourceState()
    assert state.status is CacheStatus.EMPTY

    with pytest.raises(ResourceStateError):
        state.mark_ready(_FakeBattery())
    with pytest.raises(ResourceStateError):
        state.mark_failed()

    loop = asyncio.get_running_loop()
    state.mark_acquiring(loop.create_future())
    assert state.status is CacheStatus.ACQUIRING
    with pytest.raises(ResourceStateError):
        state.mark_acquiring(loop.create_future())

    state.mark_failed()

    assert state.status is CacheStatus.FAILED
    assert state.pending is None
    assert state.handle is None
    with pytest.raises(ResourceStateError):
        state.mark_ready(_FakeBattery())
