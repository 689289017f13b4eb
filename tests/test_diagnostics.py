"""Tests for Device Battery diagnostics."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import patch

import psutil
import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.device_battery.const import CONF_SCAN_INTERVAL, DOMAIN
from custom_components.device_battery.diagnostics import (
    async_get_config_entry_diagnostics,
)


async def test_diagnostics_reports_hub_state(hass, enable_custom_integrations):
    entry = MockConfigEntry(
        domain=DOMAIN, data={}, options={CONF_SCAN_INTERVAL: 30}, unique_id=DOMAIN
    )
    entry.add_to_hass(hass)

    raw = SimpleNamespace(percent=80, secsleft=-2, power_plugged=True)
    with patch.object(psutil, "sensors_battery", return_value=raw):
        assert await hass.config_entries.async_setup(entry.entry_id)
        await hass.async_block_till_done()

        diag = await async_get_config_entry_diagnostics(hass, entry)

        assert await hass.config_entries.async_unload(entry.entry_id)
        await hass.async_block_till_done()

    assert diag["entry_id"] == entry.entry_id
    assert diag["options"] == {CONF_SCAN_INTERVAL: 30}
    hub = diag["hub"]
    assert hub["status"] == "ready"
    assert hub["supported"] is True
    assert hub["scan_interval_seconds"] == 30
    assert hub["battery"]["charging"] is True
    assert hub["battery"]["level"] == pytest.approx(0.8)
    assert hub["battery"]["charging_time"] is None
    assert hub["battery"]["discharging_time"] is None


async def test_diagnostics_without_loaded_hub(hass):
    entry = MockConfigEntry(domain=DOMAIN, data={})
    entry.add_to_hass(hass)

    diag = await async_get_config_entry_diagnostics(hass, entry)

    assert diag["hub"] is None
    assert diag["options"] == {}
