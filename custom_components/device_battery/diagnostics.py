"""Diagnostics support for Device Battery."""

from __future__ import annotations

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import DOMAIN
from .hub import DeviceBatteryHub


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    hub: DeviceBatteryHub | None = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    return {
        "entry_id": entry.entry_id,
        "options": dict(entry.options),
        "hub": hub.as_dict() if hub is not None else None,
    }
