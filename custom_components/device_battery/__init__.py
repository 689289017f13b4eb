"""The Device Battery integration.

This integration reports the battery of the machine running Home Assistant
and fires bus events when the charging state, level, or time estimates change.
"""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import DOMAIN, LOGGER_NAME, PLATFORMS
from .hub import DeviceBatteryHub

_LOGGER = logging.getLogger(LOGGER_NAME)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Device Battery from a config entry.

    A missing battery does not fail setup; entities report fallback values.

    Args:
        hass: Home Assistant instance.
        entry: The config entry.

    Returns:
        True if setup succeeds.
    """
    hub = DeviceBatteryHub(hass, entry)
    hub.async_start()

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = hub
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry.

    Args:
        hass: Home Assistant instance.
        entry: The config entry.

    Returns:
        True if the entry was unloaded.
    """
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hub: DeviceBatteryHub | None = hass.data.get(DOMAIN, {}).pop(
            entry.entry_id, None
        )
        if hub is not None:
            hub.async_stop()
    return unload_ok


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry so a new refresh interval takes effect."""
    _LOGGER.debug("Options updated for %s; reloading", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)
