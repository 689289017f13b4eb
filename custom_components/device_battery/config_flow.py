"""Config flow for the Device Battery integration.

The battery belongs to the machine running Home Assistant, so only one entry
is allowed. The options flow controls how often the battery is re-read.
"""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.config_entries import ConfigEntry, ConfigFlowResult
from homeassistant.core import callback

from .const import (
    CONF_SCAN_INTERVAL,
    DEFAULT_SCAN_INTERVAL,
    DEFAULT_TITLE,
    DOMAIN,
    LOGGER_NAME,
    MAX_SCAN_INTERVAL_SECONDS,
    MIN_SCAN_INTERVAL_SECONDS,
)
from .device_battery import psutil_battery_supported

_LOGGER = logging.getLogger(LOGGER_NAME)


def _options_schema(options: dict[str, Any]) -> vol.Schema:
    """Build the options schema with the current values as defaults.

    Args:
        options: Existing config entry options.

    Returns:
        Voluptuous schema used to prompt for the refresh interval.
    """
    current = options.get(
        CONF_SCAN_INTERVAL, int(DEFAULT_SCAN_INTERVAL.total_seconds())
    )
    return vol.Schema(
        {
            vol.Optional(CONF_SCAN_INTERVAL, default=current): vol.All(
                vol.Coerce(int),
                vol.Range(min=MIN_SCAN_INTERVAL_SECONDS, max=MAX_SCAN_INTERVAL_SECONDS),
            ),
        }
    )


class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Device Battery."""

    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Return the options flow handler."""
        return OptionsFlow()

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step.

        Args:
            user_input: Empty dict once the user confirms.

        Returns:
            A Home Assistant flow result.
        """
        if self._async_current_entries():
            return self.async_abort(reason="single_instance_allowed")

        if user_input is not None:
            await self.async_set_unique_id(DOMAIN)
            self._abort_if_unique_id_configured()
            return self.async_create_entry(title=DEFAULT_TITLE, data={})

        supported = psutil_battery_supported()
        if not supported:
            _LOGGER.debug("Battery queries are not supported on this platform")
        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema({}),
            description_placeholders={"supported": "yes" if supported else "no"},
        )


class OptionsFlow(config_entries.OptionsFlow):
    """Handle Device Battery options."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Prompt for the refresh interval.

        Args:
            user_input: Submitted options, if any.

        Returns:
            A Home Assistant flow result.
        """
        if user_input is not None:
            return self.async_create_entry(data=user_input)

        return self.async_show_form(
            step_id="init",
            data_schema=_options_schema(dict(self.config_entry.options)),
        )
