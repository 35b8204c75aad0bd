# UI flow: personal access token -> validate against /devices -> create entry
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant import config_entries  # type: ignore
from homeassistant.config_entries import ConfigFlowResult  # type: ignore
from homeassistant.core import callback  # type: ignore
from homeassistant.helpers import selector  # type: ignore
from homeassistant.helpers.aiohttp_client import async_get_clientsession  # type: ignore

from .api import SmartThingsAuthError, SmartThingsClient, SmartThingsError
from .const import (
    CONF_MAX_TEMPERATURE,
    CONF_MIN_TEMPERATURE,
    CONF_TOKEN,
    CONF_UPDATE_INTERVAL,
    DEFAULT_MAX_TEMPERATURE,
    DEFAULT_MIN_TEMPERATURE,
    DEFAULT_UPDATE_INTERVAL,
    DOMAIN,
)

_LOGGER = logging.getLogger(__name__)


class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    VERSION = 1

    async def async_step_user(self, user_input: dict | None = None) -> ConfigFlowResult:
        errors: dict[str, str] = {}
        if user_input is not None:
            token = user_input[CONF_TOKEN].strip()
            if not token:
                errors["base"] = "invalid_auth"
            else:
                client = SmartThingsClient(async_get_clientsession(self.hass), token)
                try:
                    devices = await client.async_list_devices()
                except SmartThingsAuthError:
                    errors["base"] = "invalid_auth"
                except SmartThingsError as e:
                    _LOGGER.warning("Cannot reach SmartThings: %s", e)
                    errors["base"] = "cannot_connect"
                else:
                    _LOGGER.debug("Token accepted, %s devices visible", len(devices))
                    return self.async_create_entry(
                        title="SmartThings Air", data={CONF_TOKEN: token}
                    )

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema({
                vol.Required(CONF_TOKEN): selector.TextSelector(
                    selector.TextSelectorConfig(type=selector.TextSelectorType.PASSWORD)),
            }),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: config_entries.ConfigEntry) -> OptionsFlowHandler:
        return OptionsFlowHandler(config_entry)


class OptionsFlowHandler(config_entries.OptionsFlow):
    """Polling interval and temperature bounds."""

    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        self._entry = config_entry

    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        errors: dict[str, str] = {}
        if user_input is not None:
            if user_input[CONF_MIN_TEMPERATURE] >= user_input[CONF_MAX_TEMPERATURE]:
                errors["base"] = "invalid_temperature_range"
            else:
                return self.async_create_entry(title="", data=user_input)

        current = self._entry.options
        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema({
                vol.Required(
                    CONF_UPDATE_INTERVAL,
                    default=current.get(CONF_UPDATE_INTERVAL, DEFAULT_UPDATE_INTERVAL),
                ): vol.All(vol.Coerce(int), vol.Range(min=5, max=3600)),
                vol.Required(
                    CONF_MIN_TEMPERATURE,
                    default=current.get(CONF_MIN_TEMPERATURE, DEFAULT_MIN_TEMPERATURE),
                ): vol.Coerce(int),
                vol.Required(
                    CONF_MAX_TEMPERATURE,
                    default=current.get(CONF_MAX_TEMPERATURE, DEFAULT_MAX_TEMPERATURE),
                ): vol.Coerce(int),
            }),
            errors=errors,
        )
