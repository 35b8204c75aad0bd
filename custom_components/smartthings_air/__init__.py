from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from homeassistant.config_entries import ConfigEntry  # type: ignore
from homeassistant.const import Platform  # type: ignore
from homeassistant.core import HomeAssistant  # type: ignore
from homeassistant.helpers import device_registry as dr  # type: ignore
from homeassistant.helpers.aiohttp_client import async_get_clientsession  # type: ignore

from .accessory import BridgedAccessory, create_accessory
from .api import SmartThingsClient, SmartThingsError
from .const import (
    CONF_MAX_TEMPERATURE,
    CONF_MIN_TEMPERATURE,
    CONF_TOKEN,
    CONF_UPDATE_INTERVAL,
    DEFAULT_MAX_TEMPERATURE,
    DEFAULT_MIN_TEMPERATURE,
    DEFAULT_UPDATE_INTERVAL,
    DOMAIN,
    LOGGER,
)
from .models import AccessoryBinding, BridgeConfig, RemoteDevice, RestoredAccessory
from .registry import AccessoryRegistry, async_discover

PLATFORMS = [Platform.CLIMATE, Platform.FAN, Platform.SENSOR]


@dataclass(slots=True)
class SmartThingsAirData:
    config: BridgeConfig
    registry: AccessoryRegistry
    client: SmartThingsClient | None = None
    accessories: list[BridgedAccessory] = field(default_factory=list)


def bridge_config_from_entry(entry: ConfigEntry) -> BridgeConfig:
    options = {**entry.data, **entry.options}
    return BridgeConfig(
        token=options.get(CONF_TOKEN),
        update_interval=options.get(CONF_UPDATE_INTERVAL, DEFAULT_UPDATE_INTERVAL),
        min_temperature=options.get(CONF_MIN_TEMPERATURE, DEFAULT_MIN_TEMPERATURE),
        max_temperature=options.get(CONF_MAX_TEMPERATURE, DEFAULT_MAX_TEMPERATURE),
    )


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    config = bridge_config_from_entry(entry)
    registry = AccessoryRegistry()
    runtime = SmartThingsAirData(config=config, registry=registry)
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = runtime

    token = (config.token or "").strip()
    if not token:
        LOGGER.warning("Please configure your API token and reload the integration.")
    else:
        dev_reg = dr.async_get(hass)
        for device_entry in dr.async_entries_for_config_entry(dev_reg, entry.entry_id):
            for domain, identifier in device_entry.identifiers:
                if domain == DOMAIN:
                    registry.async_restore(
                        RestoredAccessory(
                            accessory_id=identifier,
                            name=device_entry.name,
                            context={"device_entry_id": device_entry.id},
                        )
                    )

        runtime.client = SmartThingsClient(async_get_clientsession(hass), token)
        runtime.accessories = await async_finish_launching(hass, entry, runtime)

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))
    return True


async def async_finish_launching(
    hass: HomeAssistant, entry: ConfigEntry, runtime: SmartThingsAirData
) -> list[BridgedAccessory]:
    """Run a discovery pass and start polling every accessory it produced."""
    client = runtime.client
    try:
        devices = await client.async_list_devices()
    except SmartThingsError as err:
        LOGGER.error("Cannot load devices: %s", err)
        return []

    dev_reg = dr.async_get(hass)

    def _register(binding: AccessoryBinding, device: RemoteDevice) -> None:
        dev_reg.async_get_or_create(
            config_entry_id=entry.entry_id,
            identifiers={(DOMAIN, binding.accessory_id)},
            name=binding.name,
            manufacturer=device.manufacturer,
            model=device.model,
            serial_number=device.serial,
        )

    def _factory(binding: AccessoryBinding, device: RemoteDevice) -> BridgedAccessory:
        return create_accessory(hass, binding, device, client, runtime.config, entry)

    accessories = await async_discover(devices, runtime.registry, _factory, _register)
    await asyncio.gather(*(accessory.async_start() for accessory in accessories))
    return accessories


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        runtime: SmartThingsAirData | None = hass.data[DOMAIN].pop(entry.entry_id, None)
        if runtime is not None:
            await runtime.registry.async_stop()
    return unload_ok


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    await hass.config_entries.async_reload(entry.entry_id)
