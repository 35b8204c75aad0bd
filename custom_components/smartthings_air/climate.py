from __future__ import annotations

from typing import Any

from homeassistant.components.climate import (  # type: ignore
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.config_entries import ConfigEntry  # type: ignore
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature  # type: ignore
from homeassistant.core import HomeAssistant  # type: ignore
from homeassistant.helpers.entity_platform import AddEntitiesCallback  # type: ignore

from .accessory import AirConditionerAccessory
from .const import DOMAIN, LOGGER, TEMPERATURE_STEP
from .entity import SmartThingsAirEntity

# SmartThings airConditionerMode <-> HA hvac mode
REMOTE_TO_HVAC_MODE: dict[str, HVACMode] = {
    "auto": HVACMode.AUTO,
    "cool": HVACMode.COOL,
    "heat": HVACMode.HEAT,
}
HVAC_MODE_TO_REMOTE: dict[HVACMode, str] = {v: k for k, v in REMOTE_TO_HVAC_MODE.items()}


def to_remote_mode(hvac_mode: HVACMode | str) -> str:
    mode = HVAC_MODE_TO_REMOTE.get(hvac_mode)
    if mode is None:
        LOGGER.warning("Illegal heater-cooler state %s", hvac_mode)
        return "auto"
    return mode


def from_remote_mode(mode: str | None) -> HVACMode:
    if mode is None:
        return HVACMode.AUTO
    hvac_mode = REMOTE_TO_HVAC_MODE.get(mode)
    if hvac_mode is None:
        LOGGER.warning("Received unknown heater-cooler state %s", mode)
        return HVACMode.AUTO
    return hvac_mode


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    runtime = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        SmartThingsAirConditioner(acc)
        for acc in runtime.accessories
        if isinstance(acc, AirConditionerAccessory)
    )


class SmartThingsAirConditioner(SmartThingsAirEntity, ClimateEntity):
    _attr_name = None
    _attr_hvac_modes = [HVACMode.OFF, HVACMode.AUTO, HVACMode.COOL, HVACMode.HEAT]
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.TURN_ON
        | ClimateEntityFeature.TURN_OFF
    )
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = TEMPERATURE_STEP

    def __init__(self, accessory: AirConditionerAccessory) -> None:
        super().__init__(accessory)
        self._attr_min_temp = accessory.config.min_temperature
        self._attr_max_temp = accessory.config.max_temperature

    @property
    def accessory(self) -> AirConditionerAccessory:
        return self._accessory

    @property
    def current_temperature(self) -> float | None:
        return self.accessory.status.current_temperature

    @property
    def target_temperature(self) -> float | None:
        return self.accessory.status.target_temperature

    @property
    def hvac_mode(self) -> HVACMode:
        status = self.accessory.status
        if not status.active:
            return HVACMode.OFF
        return from_remote_mode(status.mode)

    @property
    def hvac_action(self) -> HVACAction:
        status = self.accessory.status
        if not status.active:
            return HVACAction.OFF
        current, target = status.current_temperature, status.target_temperature
        if status.mode == "heat":
            if current is not None and target is not None and current >= target:
                return HVACAction.IDLE
            return HVACAction.HEATING
        if current is not None and target is not None and current <= target:
            return HVACAction.IDLE
        return HVACAction.COOLING

    async def async_turn_on(self) -> None:
        await self.accessory.async_set_active(True)

    async def async_turn_off(self) -> None:
        await self.accessory.async_set_active(False)

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        if hvac_mode == HVACMode.OFF:
            await self.accessory.async_set_active(False)
            return
        if not self.accessory.status.active:
            if not await self.accessory.async_set_active(True):
                return
        await self.accessory.async_set_mode(to_remote_mode(hvac_mode))

    async def async_set_temperature(self, **kwargs: Any) -> None:
        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return
        await self.accessory.async_set_target_temperature(float(temperature))
