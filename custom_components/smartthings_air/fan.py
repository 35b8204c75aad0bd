from __future__ import annotations

from typing import Any

from homeassistant.components.fan import FanEntity, FanEntityFeature  # type: ignore
from homeassistant.config_entries import ConfigEntry  # type: ignore
from homeassistant.core import HomeAssistant  # type: ignore
from homeassistant.helpers.entity_platform import AddEntitiesCallback  # type: ignore

from .accessory import AirPurifierAccessory
from .const import DOMAIN
from .entity import SmartThingsAirEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    runtime = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        SmartThingsAirPurifier(acc)
        for acc in runtime.accessories
        if isinstance(acc, AirPurifierAccessory)
    )


class SmartThingsAirPurifier(SmartThingsAirEntity, FanEntity):
    _attr_name = None
    _attr_supported_features = FanEntityFeature.TURN_ON | FanEntityFeature.TURN_OFF

    @property
    def accessory(self) -> AirPurifierAccessory:
        return self._accessory

    @property
    def is_on(self) -> bool:
        return self.accessory.status.active

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {
            "fan_mode": self.accessory.status.mode,
            "target_state": "auto" if self.accessory.is_auto else "manual",
        }

    async def async_turn_on(
        self,
        percentage: int | None = None,
        preset_mode: str | None = None,
        **kwargs: Any,
    ) -> None:
        await self.accessory.async_set_active(True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self.accessory.async_set_active(False)
