from __future__ import annotations

from homeassistant.components.sensor import SensorDeviceClass, SensorEntity  # type: ignore
from homeassistant.config_entries import ConfigEntry  # type: ignore
from homeassistant.core import HomeAssistant  # type: ignore
from homeassistant.helpers.entity_platform import AddEntitiesCallback  # type: ignore

from .accessory import AirPurifierAccessory
from .const import DOMAIN
from .entity import SmartThingsAirEntity

# Index is the level returned by air_quality_level()
AIR_QUALITY_OPTIONS = ["unknown", "excellent", "good", "fair", "inferior", "poor"]


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    runtime = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        SmartThingsAirQualitySensor(acc)
        for acc in runtime.accessories
        if isinstance(acc, AirPurifierAccessory)
    )


class SmartThingsAirQualitySensor(SmartThingsAirEntity, SensorEntity):
    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = AIR_QUALITY_OPTIONS
    _attr_translation_key = "air_quality"

    def __init__(self, accessory: AirPurifierAccessory) -> None:
        super().__init__(accessory, key="air_quality")

    @property
    def native_value(self) -> str:
        return AIR_QUALITY_OPTIONS[self._accessory.air_quality_level]
