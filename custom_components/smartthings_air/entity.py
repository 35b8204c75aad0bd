# custom_components/smartthings_air/entity.py
from __future__ import annotations

from homeassistant.helpers.entity import DeviceInfo  # type: ignore
from homeassistant.helpers.update_coordinator import CoordinatorEntity  # type: ignore

from .accessory import BridgedAccessory
from .const import DOMAIN, MANUFACTURER, UNKNOWN
from .poller import StatusCache


class SmartThingsAirEntity(CoordinatorEntity[StatusCache]):
    """Entity that reads its state from an accessory's status cache."""

    _attr_has_entity_name = True

    def __init__(self, accessory: BridgedAccessory, *, key: str | None = None) -> None:
        super().__init__(accessory.cache)
        self._accessory = accessory
        binding = accessory.binding
        self._attr_unique_id = (
            binding.accessory_id if key is None else f"{binding.accessory_id}_{key}"
        )

    @property
    def accessory(self) -> BridgedAccessory:
        return self._accessory

    @property
    def available(self) -> bool:
        # Last known status stays visible while the cloud cannot be reached.
        return True

    @property
    def device_info(self) -> DeviceInfo:
        device = self._accessory.device
        manufacturer = device.manufacturer
        if not manufacturer or manufacturer == UNKNOWN:
            manufacturer = MANUFACTURER
        return DeviceInfo(
            identifiers={(DOMAIN, self._accessory.binding.accessory_id)},
            manufacturer=manufacturer,
            model=device.model,
            serial_number=device.serial,
            name=self._accessory.binding.name,
        )
