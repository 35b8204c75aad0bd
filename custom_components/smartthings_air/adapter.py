# custom_components/smartthings_air/adapter.py
# Translate SmartThings status documents into typed records and send commands.
from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from .api import SmartThingsClient, SmartThingsError
from .const import (
    CAP_AIR_CONDITIONER_MODE,
    CAP_AIR_QUALITY,
    CAP_COOLING_SETPOINT,
    CAP_FAN_MODE,
    CAP_SWITCH,
    CAP_TEMPERATURE_MEASUREMENT,
    MAIN_COMPONENT,
)
from .models import (
    AccessoryKind,
    AirConditionerStatus,
    AirPurifierStatus,
    RemoteDevice,
)

_LOGGER = logging.getLogger(__name__)

StatusT = TypeVar("StatusT")


class MissingDeviceIdError(SmartThingsError):
    pass


class StatusUnavailableError(SmartThingsError):
    pass


class CommandFailedError(SmartThingsError):
    def __init__(self, status: str):
        super().__init__(f"Command failed with status {status}")
        self.status = status


def _node(parent: dict, key: str, what: str) -> dict:
    """Child mapping at `key`; absent means empty, any other shape is malformed."""
    node = parent.get(key)
    if node is None:
        return {}
    if not isinstance(node, dict):
        raise StatusUnavailableError(f"Malformed device status at {what}")
    return node


def _attribute(main: dict, capability: str, attribute: str) -> Any:
    """Return `main[capability][attribute]["value"]` or None."""
    node = _node(main, capability, capability)
    return _node(node, attribute, f"{capability}.{attribute}").get("value")


class StatusAdapter(Generic[StatusT]):
    """Binds one remote device to the status/command calls it needs."""

    def __init__(self, device: RemoteDevice, client: SmartThingsClient) -> None:
        self.device = device
        self._client = client

    def _require_device_id(self) -> str:
        if not self.device.device_id:
            raise MissingDeviceIdError("Device ID must be set")
        return self.device.device_id

    async def async_get_status(self) -> StatusT:
        return self._project(await self._get_main_component())

    async def _get_main_component(self) -> dict:
        device_id = self._require_device_id()
        _LOGGER.debug("Get status for device %s", device_id)
        status = await self._client.async_get_status(device_id)
        components = status.get("components") if isinstance(status, dict) else None
        if not components or not isinstance(components, dict):
            raise StatusUnavailableError("Cannot get device status")
        return _node(components, MAIN_COMPONENT, MAIN_COMPONENT)

    def _project(self, main: dict) -> StatusT:
        raise NotImplementedError

    async def async_execute_main_command(
        self,
        command: str,
        capability: str,
        arguments: list[str | float] | None = None,
    ) -> None:
        """Run a command on the main component.

        Any FAILED entry in the result list fails the whole call, even when
        other entries succeeded.
        """
        device_id = self._require_device_id()

        _LOGGER.debug("Executing command %s %s on %s", capability, command, device_id)
        results = await self._client.async_execute_command(
            device_id, command, capability, arguments, component=MAIN_COMPONENT
        )
        for result in results:
            status = str(result.get("status")) if isinstance(result, dict) else None
            if status == "FAILED":
                raise CommandFailedError(status)
            _LOGGER.debug("Command %s on %s: %s", command, device_id, status)


class AirConditionerAdapter(StatusAdapter[AirConditionerStatus]):
    def _project(self, main: dict) -> AirConditionerStatus:
        return AirConditionerStatus(
            active=_attribute(main, CAP_SWITCH, "switch") == "on",
            mode=_attribute(main, CAP_AIR_CONDITIONER_MODE, "airConditionerMode"),
            target_temperature=_attribute(main, CAP_COOLING_SETPOINT, "coolingSetpoint"),
            current_temperature=_attribute(
                main, CAP_TEMPERATURE_MEASUREMENT, "temperature"
            ),
        )


class AirPurifierAdapter(StatusAdapter[AirPurifierStatus]):
    def _project(self, main: dict) -> AirPurifierStatus:
        return AirPurifierStatus(
            active=_attribute(main, CAP_SWITCH, "switch") == "on",
            air_quality=_attribute(main, CAP_AIR_QUALITY, "airQuality") or 0,
            mode=_attribute(main, CAP_FAN_MODE, "fanMode"),
        )


def adapter_for(
    kind: AccessoryKind, device: RemoteDevice, client: SmartThingsClient
) -> StatusAdapter:
    if kind is AccessoryKind.AIR_CONDITIONER:
        return AirConditionerAdapter(device, client)
    return AirPurifierAdapter(device, client)
