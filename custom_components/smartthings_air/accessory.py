# custom_components/smartthings_air/accessory.py
from __future__ import annotations

from datetime import timedelta

from homeassistant.config_entries import ConfigEntry  # type: ignore
from homeassistant.core import HomeAssistant  # type: ignore

from .adapter import (
    AirConditionerAdapter,
    AirPurifierAdapter,
    StatusAdapter,
    adapter_for,
)
from .api import SmartThingsClient
from .const import (
    CAP_AIR_CONDITIONER_MODE,
    CAP_COOLING_SETPOINT,
    CAP_SWITCH,
    PURIFIER_AUTO_MODE,
)
from .executor import CommandExecutor
from .models import (
    AccessoryBinding,
    AccessoryKind,
    AirConditionerStatus,
    AirPurifierStatus,
    BridgeConfig,
    RemoteDevice,
)
from .poller import StatusCache


def air_quality_level(state: float | None) -> int:
    """Bucket a SmartThings air quality reading into levels 0 (unknown) .. 5 (poor)."""
    if not isinstance(state, (int, float)) or isinstance(state, bool) or state <= 0:
        return 0
    if state <= 1:
        return 1
    if state <= 2:
        return 2
    if state <= 3:
        return 3
    if state <= 4:
        return 4
    return 5


class BridgedAccessory:
    """One remote device with its status cache and command executor."""

    kind: AccessoryKind

    def __init__(
        self,
        hass: HomeAssistant,
        binding: AccessoryBinding,
        device: RemoteDevice,
        adapter: StatusAdapter,
        config: BridgeConfig,
        config_entry: ConfigEntry | None = None,
    ) -> None:
        self.binding = binding
        self.device = device
        self.adapter = adapter
        self.config = config
        self.cache = StatusCache(
            hass,
            binding.name,
            adapter,
            self._initial_status(),
            timedelta(seconds=config.update_interval),
            config_entry,
        )
        self.executor = CommandExecutor(binding.name, adapter, self.cache)

    def _initial_status(self):
        raise NotImplementedError

    @property
    def status(self):
        return self.cache.data

    async def async_start(self) -> None:
        await self.cache.async_start()

    async def async_stop(self) -> None:
        await self.cache.async_stop()

    async def async_set_active(self, active: bool) -> bool:
        return await self.executor.async_execute(
            "active", active, "on" if active else "off", CAP_SWITCH
        )


class AirConditionerAccessory(BridgedAccessory):
    kind = AccessoryKind.AIR_CONDITIONER
    adapter: AirConditionerAdapter

    def _initial_status(self) -> AirConditionerStatus:
        return AirConditionerStatus(
            mode="auto",
            active=False,
            current_temperature=self.config.min_temperature,
            target_temperature=self.config.max_temperature,
        )

    async def async_set_target_temperature(self, temperature: float) -> bool:
        return await self.executor.async_execute(
            "target_temperature",
            temperature,
            "setCoolingSetpoint",
            CAP_COOLING_SETPOINT,
            [temperature],
        )

    async def async_set_mode(self, mode: str) -> bool:
        return await self.executor.async_execute(
            "mode", mode, "setAirConditionerMode", CAP_AIR_CONDITIONER_MODE, [mode]
        )


class AirPurifierAccessory(BridgedAccessory):
    kind = AccessoryKind.AIR_PURIFIER
    adapter: AirPurifierAdapter

    def _initial_status(self) -> AirPurifierStatus:
        return AirPurifierStatus(active=False, air_quality=0, mode=PURIFIER_AUTO_MODE)

    @property
    def air_quality_level(self) -> int:
        return air_quality_level(self.status.air_quality)

    @property
    def is_auto(self) -> bool:
        return self.status.mode == PURIFIER_AUTO_MODE


def create_accessory(
    hass: HomeAssistant,
    binding: AccessoryBinding,
    device: RemoteDevice,
    client: SmartThingsClient,
    config: BridgeConfig,
    config_entry: ConfigEntry | None = None,
) -> BridgedAccessory:
    adapter = adapter_for(binding.kind, device, client)
    if binding.kind is AccessoryKind.AIR_CONDITIONER:
        cls = AirConditionerAccessory
    else:
        cls = AirPurifierAccessory
    return cls(hass, binding, device, adapter, config, config_entry)
