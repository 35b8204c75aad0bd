# custom_components/smartthings_air/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .const import (
    CAP_AIR_QUALITY,
    CAP_COOLING_SETPOINT,
    CAP_SWITCH,
    CAP_TEMPERATURE_MEASUREMENT,
    DEFAULT_MAX_TEMPERATURE,
    DEFAULT_MIN_TEMPERATURE,
    DEFAULT_UPDATE_INTERVAL,
    UNKNOWN,
)


class AccessoryKind(StrEnum):
    """Supported accessory kinds, named after the SmartThings category."""

    AIR_CONDITIONER = "AirConditioner"
    AIR_PURIFIER = "AirPurifier"

    @property
    def required_capabilities(self) -> tuple[str, ...]:
        return _REQUIRED_CAPABILITIES[self]


_REQUIRED_CAPABILITIES: dict[AccessoryKind, tuple[str, ...]] = {
    AccessoryKind.AIR_CONDITIONER: (
        CAP_SWITCH,
        CAP_TEMPERATURE_MEASUREMENT,
        CAP_COOLING_SETPOINT,
    ),
    AccessoryKind.AIR_PURIFIER: (CAP_SWITCH, CAP_AIR_QUALITY),
}


@dataclass(slots=True)
class Component:
    id: str
    capabilities: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RemoteDevice:
    device_id: str | None  # vendor id; required for any remote call
    label: str | None
    manufacturer: str = UNKNOWN
    model: str = UNKNOWN
    serial: str = UNKNOWN
    components: list[Component] = field(default_factory=list)

    @property
    def capabilities(self) -> list[str]:
        return [cap for comp in self.components for cap in comp.capabilities]

    @property
    def categories(self) -> list[str]:
        return [cat for comp in self.components for cat in comp.categories]

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> RemoteDevice:
        """Build from a SmartThings `/devices` item."""
        components = []
        for comp in raw.get("components") or []:
            if not isinstance(comp, dict):
                continue
            components.append(
                Component(
                    id=str(comp.get("id") or ""),
                    capabilities=[
                        str(c["id"])
                        for c in comp.get("capabilities") or []
                        if isinstance(c, dict) and c.get("id")
                    ],
                    categories=[
                        str(c["name"])
                        for c in comp.get("categories") or []
                        if isinstance(c, dict) and c.get("name")
                    ],
                )
            )
        return cls(
            device_id=raw.get("deviceId") or None,
            label=raw.get("label") or None,
            manufacturer=raw.get("manufacturerName") or UNKNOWN,
            model=raw.get("name") or UNKNOWN,
            serial=raw.get("presentationId") or UNKNOWN,
            components=components,
        )


@dataclass(slots=True)
class AirConditionerStatus:
    mode: str | None = "auto"
    active: bool = False
    current_temperature: float | None = None
    target_temperature: float | None = None


@dataclass(slots=True)
class AirPurifierStatus:
    active: bool = False
    air_quality: float = 0  # 0 = unknown / error
    mode: str | None = None


@dataclass(slots=True)
class RestoredAccessory:
    """Accessory identity handed back by the runtime before discovery."""

    accessory_id: str
    name: str | None = None
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class AccessoryBinding:
    accessory_id: str  # persisted identity, stable across restarts
    device_id: str
    name: str
    kind: AccessoryKind
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class BridgeConfig:
    token: str | None
    update_interval: float = DEFAULT_UPDATE_INTERVAL
    min_temperature: float = DEFAULT_MIN_TEMPERATURE
    max_temperature: float = DEFAULT_MAX_TEMPERATURE
