"""Fixtures for SmartThings Air tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from custom_components.smartthings_air.models import (
    AccessoryBinding,
    AccessoryKind,
    BridgeConfig,
    Component,
    RemoteDevice,
)


def make_device(
    device_id: str | None = "ac-1",
    label: str | None = "Living room AC",
    capabilities: list[str] | None = None,
    categories: list[str] | None = None,
) -> RemoteDevice:
    """Single-component device with the given capability and category ids."""
    return RemoteDevice(
        device_id=device_id,
        label=label,
        components=[
            Component(
                id="main",
                capabilities=list(capabilities or []),
                categories=list(categories or []),
            )
        ],
    )


def ac_status_document(
    switch: str = "on",
    mode: str = "cool",
    setpoint: float = 24,
    temperature: float = 27.5,
) -> dict[str, Any]:
    return {
        "components": {
            "main": {
                "switch": {"switch": {"value": switch}},
                "airConditionerMode": {"airConditionerMode": {"value": mode}},
                "thermostatCoolingSetpoint": {"coolingSetpoint": {"value": setpoint}},
                "temperatureMeasurement": {"temperature": {"value": temperature}},
            }
        }
    }


@pytest.fixture
def ac_device() -> RemoteDevice:
    return make_device(
        capabilities=["switch", "temperatureMeasurement", "thermostatCoolingSetpoint"],
        categories=["AirConditioner"],
    )


@pytest.fixture
def purifier_device() -> RemoteDevice:
    return make_device(
        device_id="ap-1",
        label="Bedroom purifier",
        capabilities=["switch", "airQualitySensor", "fanMode"],
        categories=["AirPurifier"],
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """SmartThingsClient stand-in with async API methods."""
    client = MagicMock()
    client.async_list_devices = AsyncMock(return_value=[])
    client.async_get_status = AsyncMock(return_value=ac_status_document())
    client.async_execute_command = AsyncMock(
        return_value=[{"id": "cmd-1", "status": "ACCEPTED"}]
    )
    return client


@pytest.fixture
def bridge_config() -> BridgeConfig:
    return BridgeConfig(token="secret", update_interval=15)


@pytest.fixture
def ac_binding(ac_device: RemoteDevice) -> AccessoryBinding:
    return AccessoryBinding(
        accessory_id="ac-1",
        device_id="ac-1",
        name="Living room AC",
        kind=AccessoryKind.AIR_CONDITIONER,
    )


@pytest.fixture
def purifier_binding() -> AccessoryBinding:
    return AccessoryBinding(
        accessory_id="ap-1",
        device_id="ap-1",
        name="Bedroom purifier",
        kind=AccessoryKind.AIR_PURIFIER,
    )
