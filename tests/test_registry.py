"""Tests for device classification and discovery."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_device
from custom_components.smartthings_air.const import UNSUPPORTED_CATEGORY
from custom_components.smartthings_air.models import (
    AccessoryKind,
    Component,
    RemoteDevice,
    RestoredAccessory,
)
from custom_components.smartthings_air.registry import (
    AccessoryIdentityError,
    AccessoryRegistry,
    async_discover,
    classify,
    missing_capabilities,
)

AC_CAPS = ["switch", "temperatureMeasurement", "thermostatCoolingSetpoint"]


def _fake_factory():
    """Factory returning a distinct mock accessory per call."""

    def factory(binding, device):
        accessory = MagicMock()
        accessory.binding = binding
        accessory.device = device
        accessory.async_stop = AsyncMock()
        return accessory

    return MagicMock(side_effect=factory)


class TestClassify:
    """Classification from capabilities and categories."""

    def test_air_conditioner_eligible(self) -> None:
        device = make_device(capabilities=AC_CAPS, categories=["AirConditioner"])

        result = classify(device)

        assert result.kind is AccessoryKind.AIR_CONDITIONER
        assert result.missing == ()
        assert result.eligible

    def test_missing_cooling_setpoint(self) -> None:
        device = make_device(
            capabilities=["switch", "temperatureMeasurement"],
            categories=["AirConditioner"],
        )

        result = classify(device)

        assert result.missing == ("thermostatCoolingSetpoint",)
        assert not result.eligible

    def test_purifier_eligible_with_extra_capabilities(self) -> None:
        device = make_device(
            capabilities=["fanMode", "airQualitySensor", "switch", "switch"],
            categories=["AirPurifier"],
        )

        assert classify(device).kind is AccessoryKind.AIR_PURIFIER
        assert classify(device).eligible

    def test_unsupported_category(self) -> None:
        device = make_device(capabilities=AC_CAPS, categories=["Television"])

        result = classify(device)

        assert result.kind is None
        assert result.missing == (UNSUPPORTED_CATEGORY,)
        assert not result.eligible

    def test_only_first_category_counts(self) -> None:
        device = make_device(
            capabilities=AC_CAPS, categories=["Thermostat", "AirConditioner"]
        )

        assert not classify(device).eligible

    def test_capabilities_union_over_components(self) -> None:
        device = RemoteDevice(
            device_id="ac-2",
            label="Split AC",
            components=[
                Component("main", ["switch"], ["AirConditioner"]),
                Component("sub", ["temperatureMeasurement", "thermostatCoolingSetpoint"]),
            ],
        )

        assert classify(device).eligible

    @pytest.mark.parametrize(
        ("capabilities", "categories"),
        [
            (AC_CAPS, ["AirConditioner"]),
            (AC_CAPS[:2], ["AirConditioner"]),
            (["switch"], ["AirPurifier"]),
            (["switch", "airQualitySensor"], ["AirPurifier"]),
            (AC_CAPS, ["Washer"]),
            ([], []),
        ],
    )
    def test_missing_empty_iff_eligible(self, capabilities, categories) -> None:
        device = make_device(capabilities=capabilities, categories=categories)

        assert (missing_capabilities(device) == []) == classify(device).eligible

    def test_missing_for_explicit_kind(self) -> None:
        device = make_device(capabilities=["switch"], categories=["AirConditioner"])

        assert missing_capabilities(device, AccessoryKind.AIR_PURIFIER) == [
            "airQualitySensor"
        ]


class TestRegistry:
    """Identity handling in the registry."""

    def test_create_binding_requires_label_and_id(self) -> None:
        with pytest.raises(AccessoryIdentityError):
            AccessoryRegistry.create_binding(
                make_device(label=None), AccessoryKind.AIR_CONDITIONER
            )
        with pytest.raises(AccessoryIdentityError):
            AccessoryRegistry.create_binding(
                make_device(device_id=None), AccessoryKind.AIR_CONDITIONER
            )

    def test_restore_is_consulted(self) -> None:
        registry = AccessoryRegistry()
        registry.async_restore(RestoredAccessory("ac-1", "Old name"))

        existing = registry.find_existing("ac-1")

        assert existing is not None
        assert existing.accessory_id == "ac-1"
        assert registry.find_existing("other") is None


class TestDiscover:
    """Discovery passes over a batch of devices."""

    async def test_new_device_is_registered(self, ac_device) -> None:
        registry = AccessoryRegistry()
        factory = _fake_factory()
        register = MagicMock()

        built = await async_discover([ac_device], registry, factory, register)

        assert len(built) == 1
        register.assert_called_once()
        binding, device = register.call_args.args
        assert binding.accessory_id == "ac-1"
        assert binding.name == "Living room AC"
        assert binding.kind is AccessoryKind.AIR_CONDITIONER
        assert device is ac_device
        assert registry.bindings["ac-1"] == binding

    async def test_restored_device_is_not_registered_again(self, ac_device) -> None:
        registry = AccessoryRegistry()
        registry.async_restore(RestoredAccessory("ac-1", "Living room AC"))
        register = MagicMock()

        built = await async_discover([ac_device], registry, _fake_factory(), register)

        assert len(built) == 1
        register.assert_not_called()
        assert built[0].binding.accessory_id == "ac-1"

    async def test_repeat_pass_is_idempotent(self, ac_device) -> None:
        registry = AccessoryRegistry()
        register = MagicMock()
        factory = _fake_factory()

        first = await async_discover([ac_device], registry, factory, register)
        second = await async_discover([ac_device], registry, factory, register)

        register.assert_called_once()
        first[0].async_stop.assert_awaited_once()
        assert list(registry.accessories.values()) == second
        assert second[0].binding.accessory_id == first[0].binding.accessory_id

    async def test_skips_ineligible_and_componentless(self, ac_device) -> None:
        no_components = RemoteDevice(device_id="x", label="Bare")
        incomplete = make_device(
            device_id="ac-9", capabilities=["switch"], categories=["AirConditioner"]
        )
        tv = make_device(device_id="tv", capabilities=["switch"], categories=["Television"])
        registry = AccessoryRegistry()

        built = await async_discover(
            [no_components, incomplete, tv, ac_device], registry, _fake_factory(), MagicMock()
        )

        assert [a.binding.device_id for a in built] == ["ac-1"]

    async def test_skip_log_names_missing_capabilities(self, caplog) -> None:
        no_components = RemoteDevice(device_id="x", label="Bare")
        incomplete = make_device(
            device_id="ac-9", capabilities=["switch"], categories=["AirConditioner"]
        )

        with caplog.at_level(logging.INFO):
            await async_discover(
                [no_components, incomplete], AccessoryRegistry(), _fake_factory(), MagicMock()
            )

        assert (
            "Skipping device x Bare: no components. "
            "Missing capabilities: ['unsupportedCategory']"
        ) in caplog.text
        assert (
            "Skipping device ac-9 Living room AC. Missing capabilities: "
            "['temperatureMeasurement', 'thermostatCoolingSetpoint']"
        ) in caplog.text

    async def test_identity_error_only_drops_that_device(self, ac_device) -> None:
        nameless = make_device(
            device_id="ac-0", label=None, capabilities=AC_CAPS, categories=["AirConditioner"]
        )
        registry = AccessoryRegistry()
        register = MagicMock()

        built = await async_discover(
            [nameless, ac_device], registry, _fake_factory(), register
        )

        assert [a.binding.device_id for a in built] == ["ac-1"]
        register.assert_called_once()

    async def test_stop_stops_every_accessory(self, ac_device, purifier_device) -> None:
        registry = AccessoryRegistry()
        built = await async_discover(
            [ac_device, purifier_device], registry, _fake_factory(), MagicMock()
        )

        await registry.async_stop()

        for accessory in built:
            accessory.async_stop.assert_awaited_once()
