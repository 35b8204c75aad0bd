# custom_components/smartthings_air/registry.py
# Decide which remote devices become accessories and keep their identities.
from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .accessory import BridgedAccessory
from .const import LOGGER, UNSUPPORTED_CATEGORY
from .models import (
    AccessoryBinding,
    AccessoryKind,
    RemoteDevice,
    RestoredAccessory,
)

AccessoryFactory = Callable[[AccessoryBinding, RemoteDevice], BridgedAccessory]
RegisterCallback = Callable[[AccessoryBinding, RemoteDevice], None]


class AccessoryIdentityError(Exception):
    """Device lacks the id or label needed to create an accessory."""


@dataclass(slots=True, frozen=True)
class Classification:
    kind: AccessoryKind | None
    missing: tuple[str, ...]

    @property
    def eligible(self) -> bool:
        return self.kind is not None and not self.missing


def kind_for_device(device: RemoteDevice) -> AccessoryKind | None:
    """Kind named by the device's first category, if it is a supported one."""
    categories = device.categories
    if not categories:
        return None
    try:
        return AccessoryKind(categories[0])
    except ValueError:
        return None


def missing_capabilities(
    device: RemoteDevice, kind: AccessoryKind | None = None
) -> list[str]:
    """Required capabilities of `kind` the device does not declare. Never raises."""
    kind = kind or kind_for_device(device)
    if kind is None:
        return [UNSUPPORTED_CATEGORY]
    present = set(device.capabilities)
    return [cap for cap in kind.required_capabilities if cap not in present]


def classify(device: RemoteDevice) -> Classification:
    kind = kind_for_device(device)
    return Classification(kind, tuple(missing_capabilities(device, kind)))


class AccessoryRegistry:
    """Known accessory identities plus the accessories built for them."""

    def __init__(self) -> None:
        self._restored: list[RestoredAccessory] = []
        self._bindings: dict[str, AccessoryBinding] = {}
        self.accessories: dict[str, BridgedAccessory] = {}

    @property
    def restored(self) -> list[RestoredAccessory]:
        return list(self._restored)

    @property
    def bindings(self) -> dict[str, AccessoryBinding]:
        return dict(self._bindings)

    def async_restore(self, restored: RestoredAccessory) -> None:
        LOGGER.info("Loading accessory from cache: %s", restored.name)
        self._restored.append(restored)

    def find_existing(self, device_id: str) -> AccessoryBinding | RestoredAccessory | None:
        if device_id in self._bindings:
            return self._bindings[device_id]
        for restored in self._restored:
            if restored.accessory_id == device_id:
                return restored
        return None

    @staticmethod
    def create_binding(device: RemoteDevice, kind: AccessoryKind) -> AccessoryBinding:
        if not (device.label and device.device_id):
            raise AccessoryIdentityError("Missing label and id.")
        return AccessoryBinding(
            accessory_id=device.device_id,
            device_id=device.device_id,
            name=device.label,
            kind=kind,
            context={"device": device},
        )

    async def async_bind(
        self,
        device: RemoteDevice,
        kind: AccessoryKind,
        factory: AccessoryFactory,
        register: RegisterCallback,
    ) -> BridgedAccessory:
        """Build the accessory for an eligible device, reusing a known identity."""
        existing = self.find_existing(device.device_id) if device.device_id else None
        if existing is not None:
            LOGGER.info("Restoring existing accessory from cache: %s", device.label)
            binding = AccessoryBinding(
                accessory_id=existing.accessory_id,
                device_id=device.device_id,
                name=device.label or existing.name or device.device_id,
                kind=kind,
                context={**existing.context, "device": device},
            )
        else:
            LOGGER.info("Adding new accessory: %s", device.label)
            binding = self.create_binding(device, kind)

        previous = self.accessories.pop(binding.accessory_id, None)
        if previous is not None:
            await previous.async_stop()

        accessory = factory(binding, device)
        self._bindings[binding.device_id] = binding
        self.accessories[binding.accessory_id] = accessory
        if existing is None:
            register(binding, device)
        return accessory

    async def async_stop(self) -> None:
        for accessory in self.accessories.values():
            await accessory.async_stop()


async def async_discover(
    devices: Iterable[RemoteDevice],
    registry: AccessoryRegistry,
    factory: AccessoryFactory,
    register: RegisterCallback,
) -> list[BridgedAccessory]:
    """One discovery pass. Skips or fails single devices, never the batch."""
    built: list[BridgedAccessory] = []
    for device in devices:
        if not device.components:
            LOGGER.info(
                "Skipping device %s %s: no components. Missing capabilities: %s",
                device.device_id,
                device.label,
                missing_capabilities(device),
            )
            continue

        result = classify(device)
        if not result.eligible:
            LOGGER.info(
                "Skipping device %s %s. Missing capabilities: %s",
                device.device_id,
                device.label,
                list(result.missing),
            )
            continue

        LOGGER.info("Registering device %s", device.device_id)
        try:
            accessory = await registry.async_bind(device, result.kind, factory, register)
        except AccessoryIdentityError as err:
            LOGGER.error("Cannot register device %s: %s", device.device_id, err)
            continue
        built.append(accessory)
    return built
