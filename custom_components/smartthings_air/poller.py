# custom_components/smartthings_air/poller.py
# Per-accessory status coordinator; seeded record, optimistic single-field writes.
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from homeassistant.config_entries import ConfigEntry  # type: ignore
from homeassistant.core import HomeAssistant  # type: ignore
from homeassistant.helpers.update_coordinator import (  # type: ignore
    DataUpdateCoordinator,
    UpdateFailed,
)

from .adapter import StatusAdapter
from .api import SmartThingsError

_LOGGER = logging.getLogger(__name__)

StatusT = TypeVar("StatusT")


class StatusCache(DataUpdateCoordinator[StatusT]):
    """Holds the last known status record of one accessory.

    Reads are plain attribute access on `data`, which starts out as the seeded
    record. A refresh replaces the record wholesale; a failed refresh leaves it
    untouched. Optimistic writes from the command executor change a single
    field in place.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        name: str,
        adapter: StatusAdapter[StatusT],
        initial: StatusT,
        update_interval: timedelta,
        config_entry: ConfigEntry | None = None,
    ) -> None:
        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=name,
            update_interval=update_interval,
        )
        self.adapter = adapter
        self.data = initial
        self._unsub_poll: Callable[[], None] | None = None

    async def _async_update_data(self) -> StatusT:
        try:
            return await self.adapter.async_get_status()
        except SmartThingsError as err:
            raise UpdateFailed(f"Cannot get {self.name} status: {err}") from err

    def async_set_field(self, field: str, value: Any) -> None:
        """Optimistic single-field update."""
        setattr(self.data, field, value)
        self.async_update_listeners()

    async def async_start(self) -> None:
        """Refresh now, then every `update_interval` until stopped."""
        if self._unsub_poll is not None:
            return
        _LOGGER.info(
            "Update %s status every %s secs",
            self.name,
            self.update_interval.total_seconds(),
        )
        # Polling runs whether or not an entity is subscribed.
        self._unsub_poll = self.async_add_listener(lambda: None)
        await self.async_refresh()

    async def async_stop(self) -> None:
        if self._unsub_poll is not None:
            self._unsub_poll()
            self._unsub_poll = None
        await self.async_shutdown()

    @property
    def running(self) -> bool:
        return self._unsub_poll is not None
