# custom_components/smartthings_air/executor.py
# Optimistic write, then resync on failure.
from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from .adapter import StatusAdapter
from .api import SmartThingsError
from .poller import StatusCache

_LOGGER = logging.getLogger(__name__)


class WriteState(StrEnum):
    IDLE = "idle"
    WRITING = "writing"
    COMMITTED = "committed"
    REVERTING = "reverting"


class CommandExecutor:
    """Runs user writes against one accessory.

    Each targeted field moves `IDLE -> WRITING -> COMMITTED` on success or
    `WRITING -> REVERTING -> IDLE` on failure. A failed command is never
    undone explicitly: the single corrective refresh replaces the record.

    Commands and scheduled polls are not serialized. A poll that was already
    in flight when a command commits can land afterwards and overwrite the
    optimistic value with the pre-command state until the next poll.
    """

    def __init__(self, name: str, adapter: StatusAdapter, cache: StatusCache) -> None:
        self.name = name
        self._adapter = adapter
        self._cache = cache
        self._states: dict[str, WriteState] = {}

    def state(self, field: str) -> WriteState:
        return self._states.get(field, WriteState.IDLE)

    async def async_execute(
        self,
        field: str,
        value: Any,
        command: str,
        capability: str,
        arguments: list[str | float] | None = None,
    ) -> bool:
        """Send the command and mirror `value` into `field` if it went through."""
        self._states[field] = WriteState.WRITING
        try:
            await self._adapter.async_execute_main_command(command, capability, arguments)
        except SmartThingsError as err:
            _LOGGER.error("Cannot set %s on %s: %s", field, self.name, err)
            self._states[field] = WriteState.REVERTING
            await self._cache.async_refresh()
            self._states[field] = WriteState.IDLE
            return False

        self._cache.async_set_field(field, value)
        self._states[field] = WriteState.COMMITTED
        return True
