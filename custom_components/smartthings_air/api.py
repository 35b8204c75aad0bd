# All network I/O + exception mapping for the SmartThings REST API.

from __future__ import annotations

import asyncio
from typing import Any

from aiohttp import ClientError, ClientSession, ClientTimeout

from .const import LOGGER, MAIN_COMPONENT
from .models import RemoteDevice


# ----- Exceptions used by the poller / command executor -----
class SmartThingsError(Exception):
    pass


class SmartThingsAuthError(SmartThingsError):
    pass  # 401 / 403, bad or revoked token


class SmartThingsRateLimitError(SmartThingsError):
    def __init__(self, *args, retry_after: float | None = None):
        super().__init__(*args)
        self.retry_after = retry_after


class SmartThingsServerError(SmartThingsError):
    pass  # 5xx


class SmartThingsCommError(SmartThingsError):
    pass  # timeouts, connection issues, garbage bodies


BASE_URL = "https://api.smartthings.com/v1"
DEVICES_URL = f"{BASE_URL}/devices"
STATUS_URL = f"{BASE_URL}/devices/{{device_id}}/status"
COMMANDS_URL = f"{BASE_URL}/devices/{{device_id}}/commands"

REQUEST_TIMEOUT = ClientTimeout(total=20)


class SmartThingsClient:
    def __init__(self, session: ClientSession, token: str) -> None:
        self._session = session
        self._token = token

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
        }

    async def _request(
        self, method: str, url: str, what: str, payload: dict | None = None
    ) -> Any:
        LOGGER.debug("SmartThings API call: %s %s", method, url)
        try:
            async with self._session.request(
                method,
                url,
                json=payload,
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT,
            ) as resp:
                text = await resp.text()

                if resp.status in (401, 403):
                    raise SmartThingsAuthError(f"Token rejected during {what}")
                if resp.status == 429:
                    ra = resp.headers.get("Retry-After")
                    retry_after = None
                    if ra:
                        try:
                            retry_after = float(ra)
                        except ValueError:
                            retry_after = None
                    raise SmartThingsRateLimitError(
                        f"Rate limited during {what}", retry_after=retry_after
                    )
                if 500 <= resp.status < 600:
                    raise SmartThingsServerError(f"Server error during {what}: {text}")
                if resp.status != 200:
                    raise SmartThingsCommError(
                        f"Unexpected {what} status {resp.status}: {text}"
                    )

                try:
                    return await resp.json()
                except (ValueError, ClientError) as e:
                    # Server said 200 but body isn't JSON
                    raise SmartThingsCommError(
                        f"Invalid JSON from {what}: {text[:200]}"
                    ) from e

        except asyncio.TimeoutError as e:
            raise SmartThingsCommError(f"{what} timeout") from e
        except ClientError as e:
            raise SmartThingsCommError(f"{what} connection error: {e}") from e

    # ---------- Device registry ----------
    async def async_list_devices(self) -> list[RemoteDevice]:
        """Return every device on the account, following `_links.next` pages."""
        devices: list[RemoteDevice] = []
        url: str | None = DEVICES_URL
        while url:
            data = await self._request("GET", url, "device list")
            for item in (data or {}).get("items") or []:
                if isinstance(item, dict):
                    devices.append(RemoteDevice.from_api(item))
            url = (((data or {}).get("_links") or {}).get("next") or {}).get("href")

        LOGGER.debug("Fetched %s devices", len(devices))
        return devices

    async def async_get_status(self, device_id: str) -> dict:
        return await self._request(
            "GET", STATUS_URL.format(device_id=device_id), "status fetch"
        )

    # ---------- Commands ----------
    async def async_execute_command(
        self,
        device_id: str,
        command: str,
        capability: str,
        arguments: list[str | float] | None = None,
        component: str = MAIN_COMPONENT,
    ) -> list[dict]:
        """Send one command and return the per-command `results` list."""
        body: dict[str, Any] = {
            "component": component,
            "capability": capability,
            "command": command,
        }
        if arguments is not None:
            body["arguments"] = list(arguments)

        data = await self._request(
            "POST",
            COMMANDS_URL.format(device_id=device_id),
            f"command {command}",
            payload={"commands": [body]},
        )
        return list((data or {}).get("results") or [])
