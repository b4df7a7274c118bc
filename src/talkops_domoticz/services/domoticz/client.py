"""Domoticz API client.

Async client for the Domoticz JSON API (``/json.htm``).
Handles:
- HTTP basic authentication
- Command requests (``type=command&param=...``)
- Transport failures (network errors, timeouts, non-2xx statuses)

Read commands return payloads as-is. A write command that fails on the
controller side usually still answers 200 with ``"status": "ERR"``; the
switch helpers turn that into ``ApplicationError``.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from talkops_domoticz.services import metrics

logger = logging.getLogger(__name__)


class DomoticzError(Exception):
    """Base class for Domoticz integration errors."""


class TransportError(DomoticzError):
    """Raised when a request to Domoticz does not produce a usable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApplicationError(DomoticzError):
    """A command answered with ``"status": "ERR"``."""

    def __init__(self, command: str, payload: Any = None) -> None:
        super().__init__(f"Domoticz rejected command: {command}")
        self.command = command
        self.payload = payload


def is_error_response(payload: Any) -> bool:
    """Check whether a command response signals an application error."""
    return isinstance(payload, dict) and payload.get("status") == "ERR"


class DomoticzClient:
    """Async client for the Domoticz JSON API.

    Example:
        async with DomoticzClient(url, "admin", "domoticz") as client:
            devices = await client.get_devices()
            await client.switch_light(12, "On")
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Domoticz client.

        Args:
            base_url: Domoticz base URL (e.g., "http://domoticz:8080")
            username: Username for basic authentication
            password: Password for basic authentication
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        """Get the Domoticz base URL."""
        return self._base_url

    async def __aenter__(self) -> DomoticzClient:
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                auth=httpx.BasicAuth(self._username, self._password),
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Closed Domoticz client for %s", self._base_url)

    async def request(self, command: str) -> Any:
        """Run a Domoticz API command.

        The command is appended verbatim to the query string, so it may carry
        its own parameters (e.g., "switchlight&idx=12&switchcmd=On").

        Args:
            command: Command name with optional extra parameters

        Returns:
            The parsed JSON body.

        Raises:
            TransportError: On network failure, timeout, non-2xx status or a
                body that is not JSON.
        """
        client = self._ensure_client()
        # Label metrics by command name only, not by device id
        command_name = command.split("&", 1)[0]
        start = time.perf_counter()
        status = "error"

        try:
            response = await client.get(f"/json.htm?type=command&param={command}")
            if not response.is_success:
                raise TransportError(
                    f"Domoticz returned status {response.status_code} for {command_name}",
                    status_code=response.status_code,
                )
            try:
                payload = response.json()
            except ValueError as e:
                raise TransportError(
                    f"Invalid JSON from Domoticz for {command_name}: {e}",
                    status_code=response.status_code,
                ) from e
            status = "success"
            return payload
        except httpx.TimeoutException as e:
            raise TransportError(f"Timeout talking to Domoticz ({command_name})") from e
        except httpx.RequestError as e:
            raise TransportError(f"Cannot reach Domoticz ({command_name}): {e}") from e
        finally:
            metrics.record_domoticz_request(command_name, status, time.perf_counter() - start)
            logger.debug("Domoticz %s -> %s", command_name, status)

    # -------------------------------------------------------------------------
    # Read commands (poll cycle)
    # -------------------------------------------------------------------------

    async def get_version(self) -> Any:
        """Get the controller version information."""
        return await self.request("getversion")

    async def get_settings(self) -> Any:
        """Get the controller global settings (temperature unit, ...)."""
        return await self.request("getsettings")

    async def get_floorplans(self) -> Any:
        """Get all floorplans."""
        return await self.request("getfloorplans")

    async def get_floorplan_plans(self, floor_id: int | str) -> Any:
        """Get the plans (rooms) attached to a floorplan."""
        return await self.request(f"getfloorplanplans&idx={floor_id}")

    async def get_devices(self) -> Any:
        """Get all devices visible to the configured user."""
        return await self.request("getdevices")

    async def get_scenes(self) -> Any:
        """Get all scenes and groups."""
        return await self.request("getscenes")

    # -------------------------------------------------------------------------
    # Write commands (actions)
    # -------------------------------------------------------------------------

    async def _command(self, command: str) -> Any:
        payload = await self.request(command)
        if is_error_response(payload):
            raise ApplicationError(command, payload)
        return payload

    async def switch_light(self, idx: int, action: str) -> Any:
        """Send a switch command to a light or blinds device.

        Raises:
            TransportError: If the request fails.
            ApplicationError: If Domoticz answers ``"status": "ERR"``.
        """
        return await self._command(f"switchlight&idx={idx}&switchcmd={action}")

    async def switch_scene(self, idx: int, action: str) -> Any:
        """Send a switch command to a scene or group.

        Raises:
            TransportError: If the request fails.
            ApplicationError: If Domoticz answers ``"status": "ERR"``.
        """
        return await self._command(f"switchscene&idx={idx}&switchcmd={action}")
