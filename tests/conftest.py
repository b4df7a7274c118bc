"""Shared fixtures for talkops-domoticz tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from talkops_domoticz.services.domoticz.client import DomoticzClient

BASE_URL = "http://domoticz.test:8080"


# =============================================================================
# Raw Domoticz records
# =============================================================================


@pytest.fixture
def light_record() -> dict[str, Any]:
    return {
        "idx": "12",
        "Name": "Ceiling",
        "Description": "",
        "Type": "Light/Switch",
        "SwitchType": "On/Off",
        "Status": "On",
        "PlanIDs": [0, 3],
    }


@pytest.fixture
def shutter_record() -> dict[str, Any]:
    return {
        "idx": "20",
        "Name": "Living room blinds",
        "Description": "South window",
        "Type": "Light/Switch",
        "SwitchType": "Blinds + Stop",
        "Status": "Closed",
        "PlanIDs": [3],
    }


@pytest.fixture
def thermometer_record() -> dict[str, Any]:
    return {
        "idx": "30",
        "Name": "Weather station",
        "Description": "",
        "Type": "Temp + Humidity + Baro",
        "Temp": 21.5,
        "Humidity": 45,
        "Barometer": 1013,
        "PlanIDs": [0],
    }


@pytest.fixture
def air_quality_record() -> dict[str, Any]:
    return {
        "idx": "40",
        "Name": "CO2",
        "Type": "Air Quality",
        "Data": "42 ppm",
        "PlanIDs": [4],
    }


@pytest.fixture
def domoticz_payloads(
    light_record: dict[str, Any],
    shutter_record: dict[str, Any],
    thermometer_record: dict[str, Any],
    air_quality_record: dict[str, Any],
) -> dict[str, Any]:
    """Responses of a small Domoticz installation, keyed by command."""
    return {
        "getversion": {"status": "OK", "version": "2024.7"},
        "getsettings": {"status": "OK", "TempUnit": 0},
        "getfloorplans": {
            "status": "OK",
            "result": [{"idx": "1", "Name": "Ground floor"}],
        },
        "getfloorplanplans&idx=1": {
            "status": "OK",
            "result": [
                {"idx": "3", "Name": "Living room"},
                {"idx": "4", "Name": "Kitchen"},
            ],
        },
        "getdevices": {
            "status": "OK",
            "result": [light_record, shutter_record, thermometer_record, air_quality_record],
        },
        "getscenes": {
            "status": "OK",
            "result": [
                {"idx": "5", "Name": "Movie", "Type": "Scene", "Status": "Off"},
                {"idx": "6", "Name": "Downstairs", "Type": "Group", "Status": "On"},
            ],
        },
    }


# =============================================================================
# Clients
# =============================================================================


@pytest.fixture
def fake_client(domoticz_payloads: dict[str, Any]) -> AsyncMock:
    """Mocked DomoticzClient serving ``domoticz_payloads``."""
    client = AsyncMock(spec=DomoticzClient)
    client.get_version.return_value = domoticz_payloads["getversion"]
    client.get_settings.return_value = domoticz_payloads["getsettings"]
    client.get_floorplans.return_value = domoticz_payloads["getfloorplans"]
    client.get_floorplan_plans.side_effect = lambda floor_id: domoticz_payloads.get(
        f"getfloorplanplans&idx={floor_id}", {"status": "OK"}
    )
    client.get_devices.return_value = domoticz_payloads["getdevices"]
    client.get_scenes.return_value = domoticz_payloads["getscenes"]
    return client


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests captured by ``mock_domoticz``."""
    return []


@pytest.fixture
def mock_domoticz(
    sent_requests: list[httpx.Request],
) -> Callable[[Callable[[str], Any]], DomoticzClient]:
    """Factory for a DomoticzClient backed by httpx.MockTransport.

    ``respond`` receives the command string (e.g. "switchlight&idx=1&switchcmd=On")
    and returns either a JSON-able payload or a ready httpx.Response.
    """

    def factory(respond: Callable[[str], Any]) -> DomoticzClient:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            command = request.url.query.decode().split("param=", 1)[1]
            result = respond(command)
            if isinstance(result, httpx.Response):
                return result
            return httpx.Response(200, json=result)

        return DomoticzClient(
            base_url=BASE_URL,
            username="admin",
            password="secret",
            transport=httpx.MockTransport(handler),
        )

    return factory
