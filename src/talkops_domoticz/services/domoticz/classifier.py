"""Classification of raw Domoticz records into domain entities.

Domoticz describes every device with the same loose record shape. Which
entity (if any) a record becomes depends on its ``SwitchType`` and ``Type``
fields:

- ``On/Off`` switches become lights
- ``Blinds`` and ``Blinds + Stop`` switches become shutters
- ``Temp*`` devices yield up to three readings (temperature, humidity,
  pressure), one per value the device actually reports
- ``Air Quality*`` devices yield one ppm reading
- anything else is ignored
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from talkops_domoticz.services.domoticz.models import (
    Floor,
    Light,
    LightState,
    Room,
    Scene,
    SceneState,
    SensorReading,
    SensorType,
    Shutter,
    ShutterState,
)

logger = logging.getLogger(__name__)

Entity = Light | Shutter | SensorReading

SHUTTER_SWITCH_TYPES = frozenset({"Blinds", "Blinds + Stop"})

# Plan id meaning "not assigned to any room"
UNASSIGNED_PLAN = 0


class DeviceKind(str, Enum):
    """Device taxonomy derived from SwitchType/Type."""

    LIGHT = "light"
    SHUTTER = "shutter"
    THERMOMETER = "thermometer"
    AIR_QUALITY = "air_quality"
    UNSUPPORTED = "unsupported"


def device_kind(record: dict[str, Any]) -> DeviceKind:
    """Decide what a device record represents.

    SwitchType is checked before Type: a switch that also reports a
    temperature is still a switch.
    """
    switch_type = record.get("SwitchType") or ""
    device_type = record.get("Type") or ""

    if switch_type == "On/Off":
        return DeviceKind.LIGHT
    if switch_type in SHUTTER_SWITCH_TYPES:
        return DeviceKind.SHUTTER
    if device_type.startswith("Temp"):
        return DeviceKind.THERMOMETER
    if device_type.startswith("Air Quality"):
        return DeviceKind.AIR_QUALITY
    return DeviceKind.UNSUPPORTED


def room_id_from_plans(plan_ids: Iterable[int | None] | None) -> int | None:
    """Return the first real room a device is assigned to."""
    for plan_id in plan_ids or ():
        if plan_id is not None and plan_id != UNASSIGNED_PLAN:
            return int(plan_id)
    return None


def temperature_unit(settings: dict[str, Any] | None) -> str:
    """Temperature unit configured on the controller."""
    if settings and settings.get("TempUnit") == 1:
        return "°F"
    return "°C"


def format_value(value: Any) -> str:
    """Render a raw numeric value as Domoticz displays it.

    JSON numbers with an integral value come back as "21", not "21.0".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _description(record: dict[str, Any]) -> str | None:
    return record.get("Description") or None


def light_state(status: str | None) -> LightState:
    return LightState.ON if status == "On" else LightState.OFF


def shutter_state(status: str | None) -> ShutterState:
    # Closed wins over Stopped; everything else (including "On"/"Open") is opened
    if status == "Closed":
        return ShutterState.CLOSED
    if status == "Stopped":
        return ShutterState.UNKNOWN
    return ShutterState.OPENED


def _thermometer_readings(
    record: dict[str, Any],
    unit: str,
    room_id: int | None,
) -> list[SensorReading]:
    readings: list[SensorReading] = []
    fields = (
        ("Temp", SensorType.TEMPERATURE, unit),
        ("Humidity", SensorType.HUMIDITY, "%"),
        ("Barometer", SensorType.PRESSURE, "hPa"),
    )
    for key, sensor_type, sensor_unit in fields:
        value = record.get(key)
        if value is None:
            continue
        readings.append(
            SensorReading(
                name=record.get("Name", ""),
                description=_description(record),
                type=sensor_type,
                value=format_value(value),
                unit=sensor_unit,
                room_id=room_id,
            )
        )
    return readings


def classify_device(record: dict[str, Any], temp_unit: str = "°C") -> list[Entity]:
    """Turn one raw device record into zero or more entities.

    Args:
        record: Device record from ``getdevices``
        temp_unit: Unit used for temperature readings

    Returns:
        The entities derived from the record (empty for unsupported devices).
    """
    kind = device_kind(record)
    if kind is DeviceKind.UNSUPPORTED:
        logger.debug("Ignoring device %s (%s)", record.get("idx"), record.get("Type"))
        return []

    room_id = room_id_from_plans(record.get("PlanIDs"))

    if kind is DeviceKind.LIGHT:
        return [
            Light(
                id=int(record["idx"]),
                name=record.get("Name", ""),
                description=_description(record),
                state=light_state(record.get("Status")),
                room_id=room_id,
            )
        ]

    if kind is DeviceKind.SHUTTER:
        return [
            Shutter(
                id=int(record["idx"]),
                name=record.get("Name", ""),
                description=_description(record),
                state=shutter_state(record.get("Status")),
                room_id=room_id,
            )
        ]

    if kind is DeviceKind.THERMOMETER:
        return _thermometer_readings(record, temp_unit, room_id)

    data = record.get("Data")
    if data is None:
        return []
    return [
        SensorReading(
            name=record.get("Name", ""),
            description=_description(record),
            type=SensorType.AIR_QUALITY,
            value=str(data).removesuffix(" ppm"),
            unit="ppm",
            room_id=room_id,
        )
    ]


def classify_floor(record: dict[str, Any]) -> Floor:
    """Floorplan record -> Floor."""
    return Floor(id=int(record["idx"]), name=record.get("Name", ""))


def classify_room(record: dict[str, Any], floor_id: int) -> Room:
    """Floorplan plan record -> Room on the given floor."""
    return Room(id=int(record["idx"]), name=record.get("Name", ""), floor_id=floor_id)


def classify_scene(record: dict[str, Any]) -> Scene:
    """Scene/group record -> Scene.

    Only groups can be switched on and off, so only they carry a state.
    """
    state: SceneState | None = None
    if record.get("Type") == "Group":
        state = SceneState.ENABLED if record.get("Status") == "On" else SceneState.DISABLED
    return Scene(id=int(record["idx"]), name=record.get("Name", ""), state=state)
