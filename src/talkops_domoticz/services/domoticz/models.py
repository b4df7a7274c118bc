"""Domoticz domain models.

Normalized records built from the controller's JSON payloads:
- Floors and rooms (floorplans and their plans)
- Lights and shutters (switch devices)
- Sensor readings (temperature/humidity/pressure and air quality devices)
- Scenes and groups

Every record is rebuilt from scratch on each poll cycle; nothing here is
tracked across cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LightState(str, Enum):
    """Light switch state."""

    ON = "on"
    OFF = "off"


class ShutterState(str, Enum):
    """Shutter (blinds) state."""

    OPENED = "opened"
    CLOSED = "closed"
    UNKNOWN = "unknown"  # Stopped mid-course


class SensorType(str, Enum):
    """Kind of value carried by a sensor reading."""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    PRESSURE = "pressure"
    AIR_QUALITY = "air_quality"


class SceneState(str, Enum):
    """State of a togglable group. Plain scenes have no state."""

    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass(frozen=True)
class Floor:
    """Domoticz floorplan."""

    id: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Room:
    """Domoticz plan (room) attached to a floorplan."""

    id: int
    name: str
    floor_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "floor_id": self.floor_id}


@dataclass(frozen=True)
class Light:
    """On/Off switch device."""

    id: int
    name: str
    state: LightState
    description: str | None = None
    room_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "state": self.state.value,
            "room_id": self.room_id,
        }


@dataclass(frozen=True)
class Shutter:
    """Blinds device, with or without stop support."""

    id: int
    name: str
    state: ShutterState
    description: str | None = None
    room_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "state": self.state.value,
            "room_id": self.room_id,
        }


@dataclass(frozen=True)
class SensorReading:
    """One value reported by a sensor device.

    A single device can produce several readings in the same cycle
    (temperature, humidity and pressure). Readings carry no id because the
    controller reports values per device, not per reading.
    """

    name: str
    type: SensorType
    value: str
    unit: str
    description: str | None = None
    room_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "value": self.value,
            "unit": self.unit,
            "room_id": self.room_id,
        }


@dataclass(frozen=True)
class Scene:
    """Scene or group. Only groups can be enabled/disabled."""

    id: int
    name: str
    state: SceneState | None = None

    @property
    def is_togglable(self) -> bool:
        """Groups carry a state, plain scenes only trigger."""
        return self.state is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "state": self.state.value if self.state else None,
        }


@dataclass(frozen=True)
class Snapshot:
    """Everything classified during one poll cycle, plus the static schemas.

    Published as a whole; a new snapshot replaces the previous one and is
    never merged with it.
    """

    floors: tuple[Floor, ...] = ()
    rooms: tuple[Room, ...] = ()
    lights: tuple[Light, ...] = ()
    shutters: tuple[Shutter, ...] = ()
    sensors: tuple[SensorReading, ...] = ()
    scenes: tuple[Scene, ...] = ()
    schemas: dict[str, Any] = field(default_factory=dict)
    software_version: str | None = None

    @property
    def is_empty(self) -> bool:
        """True when there is no device at all to talk about.

        Floors and rooms alone are not devices.
        """
        return not (self.lights or self.shutters or self.sensors or self.scenes)

    def counts(self) -> dict[str, int]:
        """Number of entities per kind."""
        return {
            "floors": len(self.floors),
            "rooms": len(self.rooms),
            "lights": len(self.lights),
            "shutters": len(self.shutters),
            "sensors": len(self.sensors),
            "scenes": len(self.scenes),
        }

    def to_document(self) -> dict[str, Any]:
        """Mapping dumped into the instructions: schemas first, then data."""
        document: dict[str, Any] = dict(self.schemas)
        document["floors"] = [f.to_dict() for f in self.floors]
        document["rooms"] = [r.to_dict() for r in self.rooms]
        document["lights"] = [light.to_dict() for light in self.lights]
        document["shutters"] = [s.to_dict() for s in self.shutters]
        document["sensors"] = [s.to_dict() for s in self.sensors]
        document["scenes"] = [s.to_dict() for s in self.scenes]
        return document
