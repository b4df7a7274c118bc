"""Snapshot accumulation for one poll cycle.

A ``SnapshotBuilder`` is local to a cycle. Entities are added as they are
fetched and classified, and ``build()`` freezes them into a ``Snapshot``
only once every fetch succeeded.
"""

from __future__ import annotations

from typing import Any

from talkops_domoticz.services.domoticz.classifier import (
    classify_device,
    classify_floor,
    classify_room,
    classify_scene,
)
from talkops_domoticz.services.domoticz.models import (
    Floor,
    Light,
    Room,
    Scene,
    SensorReading,
    Shutter,
    Snapshot,
)
from talkops_domoticz.services.domoticz.schemas import MODEL_SCHEMAS


def result_items(payload: Any) -> list[dict[str, Any]]:
    """Extract the ``result`` list of a read command.

    Domoticz omits ``result`` entirely when there is nothing to report, so a
    missing or malformed ``result`` means "no items".
    """
    if not isinstance(payload, dict):
        return []
    items = payload.get("result")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


class SnapshotBuilder:
    """Collects the entities of one cycle."""

    def __init__(self, schemas: dict[str, Any] | None = None) -> None:
        self._schemas = dict(MODEL_SCHEMAS if schemas is None else schemas)
        self._floors: list[Floor] = []
        self._rooms: list[Room] = []
        self._lights: list[Light] = []
        self._shutters: list[Shutter] = []
        self._sensors: list[SensorReading] = []
        self._scenes: list[Scene] = []
        self._software_version: str | None = None
        self._temperature_unit = "°C"

    def set_software_version(self, version: str | None) -> None:
        self._software_version = version

    def set_temperature_unit(self, unit: str) -> None:
        self._temperature_unit = unit

    def add_floor(self, record: dict[str, Any]) -> Floor:
        floor = classify_floor(record)
        self._floors.append(floor)
        return floor

    def add_room(self, record: dict[str, Any], floor_id: int) -> Room:
        room = classify_room(record, floor_id)
        self._rooms.append(room)
        return room

    def add_device(self, record: dict[str, Any]) -> None:
        """Classify a device record and file each entity it yields."""
        for entity in classify_device(record, self._temperature_unit):
            if isinstance(entity, Light):
                self._lights.append(entity)
            elif isinstance(entity, Shutter):
                self._shutters.append(entity)
            else:
                self._sensors.append(entity)

    def add_scene(self, record: dict[str, Any]) -> Scene:
        scene = classify_scene(record)
        self._scenes.append(scene)
        return scene

    def build(self) -> Snapshot:
        """Freeze the collected entities into a snapshot."""
        return Snapshot(
            floors=tuple(self._floors),
            rooms=tuple(self._rooms),
            lights=tuple(self._lights),
            shutters=tuple(self._shutters),
            sensors=tuple(self._sensors),
            scenes=tuple(self._scenes),
            schemas=self._schemas,
            software_version=self._software_version,
        )
