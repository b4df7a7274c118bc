"""Domoticz integration service.

Provides:
- DomoticzClient for API communication
- Classification of raw device/scene/floorplan records
- Snapshot models and the per-cycle SnapshotBuilder
"""

from talkops_domoticz.services.domoticz.classifier import (
    DeviceKind,
    classify_device,
    classify_floor,
    classify_room,
    classify_scene,
    device_kind,
    room_id_from_plans,
    temperature_unit,
)
from talkops_domoticz.services.domoticz.client import (
    ApplicationError,
    DomoticzClient,
    DomoticzError,
    TransportError,
    is_error_response,
)
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
    Snapshot,
)
from talkops_domoticz.services.domoticz.snapshot import SnapshotBuilder, result_items

__all__ = [
    "ApplicationError",
    "DeviceKind",
    "DomoticzClient",
    "DomoticzError",
    "Floor",
    "Light",
    "LightState",
    "Room",
    "Scene",
    "SceneState",
    "SensorReading",
    "SensorType",
    "Shutter",
    "ShutterState",
    "Snapshot",
    "SnapshotBuilder",
    "TransportError",
    "classify_device",
    "classify_floor",
    "classify_room",
    "classify_scene",
    "device_kind",
    "is_error_response",
    "result_items",
    "room_id_from_plans",
    "temperature_unit",
]
