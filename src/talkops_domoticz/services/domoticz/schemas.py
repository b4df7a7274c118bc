"""Static schema documents published alongside the device snapshot.

Model schemas describe each entity kind to the conversational runtime.
Function schemas declare the actions it may call back.
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# Entity Model Schemas
# =============================================================================

FLOORS_MODEL: dict[str, Any] = {
    "type": "array",
    "description": "Floors of the home.",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "integer", "description": "Unique identifier of the floor."},
            "name": {"type": "string", "description": "Name of the floor."},
        },
    },
}

ROOMS_MODEL: dict[str, Any] = {
    "type": "array",
    "description": "Rooms of the home.",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "integer", "description": "Unique identifier of the room."},
            "name": {"type": "string", "description": "Name of the room."},
            "floor_id": {"type": "integer", "description": "Floor the room belongs to."},
        },
    },
}

LIGHTS_MODEL: dict[str, Any] = {
    "type": "array",
    "description": "Lights of the home.",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "integer", "description": "Unique identifier of the light."},
            "name": {"type": "string", "description": "Name of the light."},
            "description": {
                "type": ["string", "null"],
                "description": "Free-form description of the light.",
            },
            "state": {"type": "string", "enum": ["on", "off"], "description": "Current state."},
            "room_id": {
                "type": ["integer", "null"],
                "description": "Room where the light is located.",
            },
        },
    },
}

SHUTTERS_MODEL: dict[str, Any] = {
    "type": "array",
    "description": "Shutters of the home.",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "integer", "description": "Unique identifier of the shutter."},
            "name": {"type": "string", "description": "Name of the shutter."},
            "description": {
                "type": ["string", "null"],
                "description": "Free-form description of the shutter.",
            },
            "state": {
                "type": "string",
                "enum": ["opened", "closed", "unknown"],
                "description": "Current state. Unknown when stopped mid-course.",
            },
            "room_id": {
                "type": ["integer", "null"],
                "description": "Room where the shutter is located.",
            },
        },
    },
}

SENSORS_MODEL: dict[str, Any] = {
    "type": "array",
    "description": "Sensor readings of the home.",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Name of the sensor."},
            "description": {
                "type": ["string", "null"],
                "description": "Free-form description of the sensor.",
            },
            "type": {
                "type": "string",
                "enum": ["temperature", "humidity", "pressure", "air_quality"],
                "description": "Kind of measured value.",
            },
            "value": {"type": "string", "description": "Measured value."},
            "unit": {"type": "string", "description": "Unit of the measured value."},
            "room_id": {
                "type": ["integer", "null"],
                "description": "Room where the sensor is located.",
            },
        },
    },
}

SCENES_MODEL: dict[str, Any] = {
    "type": "array",
    "description": "Scenes and groups of the home.",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "integer", "description": "Unique identifier of the scene."},
            "name": {"type": "string", "description": "Name of the scene."},
            "state": {
                "type": ["string", "null"],
                "enum": ["enabled", "disabled", None],
                "description": "State of a group. Null for scenes that can only be triggered.",
            },
        },
    },
}

# Key order is part of the published format.
MODEL_SCHEMAS: dict[str, dict[str, Any]] = {
    "floorsModel": FLOORS_MODEL,
    "roomsModel": ROOMS_MODEL,
    "lightsModel": LIGHTS_MODEL,
    "shuttersModel": SHUTTERS_MODEL,
    "sensorsModel": SENSORS_MODEL,
    "scenesModel": SCENES_MODEL,
}

# =============================================================================
# Function Schemas
# =============================================================================


def _ids_parameter(kind: str) -> dict[str, Any]:
    return {
        "type": "array",
        "description": f"The identifiers of the {kind} to update.",
        "items": {"type": "integer"},
    }


UPDATE_LIGHTS_FUNCTION: dict[str, Any] = {
    "name": "update_lights",
    "description": "Turn on or off one or more lights.",
    "parameters": {
        "type": "object",
        "properties": {
            "action": {
                "type": "string",
                "enum": ["On", "Off", "Toggle"],
                "description": "The action to apply.",
            },
            "ids": _ids_parameter("lights"),
        },
        "required": ["action", "ids"],
    },
}

UPDATE_SCENES_FUNCTION: dict[str, Any] = {
    "name": "update_scenes",
    "description": "Enable, disable or toggle one or more scenes.",
    "parameters": {
        "type": "object",
        "properties": {
            "action": {
                "type": "string",
                "enum": ["On", "Off", "Toggle"],
                "description": "The action to apply. Scenes that are not groups only accept On.",
            },
            "ids": _ids_parameter("scenes"),
        },
        "required": ["action", "ids"],
    },
}

UPDATE_SHUTTERS_FUNCTION: dict[str, Any] = {
    "name": "update_shutters",
    "description": "Open, close or stop one or more shutters.",
    "parameters": {
        "type": "object",
        "properties": {
            "action": {
                "type": "string",
                "enum": ["Open", "Close", "Stop"],
                "description": "The action to apply.",
            },
            "ids": _ids_parameter("shutters"),
        },
        "required": ["action", "ids"],
    },
}
