"""Tests for snapshot building and publishing.

Tests cover:
- SnapshotBuilder filing and result extraction
- Instructions rendering (preamble, YAML dump, no-devices fallback)
- Function schema selection
- Publisher writes onto the extension
"""

from __future__ import annotations

from typing import Any

import yaml

from talkops_domoticz.extension import Extension
from talkops_domoticz.services.domoticz.models import (
    Floor,
    Light,
    LightState,
    Room,
    Scene,
    Shutter,
    ShutterState,
    Snapshot,
)
from talkops_domoticz.services.domoticz.schemas import (
    MODEL_SCHEMAS,
    UPDATE_LIGHTS_FUNCTION,
    UPDATE_SCENES_FUNCTION,
    UPDATE_SHUTTERS_FUNCTION,
)
from talkops_domoticz.services.domoticz.snapshot import SnapshotBuilder, result_items
from talkops_domoticz.services.publisher import (
    BASE_INSTRUCTIONS,
    DEFAULT_INSTRUCTIONS,
    Publisher,
    render_instructions,
    select_function_schemas,
)


def _yaml_block(instructions: str) -> dict[str, Any]:
    body = instructions.split("``` yaml\n", 1)[1].rsplit("\n```", 1)[0]
    return yaml.safe_load(body)


# =============================================================================
# Snapshot Builder
# =============================================================================


class TestSnapshotBuilder:
    """Tests for SnapshotBuilder."""

    def test_devices_are_filed_by_kind(
        self,
        light_record: dict[str, Any],
        shutter_record: dict[str, Any],
        thermometer_record: dict[str, Any],
        air_quality_record: dict[str, Any],
    ) -> None:
        builder = SnapshotBuilder()
        for record in (light_record, shutter_record, thermometer_record, air_quality_record):
            builder.add_device(record)

        snapshot = builder.build()

        assert [light.id for light in snapshot.lights] == [12]
        assert [shutter.id for shutter in snapshot.shutters] == [20]
        assert len(snapshot.sensors) == 4
        assert snapshot.schemas == MODEL_SCHEMAS

    def test_temperature_unit_applies_to_devices(self, thermometer_record: dict[str, Any]) -> None:
        builder = SnapshotBuilder()
        builder.set_temperature_unit("°F")
        builder.add_device(thermometer_record)

        assert builder.build().sensors[0].unit == "°F"

    def test_floors_and_rooms(self) -> None:
        builder = SnapshotBuilder()
        floor = builder.add_floor({"idx": "1", "Name": "Ground floor"})
        builder.add_room({"idx": "3", "Name": "Living room"}, floor.id)

        snapshot = builder.build()

        assert snapshot.floors == (Floor(id=1, name="Ground floor"),)
        assert snapshot.rooms == (Room(id=3, name="Living room", floor_id=1),)
        assert snapshot.is_empty

    def test_result_items(self) -> None:
        assert result_items({"status": "OK", "result": [{"idx": "1"}, "junk"]}) == [{"idx": "1"}]
        assert result_items({"status": "OK"}) == []
        assert result_items({"status": "OK", "result": None}) == []
        assert result_items(None) == []


# =============================================================================
# Instructions
# =============================================================================


class TestRenderInstructions:
    """Tests for render_instructions."""

    def test_empty_snapshot_uses_default_text(self) -> None:
        instructions = render_instructions(Snapshot(schemas=MODEL_SCHEMAS))

        assert instructions == BASE_INSTRUCTIONS + "\n" + DEFAULT_INSTRUCTIONS
        assert "```" not in instructions

    def test_floors_only_is_still_empty(self) -> None:
        snapshot = Snapshot(floors=(Floor(id=1, name="Ground"),), schemas=MODEL_SCHEMAS)
        assert DEFAULT_INSTRUCTIONS in render_instructions(snapshot)

    def test_yaml_block(self) -> None:
        snapshot = Snapshot(
            lights=(Light(id=12, name="Ceiling", state=LightState.ON, room_id=3),),
            schemas=MODEL_SCHEMAS,
        )

        instructions = render_instructions(snapshot)

        assert instructions.startswith(BASE_INSTRUCTIONS + "\n``` yaml\n")
        assert instructions.endswith("\n```")
        assert DEFAULT_INSTRUCTIONS not in instructions

        document = _yaml_block(instructions)
        assert list(document) == [
            "floorsModel",
            "roomsModel",
            "lightsModel",
            "shuttersModel",
            "sensorsModel",
            "scenesModel",
            "floors",
            "rooms",
            "lights",
            "shutters",
            "sensors",
            "scenes",
        ]
        assert document["lights"] == [
            {"id": 12, "name": "Ceiling", "description": None, "state": "on", "room_id": 3}
        ]
        assert document["shutters"] == []

    def test_non_ascii_is_kept(self) -> None:
        snapshot = Snapshot(
            lights=(Light(id=1, name="Lumière salon", state=LightState.OFF),),
            schemas=MODEL_SCHEMAS,
        )
        assert "Lumière salon" in render_instructions(snapshot)


# =============================================================================
# Function Schemas
# =============================================================================


class TestSelectFunctionSchemas:
    """Tests for select_function_schemas."""

    def test_none_for_empty_snapshot(self) -> None:
        assert select_function_schemas(Snapshot()) == []

    def test_order_is_lights_scenes_shutters(self) -> None:
        snapshot = Snapshot(
            lights=(Light(id=1, name="L", state=LightState.ON),),
            shutters=(Shutter(id=2, name="S", state=ShutterState.OPENED),),
            scenes=(Scene(id=3, name="Movie"),),
        )
        assert select_function_schemas(snapshot) == [
            UPDATE_LIGHTS_FUNCTION,
            UPDATE_SCENES_FUNCTION,
            UPDATE_SHUTTERS_FUNCTION,
        ]

    def test_only_present_kinds(self) -> None:
        snapshot = Snapshot(shutters=(Shutter(id=2, name="S", state=ShutterState.CLOSED),))
        assert select_function_schemas(snapshot) == [UPDATE_SHUTTERS_FUNCTION]

    def test_function_names(self) -> None:
        assert UPDATE_LIGHTS_FUNCTION["name"] == "update_lights"
        assert UPDATE_SCENES_FUNCTION["name"] == "update_scenes"
        assert UPDATE_SHUTTERS_FUNCTION["name"] == "update_shutters"


# =============================================================================
# Publisher
# =============================================================================


class TestPublisher:
    """Tests for Publisher."""

    def test_publish_replaces_extension_outputs(self) -> None:
        extension = Extension(name="Domoticz")
        publisher = Publisher(extension)
        snapshot = Snapshot(
            lights=(Light(id=1, name="L", state=LightState.ON),),
            schemas=MODEL_SCHEMAS,
            software_version="2024.7",
        )

        publisher.publish(snapshot)

        assert extension.software_version == "2024.7"
        assert "``` yaml" in extension.instructions
        assert extension.function_schemas == [UPDATE_LIGHTS_FUNCTION]

        publisher.publish(Snapshot(schemas=MODEL_SCHEMAS))

        assert extension.instructions == BASE_INSTRUCTIONS + "\n" + DEFAULT_INSTRUCTIONS
        assert extension.function_schemas == []
        # Version is only overwritten when reported
        assert extension.software_version == "2024.7"
