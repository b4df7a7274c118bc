"""Publishing of poll snapshots to the conversational runtime.

Turns a ``Snapshot`` into:
1. Instructions text: a fixed preamble, then either a "no devices" message
   or a fenced YAML dump of the schemas and entities
2. The function schemas worth exposing for the entities that exist

Both outputs replace whatever was published before.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from talkops_domoticz.services.domoticz.schemas import (
    UPDATE_LIGHTS_FUNCTION,
    UPDATE_SCENES_FUNCTION,
    UPDATE_SHUTTERS_FUNCTION,
)

if TYPE_CHECKING:
    from talkops_domoticz.extension import Extension
    from talkops_domoticz.services.domoticz.models import Snapshot

BASE_INSTRUCTIONS = """
You are a home automation assistant, focused solely on managing connected devices in the home.
When asked to calculate an average, **round to the nearest whole number** without explaining the calculation.
"""

DEFAULT_INSTRUCTIONS = """
Currently, no connected devices have been assigned to you.
Your sole task is to ask the user to install one or more connected devices in the home before proceeding.
"""


def dump_document(document: dict[str, Any]) -> str:
    """Serialize the snapshot document as block-style YAML, keys in order."""
    return yaml.safe_dump(
        document,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def render_instructions(snapshot: Snapshot) -> str:
    """Build the instructions text for a snapshot."""
    instructions = [BASE_INSTRUCTIONS]

    if snapshot.is_empty:
        instructions.append(DEFAULT_INSTRUCTIONS)
    else:
        instructions.append("``` yaml")
        instructions.append(dump_document(snapshot.to_document()))
        instructions.append("```")

    return "\n".join(instructions)


def select_function_schemas(snapshot: Snapshot) -> list[dict[str, Any]]:
    """Function schemas for the entity kinds present in the snapshot.

    An empty collection drops its function, same as a missing feature.
    """
    schemas: list[dict[str, Any]] = []
    if snapshot.lights:
        schemas.append(UPDATE_LIGHTS_FUNCTION)
    if snapshot.scenes:
        schemas.append(UPDATE_SCENES_FUNCTION)
    if snapshot.shutters:
        schemas.append(UPDATE_SHUTTERS_FUNCTION)
    return schemas


class Publisher:
    """Pushes snapshots onto the extension."""

    def __init__(self, extension: Extension) -> None:
        self._extension = extension

    def publish(self, snapshot: Snapshot) -> None:
        """Replace the published instructions and function schemas."""
        instructions = render_instructions(snapshot)
        function_schemas = select_function_schemas(snapshot)

        if snapshot.software_version:
            self._extension.set_software_version(snapshot.software_version)
        self._extension.set_instructions(instructions)
        self._extension.set_function_schemas(function_schemas)
