"""Action functions exposed to the conversational runtime.

Three batch commands:
- update_lights: On/Off/Toggle lights (``switchlight``)
- update_shutters: Open/Close/Stop blinds (``switchlight``)
- update_scenes: On/Off/Toggle scenes and groups (``switchscene``)

Ids are switched one after the other. The first failure stops the batch and
the ids already switched stay switched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from talkops_domoticz.services import metrics
from talkops_domoticz.services.domoticz.client import ApplicationError, TransportError

if TYPE_CHECKING:
    from talkops_domoticz.services.domoticz.client import DomoticzClient

logger = structlog.get_logger()

DONE = "Done."

# Progress phrases for shutter actions
SHUTTER_PROGRESS = {
    "open": "opening.",
    "close": "closing.",
    "stop": "stopping.",
}


class SwitchCommand(str, Enum):
    """Domoticz command used to switch a device."""

    LIGHT = "switchlight"
    SCENE = "switchscene"


class ActionErrorKind(str, Enum):
    """Why a batch stopped."""

    TRANSPORT = "transport"
    BAD_REQUEST = "bad_request"


@dataclass
class ActionResult:
    """Outcome of a batch of switch commands."""

    success: bool
    message: str
    error: ActionErrorKind | None = None
    processed_ids: list[int] = field(default_factory=list)
    failed_id: int | None = None


def shutter_progress(action: str) -> str:
    """Progress phrase for a shutter action (e.g., "Stop" -> "stopping.")."""
    token = action.strip().lower()
    return SHUTTER_PROGRESS.get(token, f"{token}ing.")


class ActionExecutor:
    """Runs action functions against the Domoticz controller."""

    def __init__(self, client: DomoticzClient) -> None:
        self._client = client

    async def execute(
        self,
        command: SwitchCommand,
        action: str,
        ids: list[int],
        success_message: str = DONE,
    ) -> ActionResult:
        """Switch each id in turn, stopping at the first failure.

        Args:
            command: Switch command to send
            action: Action token forwarded verbatim (e.g., "On", "Stop")
            ids: Device or scene ids
            success_message: Message returned when every id succeeded

        Returns:
            ActionResult describing the batch.
        """
        processed: list[int] = []
        for idx in ids:
            try:
                if command is SwitchCommand.SCENE:
                    await self._client.switch_scene(idx, action)
                else:
                    await self._client.switch_light(idx, action)
            except TransportError as e:
                logger.warning(
                    "Domoticz command failed",
                    command=command.value,
                    idx=idx,
                    action=action,
                    error=str(e),
                )
                return ActionResult(
                    success=False,
                    message=f"Error: {e}",
                    error=ActionErrorKind.TRANSPORT,
                    processed_ids=processed,
                    failed_id=idx,
                )
            except ApplicationError:
                logger.warning(
                    "Domoticz rejected command",
                    command=command.value,
                    idx=idx,
                    action=action,
                )
                return ActionResult(
                    success=False,
                    message=f"Error: {ActionErrorKind.BAD_REQUEST.value}",
                    error=ActionErrorKind.BAD_REQUEST,
                    processed_ids=processed,
                    failed_id=idx,
                )
            processed.append(idx)

        logger.info("Domoticz command applied", command=command.value, action=action, ids=processed)
        return ActionResult(success=True, message=success_message, processed_ids=processed)

    async def update_lights(self, action: str, ids: list[int]) -> str:
        """Turn lights on or off."""
        result = await self.execute(SwitchCommand.LIGHT, action, ids)
        metrics.record_action("update_lights", result.success)
        return result.message

    async def update_shutters(self, action: str, ids: list[int]) -> str:
        """Open, close or stop shutters."""
        result = await self.execute(
            SwitchCommand.LIGHT, action, ids, success_message=shutter_progress(action)
        )
        metrics.record_action("update_shutters", result.success)
        return result.message

    async def update_scenes(self, action: str, ids: list[int]) -> str:
        """Enable, disable or toggle scenes."""
        result = await self.execute(SwitchCommand.SCENE, action, ids)
        metrics.record_action("update_scenes", result.success)
        return result.message

    def functions(self) -> list:
        """Action functions to register on the extension."""
        return [self.update_lights, self.update_shutters, self.update_scenes]
