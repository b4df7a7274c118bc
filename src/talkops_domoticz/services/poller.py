"""Poll scheduler for the Domoticz device snapshot.

Runs the fetch -> classify -> build -> publish cycle once at bootstrap and
then every ``interval`` seconds for the lifetime of the process.

A cycle is all-or-nothing: entities accumulate in a local builder and are
published only after every fetch succeeded. A failed cycle is logged and
counted, the previously published snapshot stays in place, and the loop
carries on with the next cycle after the usual delay.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from talkops_domoticz.services import metrics
from talkops_domoticz.services.domoticz.classifier import temperature_unit
from talkops_domoticz.services.domoticz.snapshot import SnapshotBuilder, result_items

if TYPE_CHECKING:
    from talkops_domoticz.services.domoticz.client import DomoticzClient
    from talkops_domoticz.services.domoticz.models import Snapshot
    from talkops_domoticz.services.publisher import Publisher

logger = structlog.get_logger()

DEFAULT_POLL_INTERVAL = 5.0


class SchedulerState(str, Enum):
    """Poll scheduler state."""

    IDLE = "idle"
    RUNNING = "running"


class PollScheduler:
    """Owns the poll loop and its single pending wait.

    Example:
        scheduler = PollScheduler(client, publisher)
        scheduler.start()  # bootstrap: first cycle runs immediately
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        client: DomoticzClient,
        publisher: Publisher,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._client = client
        self._publisher = publisher
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._state = SchedulerState.IDLE

        self.last_snapshot: Snapshot | None = None
        self.last_success: datetime | None = None
        self.last_error: str | None = None
        self.last_cycle_ok: bool | None = None
        self.cycles_succeeded = 0
        self.cycles_failed = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def running(self) -> bool:
        """Check if the poll loop task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the poll loop (bootstrap hook).

        A loop that is already running is cancelled first, so only one is
        ever alive.
        """
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.create_task(self._run(), name="domoticz-poll")
        logger.info("Domoticz poll loop started", interval=self._interval)

    async def stop(self) -> None:
        """Stop the poll loop and wait for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Domoticz poll loop stopped")

    async def _run(self) -> None:
        while True:
            await self.run_cycle()
            await asyncio.sleep(self._interval)

    async def run_cycle(self) -> bool:
        """Run one full cycle.

        Returns:
            True if a new snapshot was published, False if the cycle failed.
        """
        self._state = SchedulerState.RUNNING
        start = time.perf_counter()
        try:
            snapshot = await self._collect()
            self._publisher.publish(snapshot)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.cycles_failed += 1
            self.last_error = str(e) or type(e).__name__
            self.last_cycle_ok = False
            metrics.record_poll_cycle(False, time.perf_counter() - start)
            logger.error("Domoticz poll cycle failed", error=self.last_error)
            return False
        finally:
            self._state = SchedulerState.IDLE

        self.last_snapshot = snapshot
        self.last_success = datetime.now()
        self.last_error = None
        self.last_cycle_ok = True
        self.cycles_succeeded += 1
        metrics.record_poll_cycle(True, time.perf_counter() - start)
        metrics.update_snapshot_entities(snapshot.counts())
        logger.debug("Domoticz snapshot published", **snapshot.counts())
        return True

    async def _collect(self) -> Snapshot:
        """Fetch everything sequentially and build the snapshot."""
        builder = SnapshotBuilder()

        version = await self._client.get_version()
        if isinstance(version, dict) and version.get("version") is not None:
            builder.set_software_version(str(version["version"]))

        settings = await self._client.get_settings()
        builder.set_temperature_unit(
            temperature_unit(settings if isinstance(settings, dict) else None)
        )

        floorplans = await self._client.get_floorplans()
        for record in result_items(floorplans):
            floor = builder.add_floor(record)
            plans = await self._client.get_floorplan_plans(floor.id)
            for plan in result_items(plans):
                builder.add_room(plan, floor.id)

        devices = await self._client.get_devices()
        for record in result_items(devices):
            builder.add_device(record)

        scenes = await self._client.get_scenes()
        for record in result_items(scenes):
            builder.add_scene(record)

        return builder.build()
