"""Health check API routes."""
from __future__ import annotations

from datetime import datetime

import structlog
from fastapi import APIRouter, Request

from talkops_domoticz import __version__
from talkops_domoticz.models.schemas import HealthResponse, SchedulerStatus

router = APIRouter()
logger = structlog.get_logger()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Basic health check endpoint.

    Healthy once a poll cycle has published a snapshot, degraded while the
    most recent cycle failed, starting before any cycle completed.
    """
    scheduler = getattr(request.app.state, "scheduler", None)
    extension = getattr(request.app.state, "extension", None)

    if scheduler is None or scheduler.last_cycle_ok is None:
        overall_status = "starting"
    elif scheduler.last_cycle_ok:
        overall_status = "healthy"
    else:
        overall_status = "degraded"

    scheduler_status = None
    if scheduler is not None:
        scheduler_status = SchedulerStatus(
            running=scheduler.running,
            state=scheduler.state.value,
            interval_seconds=scheduler.interval,
            cycles_succeeded=scheduler.cycles_succeeded,
            cycles_failed=scheduler.cycles_failed,
            last_success=scheduler.last_success,
            last_error=scheduler.last_error,
        )

    return HealthResponse(
        status=overall_status,
        version=__version__,
        timestamp=datetime.utcnow(),
        domoticz_version=extension.software_version if extension else None,
        scheduler=scheduler_status,
    )


@router.get("/health/live")
async def liveness() -> dict:
    """Kubernetes liveness probe.

    Returns 200 if the service is running.
    """
    return {"status": "alive"}
