"""Pydantic models for talkops-domoticz API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# =============================================================================
# Health & Status
# =============================================================================


class SchedulerStatus(BaseModel):
    """Poll scheduler status."""

    running: bool
    state: str = Field(..., description="idle or running")
    interval_seconds: float
    cycles_succeeded: int = 0
    cycles_failed: int = 0
    last_success: datetime | None = None
    last_error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="healthy, starting, or degraded")
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    domoticz_version: str | None = None
    scheduler: SchedulerStatus | None = None


# =============================================================================
# Extension
# =============================================================================


class ParameterInfo(BaseModel):
    """Startup parameter declared by the extension."""

    name: str
    description: str = ""
    default_value: str | None = None
    possible_values: list[str] = Field(default_factory=list)
    type: str = "text"
    is_set: bool = False


class ExtensionManifest(BaseModel):
    """Extension metadata read by the host runtime."""

    name: str
    website: str = ""
    category: str = ""
    icon: str = ""
    features: list[str] = Field(default_factory=list)
    installation_steps: list[str] = Field(default_factory=list)
    parameters: list[ParameterInfo] = Field(default_factory=list)
    software_version: str | None = None
    functions: list[str] = Field(default_factory=list)


class InstructionsResponse(BaseModel):
    """Currently published instructions."""

    instructions: str


class FunctionSchemasResponse(BaseModel):
    """Currently published function schemas."""

    function_schemas: list[dict[str, Any]] = Field(default_factory=list)


class FunctionCallRequest(BaseModel):
    """Arguments of an action function call."""

    action: str = Field(..., min_length=1, description="Action token, e.g. On, Off, Open, Stop")
    ids: list[int] = Field(default_factory=list, description="Target device or scene ids")

    class Config:
        json_schema_extra = {"example": {"action": "On", "ids": [12, 13]}}


class FunctionCallResponse(BaseModel):
    """Result of an action function call."""

    name: str
    output: str


# =============================================================================
# Errors
# =============================================================================


class ErrorDetail(BaseModel):
    """Error detail information."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: ErrorDetail
