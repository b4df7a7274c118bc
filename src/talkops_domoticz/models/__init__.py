"""talkops-domoticz API models."""

from talkops_domoticz.models.schemas import (
    # Errors
    ErrorDetail,
    ErrorResponse,
    # Extension
    ExtensionManifest,
    FunctionCallRequest,
    FunctionCallResponse,
    FunctionSchemasResponse,
    # Health
    HealthResponse,
    InstructionsResponse,
    ParameterInfo,
    SchedulerStatus,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "ExtensionManifest",
    "FunctionCallRequest",
    "FunctionCallResponse",
    "FunctionSchemasResponse",
    "HealthResponse",
    "InstructionsResponse",
    "ParameterInfo",
    "SchedulerStatus",
]
