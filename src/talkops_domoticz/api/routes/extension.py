"""Extension API routes.

Endpoints read by the host conversational runtime:
- Extension manifest and parameters
- Published instructions and function schemas
- Action function invocation
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Request

from talkops_domoticz.extension import Extension
from talkops_domoticz.models.schemas import (
    ExtensionManifest,
    FunctionCallRequest,
    FunctionCallResponse,
    FunctionSchemasResponse,
    InstructionsResponse,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/extension", tags=["Extension"])


def get_extension(request: Request) -> Extension:
    """Get the extension from app state."""
    extension = getattr(request.app.state, "extension", None)
    if extension is None:
        raise HTTPException(status_code=503, detail="Extension not initialized")
    return extension


@router.get("", response_model=ExtensionManifest)
async def get_manifest(request: Request) -> ExtensionManifest:
    """Extension metadata, parameters and reported Domoticz version."""
    extension = get_extension(request)
    return ExtensionManifest(**extension.manifest(), functions=extension.function_names)


@router.get("/instructions", response_model=InstructionsResponse)
async def get_instructions(request: Request) -> InstructionsResponse:
    """Instructions published by the last successful poll cycle."""
    extension = get_extension(request)
    return InstructionsResponse(instructions=extension.instructions)


@router.get("/functions", response_model=FunctionSchemasResponse)
async def get_function_schemas(request: Request) -> FunctionSchemasResponse:
    """Function schemas for the device kinds currently present."""
    extension = get_extension(request)
    return FunctionSchemasResponse(function_schemas=extension.function_schemas)


@router.post("/functions/{name}", response_model=FunctionCallResponse)
async def call_function(
    request: Request,
    name: str,
    body: FunctionCallRequest,
) -> FunctionCallResponse:
    """Invoke an action function (update_lights, update_shutters, update_scenes)."""
    extension = get_extension(request)
    if name not in extension.function_names:
        raise HTTPException(status_code=404, detail=f"Function {name} not found")

    output = await extension.call_function(name, {"action": body.action, "ids": body.ids})
    logger.info("Function called", function=name, action=body.action, ids=body.ids, output=output)
    return FunctionCallResponse(name=name, output=output)
