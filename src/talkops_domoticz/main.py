"""talkops-domoticz - Domoticz extension for the TalkOps conversational runtime.

FastAPI application entry point.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from talkops_domoticz import __version__
from talkops_domoticz.config import Settings, get_settings
from talkops_domoticz.extension import create_extension
from talkops_domoticz.models.schemas import ErrorDetail, ErrorResponse
from talkops_domoticz.services.actions import ActionExecutor
from talkops_domoticz.services.domoticz.client import DomoticzClient
from talkops_domoticz.services.metrics import init_metrics
from talkops_domoticz.services.poller import PollScheduler
from talkops_domoticz.services.publisher import Publisher

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# =============================================================================
# Logging Setup
# =============================================================================


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structured logging."""
    settings = settings or get_settings()

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
            if settings.env == "development"
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Also configure standard logging for the service layer and third-party libs
    logging.basicConfig(
        level=logging.getLevelName(settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# =============================================================================
# FastAPI Application
# =============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager.

        Wires the extension to Domoticz and runs its bootstrap, which starts
        the poll loop.
        """
        logger = structlog.get_logger()
        domoticz = settings.domoticz

        # --- Startup ---
        logger.info(
            "Starting talkops-domoticz",
            version=__version__,
            env=settings.env,
            base_url=domoticz.base_url,
        )
        init_metrics(version=__version__, env=settings.env)

        client = DomoticzClient(
            base_url=domoticz.base_url,
            username=domoticz.username,
            password=domoticz.password,
            timeout=domoticz.request_timeout,
        )
        extension = create_extension(domoticz)
        scheduler = PollScheduler(client, Publisher(extension), interval=domoticz.poll_interval)
        executor = ActionExecutor(client)

        extension.set_functions(executor.functions())
        extension.set_bootstrap(scheduler.start)

        app.state.client = client
        app.state.extension = extension
        app.state.scheduler = scheduler

        await extension.bootstrap()

        yield

        # --- Shutdown ---
        logger.info("Shutting down talkops-domoticz")
        await scheduler.stop()
        await client.close()
        logger.info("talkops-domoticz stopped")

    app = FastAPI(
        title="talkops-domoticz",
        description="Domoticz home automation extension for TalkOps",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.env == "development" else None,
        redoc_url="/redoc" if settings.env == "development" else None,
    )

    # Request timing middleware
    @app.middleware("http")
    async def add_timing_header(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Process-Time-Ms"] = f"{elapsed_ms:.2f}"
        return response

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger = structlog.get_logger()
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=ErrorDetail(
                    code="INTERNAL_ERROR",
                    message="An unexpected error occurred",
                    details={"error": str(exc)} if settings.debug else None,
                )
            ).model_dump(mode="json"),
        )

    _register_routes(app)

    return app


def _register_routes(app: FastAPI) -> None:
    """Register API routes."""
    from talkops_domoticz.api.routes import extension, health, metrics

    app.include_router(health.router, tags=["Health"])
    app.include_router(extension.router, prefix="/api/v1")
    app.include_router(metrics.router, tags=["Metrics"])


# Create app instance
app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================


def main() -> None:
    """Run the application via CLI."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "talkops_domoticz.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
