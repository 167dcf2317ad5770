import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from pulse.application.api.v1.errors import map_pulse_error
from pulse.application.api.v1.routes import admin, auth, health, projects, records
from pulse.application.di import create_container
from pulse.config import Config, configure_logging
from pulse.domain.shared.authorization.startup import validate_all_handlers
from pulse.domain.shared.error import PulseError
from pulse.infrastructure.persistence.database import create_tables
from pulse.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.database.auto_create:
        engine = await container.get(AsyncEngine)
        await create_tables(engine)

    yield

    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting Pulse server: %s v%s", config.server.name, config.server.version)

    # Validate all handlers have authorization declarations (fail fast)
    validate_all_handlers()

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.configure(
        service_name=config.telemetry.service_name,
        service_version=config.server.version,
        send_to_logfire=config.telemetry.send_to_logfire,
        console=False,
    )
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config)
    setup_dishka(container, app_instance)

    app_instance.include_router(health.router, prefix="/api")
    app_instance.include_router(auth.router, prefix="/api")
    app_instance.include_router(admin.router, prefix="/api")
    app_instance.include_router(projects.router, prefix="/api")
    app_instance.include_router(records.router, prefix="/api")

    # Global Pulse error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(PulseError)
    async def pulse_error_handler(request: Request, exc: PulseError):
        http_exc = map_pulse_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance
