"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookmeta import __version__
from bookmeta.api.routes import enrich_router, health_router, resolve_router, search_router
from bookmeta.api.schemas import APIError, ErrorDetail
from bookmeta.config import get_settings
from bookmeta.core.exceptions import BookmetaError, ValidationError
from bookmeta.resolution.registry import ProviderRegistry
from bookmeta.services.resolution import BookMetadataService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Set the root log level from settings."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Builds the provider registry and service on startup and closes every
    provider HTTP client on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("Initializing provider registry...")
    app.state.provider_registry = ProviderRegistry.from_settings(settings)
    app.state.metadata_service = BookMetadataService(app.state.provider_registry, settings)

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")

    if hasattr(app.state, "provider_registry"):
        await app.state.provider_registry.close_all()

    logger.info("Application shutdown complete")


def _error_response(status_code: int, code: str, exc: BookmetaError) -> JSONResponse:
    body = APIError(error=ErrorDetail(code=code, message=exc.message, details=exc.details or None))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Map input validation failures to 400."""
    return _error_response(status.HTTP_400_BAD_REQUEST, "validation_error", exc)


async def bookmeta_error_handler(request: Request, exc: BookmetaError) -> JSONResponse:
    """Any other library error is a server-side failure."""
    logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}: {exc.message}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", exc)


def create_app(
    *,
    title: str = "Bookmeta API",
    description: str = "Book metadata resolution and aggregation API",
    version: str = __version__,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Configure CORS
    if cors_origins is None:
        cors_origins = get_settings().cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(BookmetaError, bookmeta_error_handler)

    # Register routes
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(resolve_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")
    app.include_router(enrich_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()
