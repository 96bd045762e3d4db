"""Health check endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request

from bookmeta import __version__
from bookmeta.api.dependencies import Providers
from bookmeta.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Report which metadata providers are configured.",
)
async def health_check(registry: Providers) -> HealthResponse:
    """Check API health status."""
    providers: dict[str, Literal["configured", "unconfigured", "disabled"]] = {}

    for descriptor in registry.descriptors:
        provider = descriptor.provider
        if not provider.is_enabled:
            providers[descriptor.name] = "disabled"
        elif provider.is_configured:
            providers[descriptor.name] = "configured"
        else:
            providers[descriptor.name] = "unconfigured"

    usable = sum(1 for state in providers.values() if state == "configured")
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"
    if usable == 0:
        overall_status = "unhealthy"
    elif usable < len(providers):
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        providers=providers,
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    service = getattr(request.app.state, "metadata_service", None)
    return {"ready": service is not None}
