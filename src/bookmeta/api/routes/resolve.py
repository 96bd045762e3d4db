"""Resolution endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter

from bookmeta.api.dependencies import MetadataService
from bookmeta.api.schemas import (
    DetectionResponse,
    DetectRequest,
    QuickLookupRequest,
    QuickLookupResponse,
    ResolutionSourceResult,
    ResolveBookRequest,
    ResolveBookResponse,
)
from bookmeta.core.types import ResolutionStatus

router = APIRouter(prefix="/resolve", tags=["resolve"])


@router.post(
    "/book",
    response_model=ResolveBookResponse,
    operation_id="resolveBook",
    summary="Resolve book metadata",
    description="Resolve one ISBN across every provider tier and merge the results.",
)
async def resolve_book(
    request: ResolveBookRequest,
    service: MetadataService,
) -> ResolveBookResponse:
    """Run the full cascade for one identifier."""
    start_time = time.monotonic()

    result = await service.resolve_by_identifier(request.identifier)

    total_duration = (time.monotonic() - start_time) * 1000

    return ResolveBookResponse(
        identifier=request.identifier,
        status=ResolutionStatus.SUCCESS if result.found else ResolutionStatus.NOT_FOUND,
        record=result.record,
        sources_tried=[
            ResolutionSourceResult(
                source=attempt.source,
                status=attempt.status,
                duration_ms=attempt.duration_ms,
                error_message=attempt.error_message,
            )
            for attempt in result.attempts
        ],
        tiers_run=result.tiers_run,
        total_duration_ms=total_duration,
    )


@router.post(
    "/quick",
    response_model=QuickLookupResponse,
    operation_id="quickLookup",
    summary="Quick book lookup",
    description="Look up one ISBN with the two primary providers only.",
)
async def quick_lookup(
    request: QuickLookupRequest,
    service: MetadataService,
) -> QuickLookupResponse:
    """Two-provider lookup."""
    start_time = time.monotonic()

    record = await service.quick_lookup(request.identifier)

    total_duration = (time.monotonic() - start_time) * 1000

    return QuickLookupResponse(
        identifier=request.identifier,
        status=ResolutionStatus.SUCCESS if record else ResolutionStatus.NOT_FOUND,
        record=record,
        total_duration_ms=total_duration,
    )


@router.post(
    "/detect",
    response_model=DetectionResponse,
    operation_id="detectInputType",
    summary="Detect input type",
    description="Detect whether a query is an ISBN or free text.",
)
async def detect_input_type(
    request: DetectRequest,
    service: MetadataService,
) -> DetectionResponse:
    """Detect the input type of a query string."""
    result = service.detect(request.query)

    return DetectionResponse(
        detected_type=result.input_type,
        confidence=result.confidence,
        normalized_value=result.normalized_value,
        is_identifier=result.is_identifier,
        checksum_valid=result.checksum_valid,
    )
