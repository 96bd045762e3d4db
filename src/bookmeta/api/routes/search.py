"""Search endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter

from bookmeta.api.dependencies import MetadataService
from bookmeta.api.schemas import SearchBooksRequest, SearchBooksResponse
from bookmeta.core.exceptions import ValidationError

router = APIRouter(prefix="/search", tags=["search"])


@router.post(
    "/books",
    response_model=SearchBooksResponse,
    operation_id="searchBooks",
    summary="Search books",
    description=(
        "Search the bulk-search providers, deduplicate by ISBN and add older "
        "editions of the top work."
    ),
)
async def search_books(
    request: SearchBooksRequest,
    service: MetadataService,
) -> SearchBooksResponse:
    """Multi-provider book search."""
    if not request.query.strip():
        raise ValidationError(message="Search query must not be empty")

    start_time = time.monotonic()

    results = await service.search_multiple(request.query, hints=request.hints)

    return SearchBooksResponse(
        query=request.query,
        total=len(results),
        results=results,
        total_duration_ms=(time.monotonic() - start_time) * 1000,
    )
