"""Enrichment endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from bookmeta.api.dependencies import MetadataService
from bookmeta.api.schemas import EnrichRequest, EnrichResponse, FieldDiffResponse

router = APIRouter(tags=["enrich"])


@router.post(
    "/enrich",
    response_model=EnrichResponse,
    operation_id="enrichBook",
    summary="Enrich a book record",
    description="Resolve fresh metadata for a stored record and return per-field diffs.",
)
async def enrich_book(
    request: EnrichRequest,
    service: MetadataService,
) -> EnrichResponse:
    """Compute enrichment diffs without applying them."""
    result = await service.enrich(request.book)

    return EnrichResponse(
        book_title=result.book_title,
        diffs=[FieldDiffResponse.model_validate(diff) for diff in result.diffs],
        api_data=result.api_data if result.error is None else None,
        data_sources=result.data_sources,
        error=result.error,
    )
