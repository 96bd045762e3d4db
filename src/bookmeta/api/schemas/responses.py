"""Response schemas for API endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from bookmeta.api.schemas.base import APIBaseSchema
from bookmeta.core.models import BookRecord
from bookmeta.core.types import InputType, ResolutionStatus


# Detection response
class DetectionResponse(APIBaseSchema):
    """Response for input type detection."""

    detected_type: InputType
    confidence: float
    normalized_value: str | None = None
    is_identifier: bool = False
    checksum_valid: bool = False


# Resolution result
class ResolutionSourceResult(APIBaseSchema):
    """Result from a single provider."""

    source: str
    status: ResolutionStatus
    duration_ms: float | None = None
    error_message: str | None = None


class ResolveBookResponse(APIBaseSchema):
    """Response for a full cascade resolution."""

    identifier: str
    status: ResolutionStatus
    record: BookRecord | None = None
    sources_tried: list[ResolutionSourceResult] = Field(default_factory=list)
    tiers_run: list[int] = Field(default_factory=list)
    total_duration_ms: float


class QuickLookupResponse(APIBaseSchema):
    """Response for a two-provider quick lookup."""

    identifier: str
    status: ResolutionStatus
    record: BookRecord | None = None
    total_duration_ms: float


# Search responses
class SearchBooksResponse(APIBaseSchema):
    """Deduplicated multi-provider search results."""

    query: str
    total: int
    results: list[BookRecord]
    total_duration_ms: float


# Enrichment
class FieldDiffResponse(APIBaseSchema):
    """One field that would change if enrichment were applied."""

    key: str
    label: str
    category: str
    current_value: Any = None
    new_value: Any = None
    is_new_field: bool


class EnrichResponse(APIBaseSchema):
    """Field diffs between a stored record and freshly resolved data."""

    book_title: str | None = None
    diffs: list[FieldDiffResponse] = Field(default_factory=list)
    api_data: BookRecord | None = None
    data_sources: list[str] = Field(default_factory=list)
    error: str | None = None


# Health check
class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    providers: dict[str, Literal["configured", "unconfigured", "disabled"]]
