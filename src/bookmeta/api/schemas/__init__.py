"""API schema definitions."""

from bookmeta.api.schemas.base import (
    APIBaseSchema,
    APIError,
    ErrorDetail,
)
from bookmeta.api.schemas.requests import (
    DetectRequest,
    EnrichRequest,
    QuickLookupRequest,
    ResolveBookRequest,
    SearchBooksRequest,
)
from bookmeta.api.schemas.responses import (
    DetectionResponse,
    EnrichResponse,
    FieldDiffResponse,
    HealthResponse,
    QuickLookupResponse,
    ResolutionSourceResult,
    ResolveBookResponse,
    SearchBooksResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    # Requests
    "DetectRequest",
    "EnrichRequest",
    "QuickLookupRequest",
    "ResolveBookRequest",
    "SearchBooksRequest",
    # Responses
    "DetectionResponse",
    "EnrichResponse",
    "FieldDiffResponse",
    "HealthResponse",
    "QuickLookupResponse",
    "ResolutionSourceResult",
    "ResolveBookResponse",
    "SearchBooksResponse",
]
