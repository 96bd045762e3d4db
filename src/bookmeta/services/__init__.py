"""Service layer for orchestrating business logic."""

from bookmeta.services.enrichment import EnrichmentResult, FieldDiff, enrich_book
from bookmeta.services.resolution import BookMetadataService

__all__ = [
    "BookMetadataService",
    "EnrichmentResult",
    "FieldDiff",
    "enrich_book",
]
