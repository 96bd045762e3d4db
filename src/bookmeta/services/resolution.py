"""Book metadata service exposing the public resolution operations."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from bookmeta.core.exceptions import ValidationError
from bookmeta.core.models import BookRecord, SearchHints
from bookmeta.core.types import ProgressCallback
from bookmeta.detection.identifier import DetectionResult, IdentifierDetector
from bookmeta.resolution.cascade import CascadeConfig, CascadeResult
from bookmeta.services.enrichment import EnrichmentResult, enrich_book

if TYPE_CHECKING:
    from bookmeta.config import BookmetaSettings
    from bookmeta.resolution.aggregator import MultiResultAggregator
    from bookmeta.resolution.cascade import CascadeResolver
    from bookmeta.resolution.fast import FastDualLookup
    from bookmeta.resolution.registry import ProviderRegistry

logger = logging.getLogger(__name__)


class BookMetadataService:
    """
    Service for resolving and searching book metadata.

    Wraps the provider registry with the two public operations:
    1. ``resolve_by_identifier``: full-coverage cascade for one ISBN
    2. ``search_multiple``: deduplicated candidates for free text

    plus a quick two-provider lookup and record enrichment.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        settings: BookmetaSettings | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            registry: Registry of configured providers
            settings: Application settings; defaults apply when omitted
        """
        self._registry = registry
        self._detector = IdentifierDetector()

        if settings is not None:
            cascade_config = CascadeConfig(provider_timeout=settings.provider_timeout)
            limits = {
                "limit": settings.bulk_search_limit,
                "edition_limit": settings.edition_limit,
                "max_results": settings.max_search_results,
            }
        else:
            cascade_config = CascadeConfig()
            limits = {}

        self._cascade: CascadeResolver = registry.cascade(cascade_config)
        self._fast: FastDualLookup = registry.fast_lookup()
        self._aggregator: MultiResultAggregator = registry.aggregator(**limits)

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def detect(self, query: str) -> DetectionResult:
        """Classify a query without resolving it."""
        return self._detector.detect(query)

    def _require_identifier(self, identifier: str) -> str:
        isbn = self._detector.detect_identifier(identifier)
        if isbn is None:
            raise ValidationError(
                message=f"Not an ISBN: {identifier!r}",
                details={"identifier": identifier},
            )
        return isbn

    async def resolve_by_identifier(
        self,
        identifier: str,
        on_progress: ProgressCallback | None = None,
    ) -> CascadeResult:
        """
        Resolve one ISBN across every provider tier.

        Args:
            identifier: ISBN-10 or ISBN-13, hyphens and spaces allowed
            on_progress: Optional sink called with (index, total, provider name)

        Returns:
            Cascade result; ``record`` is ``None`` when no provider had data

        Raises:
            ValidationError: If ``identifier`` is not 10 or 13 digits
        """
        isbn = self._require_identifier(identifier)
        start = time.monotonic()

        result = await self._cascade.resolve(isbn, on_progress)

        duration = time.monotonic() - start
        logger.info(f"Book resolution completed in {duration:.2f}s: {isbn}")
        return result

    async def quick_lookup(self, identifier: str) -> BookRecord | None:
        """Two-provider lookup for one ISBN."""
        isbn = self._require_identifier(identifier)
        start = time.monotonic()

        record = await self._fast.lookup(isbn)

        duration = time.monotonic() - start
        logger.info(f"Quick lookup completed in {duration:.2f}s: {isbn}")
        return record

    async def search_multiple(
        self,
        query: str,
        on_progress: ProgressCallback | None = None,
        hints: SearchHints | None = None,
    ) -> list[BookRecord]:
        """
        Search for every plausible match of a free-text query.

        Args:
            query: ISBN, ``Title by Author`` or text with ``field: value`` hints
            on_progress: Optional sink called with (stage, total, status)
            hints: Caller filters; values parsed from ``query`` take precedence

        Returns:
            Deduplicated records, at most the configured maximum
        """
        if not query or not query.strip():
            logger.debug("Empty search query, nothing to search")
            return []

        start = time.monotonic()

        results = await self._aggregator.search(query, on_progress, hints)

        duration = time.monotonic() - start
        logger.info(f"Search completed in {duration:.2f}s with {len(results)} results: {query}")
        return results

    async def enrich(
        self,
        book: BookRecord,
        on_progress: ProgressCallback | None = None,
    ) -> EnrichmentResult:
        """Resolve fresh data for ``book`` and return per-field diffs."""
        start = time.monotonic()

        result = await enrich_book(book, self._cascade, self._aggregator, on_progress)

        duration = time.monotonic() - start
        logger.info(f"Enrichment completed in {duration:.2f}s: {book.title}")
        return result
