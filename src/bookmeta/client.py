"""Main library client for standalone usage."""

from __future__ import annotations

import logging

from bookmeta.config import BookmetaSettings
from bookmeta.core.models import BookRecord, SearchHints
from bookmeta.core.types import InputType, ProgressCallback
from bookmeta.resolution.cascade import CascadeResult
from bookmeta.resolution.registry import ProviderRegistry
from bookmeta.services.enrichment import EnrichmentResult
from bookmeta.services.resolution import BookMetadataService

logger = logging.getLogger(__name__)


class BookmetaClient:
    """
    Main client for the bookmeta library.

    Provides the resolution and search operations without requiring the
    web server.

    Usage:
        async with BookmetaClient() as client:
            # Full-coverage lookup by ISBN
            result = await client.resolve_book("978-0-14-312774-1")

            # Free-text search with hints
            books = await client.search_books('pub:"Penguin Press" Sapiens')

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(self, settings: BookmetaSettings | None = None) -> None:
        """
        Initialize the client.

        Args:
            settings: Application settings. If not provided, loaded from environment.
        """
        self._settings = settings or BookmetaSettings()
        self._registry: ProviderRegistry | None = None
        self._service: BookMetadataService | None = None

    async def __aenter__(self) -> BookmetaClient:
        """Initialize resources on context entry."""
        self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    def _initialize(self) -> None:
        self._registry = ProviderRegistry.from_settings(self._settings)
        self._service = BookMetadataService(self._registry, self._settings)
        logger.debug(f"Registered providers: {[d.name for d in self._registry.descriptors]}")

    async def close(self) -> None:
        """Close all resources."""
        if self._registry:
            await self._registry.close_all()
            self._registry = None
            self._service = None

    def _ensure_initialized(self) -> BookMetadataService:
        """Ensure client is initialized."""
        if self._service is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with BookmetaClient() as client:'"
            )
        return self._service

    async def resolve_book(
        self,
        identifier: str,
        on_progress: ProgressCallback | None = None,
    ) -> CascadeResult:
        """
        Resolve a book by ISBN across every provider tier.

        Args:
            identifier: ISBN-10 or ISBN-13
            on_progress: Optional sink called with (index, total, provider name)

        Returns:
            Cascade result; ``record`` is ``None`` when nothing was found
        """
        return await self._ensure_initialized().resolve_by_identifier(identifier, on_progress)

    async def quick_lookup(self, identifier: str) -> BookRecord | None:
        """Look up an ISBN with the two fastest providers only."""
        return await self._ensure_initialized().quick_lookup(identifier)

    async def search_books(
        self,
        query: str,
        on_progress: ProgressCallback | None = None,
        hints: SearchHints | None = None,
    ) -> list[BookRecord]:
        """
        Search for books matching a free-text query.

        Args:
            query: ISBN, title, ``Title by Author``, optionally with hints
            on_progress: Optional sink called with (stage, total, status)
            hints: Caller filters; parsed hints take precedence

        Returns:
            Deduplicated records
        """
        return await self._ensure_initialized().search_multiple(query, on_progress, hints)

    async def enrich(
        self,
        book: BookRecord,
        on_progress: ProgressCallback | None = None,
    ) -> EnrichmentResult:
        """Compute field diffs between ``book`` and freshly resolved data."""
        return await self._ensure_initialized().enrich(book, on_progress)

    def detect_input_type(self, query: str) -> tuple[InputType, float]:
        """
        Detect the input type of a query string.

        Args:
            query: The input string to analyze

        Returns:
            Tuple of (input_type, confidence)
        """
        detection = self._ensure_initialized().detect(query)
        return detection.input_type, detection.confidence


# Convenience functions for one-off calls
async def resolve_book(
    identifier: str,
    *,
    settings: BookmetaSettings | None = None,
) -> BookRecord | None:
    """
    Resolve a book (convenience function).

    For multiple resolutions, use BookmetaClient for better performance.
    """
    async with BookmetaClient(settings) as client:
        result = await client.resolve_book(identifier)
        return result.record


async def search_books(
    query: str,
    hints: SearchHints | None = None,
    *,
    settings: BookmetaSettings | None = None,
) -> list[BookRecord]:
    """
    Search for books (convenience function).

    For multiple searches, use BookmetaClient for better performance.
    """
    async with BookmetaClient(settings) as client:
        return await client.search_books(query, hints=hints)
