"""Google Books provider implementation."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from bookmeta.core.models import BookRecord, Candidate, SearchHints
from bookmeta.core.normalization import as_list, https_url, join_names, to_int, to_str
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractSearchProvider, ProviderConfig

logger = logging.getLogger(__name__)


class GoogleBooksProvider(AbstractSearchProvider):
    """
    Google Books API provider.

    API Documentation: https://developers.google.com/books/docs/v1/using

    Works without API key but quotas are low. With API key, higher quotas
    are available. Used both for identifier lookups and bulk search.
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.GOOGLE_BOOKS
    BASE_URL: ClassVar[str] = "https://www.googleapis.com/books/v1"
    PRIORITY_TIER: ClassVar[int] = 1

    # Hard ceiling of the volumes endpoint
    MAX_RESULTS: ClassVar[int] = 40

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)
        # API key is optional for Google Books
        self._api_key = self.config.api_key

    def _params(self, **params: Any) -> dict[str, Any]:
        if self._api_key:
            params["key"] = self._api_key
        return params

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Look up a volume by ISBN."""
        data = await self._get_json("/volumes", params=self._params(q=f"isbn:{isbn}"))

        items = (data or {}).get("items") or []
        if not items:
            logger.debug(f"No books found in Google Books for ISBN: {isbn}")
            return None

        record = self._parse_volume(items[0])
        if record is not None:
            record.isbn = isbn
        return record

    async def search(
        self,
        title: str,
        author: str | None = None,
        *,
        limit: int = 40,
        hints: SearchHints | None = None,
    ) -> list[Candidate]:
        """
        Search volumes by title with ``inauthor:``, ``inpublisher:`` and
        ``subject:`` qualifiers. Results without an ISBN are kept.
        """
        query = title
        if author:
            query += f" inauthor:{author}"
        if hints and hints.publisher:
            query += f" inpublisher:{hints.publisher}"
        if hints and hints.subject:
            query += f" subject:{hints.subject}"

        data = await self._get_json(
            "/volumes",
            params=self._params(q=query, maxResults=min(limit, self.MAX_RESULTS)),
        )

        candidates = []
        for item in (data or {}).get("items") or []:
            record = self._parse_volume(item)
            if record is None:
                continue
            candidates.append(
                Candidate(
                    record=record,
                    isbn=record.isbn_13 or record.isbn_10,
                    source_id=item.get("id"),
                )
            )
        return candidates

    def _parse_volume(self, data: dict[str, Any]) -> BookRecord | None:
        """Parse a Google Books volume into a partial record."""
        volume_info = data.get("volumeInfo") or {}
        if not volume_info:
            return None

        identifiers = {
            ident.get("type"): ident.get("identifier")
            for ident in volume_info.get("industryIdentifiers") or []
        }

        image_links = volume_info.get("imageLinks") or {}
        series_info = volume_info.get("seriesInfo") or {}
        sale_info = data.get("saleInfo") or {}

        dimensions = None
        if dims := volume_info.get("dimensions"):
            dimensions = " x ".join(
                str(dims.get(side) or "?") for side in ("height", "width", "thickness")
            )

        return BookRecord(
            title=volume_info.get("title"),
            subtitle=volume_info.get("subtitle"),
            author=join_names(volume_info.get("authors")),
            description=volume_info.get("description"),
            publisher=volume_info.get("publisher"),
            published_date=volume_info.get("publishedDate"),
            page_count=to_int(volume_info.get("pageCount")),
            language=volume_info.get("language"),
            main_category=volume_info.get("mainCategory"),
            categories=as_list(volume_info.get("categories")),
            isbn_13=identifiers.get("ISBN_13"),
            isbn_10=identifiers.get("ISBN_10"),
            issn=identifiers.get("ISSN"),
            google_books_id=data.get("id"),
            format=volume_info.get("printType"),
            average_rating=volume_info.get("averageRating"),
            ratings_count=volume_info.get("ratingsCount"),
            cover_image_url=https_url(image_links.get("thumbnail")),
            preview_link=volume_info.get("previewLink"),
            info_link=volume_info.get("infoLink"),
            canonical_link=volume_info.get("canonicalVolumeLink"),
            buy_link=sale_info.get("buyLink"),
            dimensions=dimensions,
            series=series_info.get("seriesName"),
            volume_number=to_str(series_info.get("bookDisplayNumber")),
            data_sources=[self.source_name],
        )
