"""ISBNdb provider implementation."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from bookmeta.core.models import BookRecord
from bookmeta.core.normalization import as_list, first_of, join_names, to_int, to_str
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractProvider, ProviderConfig

logger = logging.getLogger(__name__)


class ISBNdbProvider(AbstractProvider):
    """
    ISBNdb API provider.

    API Documentation: https://isbndb.com/isbndb-api-documentation-v2

    Requires API key. Without one the provider is registered but skipped, so
    it never issues a request. Different subscription tiers have different
    base URLs:
    - Default: api2.isbndb.com
    - Premium: api.premium.isbndb.com
    - Pro: api.pro.isbndb.com
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.ISBNDB
    BASE_URL: ClassVar[str] = "https://api2.isbndb.com"
    PRIORITY_TIER: ClassVar[int] = 1
    REQUIRES_API_KEY: ClassVar[bool] = True

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)

    def _get_default_headers(self) -> dict[str, str]:
        headers = super()._get_default_headers()
        if self.config.api_key:
            headers["Authorization"] = self.config.api_key
        return headers

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Look up a book by ISBN."""
        data = await self._get_json(f"/book/{isbn}")

        book = (data or {}).get("book")
        if not book:
            logger.debug(f"No books found in ISBNdb for ISBN: {isbn}")
            return None

        return self._parse_book(book, isbn)

    def _parse_book(self, book: dict[str, Any], isbn: str) -> BookRecord:
        """Parse an ISBNdb book object."""
        dimensions = book.get("dimensions")
        if isinstance(dimensions, dict):
            dimensions = None

        return BookRecord(
            title=book.get("title"),
            author=join_names(book.get("authors")),
            isbn=isbn,
            isbn_10=to_str(book.get("isbn10") or book.get("isbn")),
            isbn_13=to_str(book.get("isbn13")),
            description=to_str(book.get("synopsis") or book.get("overview")),
            excerpt=to_str(book.get("excerpt")),
            publisher=to_str(book.get("publisher")),
            published_date=to_str(book.get("date_published")),
            page_count=to_int(book.get("pages")),
            language=to_str(book.get("language")),
            cover_image_url=to_str(book.get("image")),
            edition=to_str(book.get("edition")),
            subjects=as_list(book.get("subjects")),
            dimensions=to_str(dimensions),
            binding=to_str(book.get("binding")),
            format=to_str(book.get("binding")),
            dewey_decimal=to_str(first_of(book.get("dewey_decimal"))),
            data_sources=[self.source_name],
        )

