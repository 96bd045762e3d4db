"""Library of Congress provider implementation."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from bookmeta.core.models import BookRecord
from bookmeta.core.normalization import as_list, first_of, join_names, to_str
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractProvider, ProviderConfig

logger = logging.getLogger(__name__)


class LibraryOfCongressProvider(AbstractProvider):
    """
    Library of Congress JSON search provider (free, no API key required).

    API Documentation: https://www.loc.gov/apis/json-and-yaml/

    The SRU catalogue speaks Z39.50, so the public JSON search API is used
    instead and the first result is taken.
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.LIBRARY_OF_CONGRESS
    BASE_URL: ClassVar[str] = "https://www.loc.gov"
    PRIORITY_TIER: ClassVar[int] = 2

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Search the catalogue for an ISBN."""
        data = await self._get_json(
            "/search/",
            params={"q": isbn, "fo": "json", "at": "results", "c": 150},
        )

        results = (data or {}).get("results") or []
        if not results:
            logger.debug(f"No books found in Library of Congress for ISBN: {isbn}")
            return None

        return self._parse_result(results[0], isbn)

    def _parse_result(self, result: dict[str, Any], isbn: str) -> BookRecord:
        item = result.get("item") or {}
        contributors = result.get("contributor") or []

        return BookRecord(
            title=to_str(result.get("title")),
            author=to_str(first_of(contributors)),
            isbn=isbn,
            published_date=to_str(result.get("date")),
            place_of_publication=to_str(first_of(result.get("location"))),
            publisher=to_str(first_of(item.get("publisher"))),
            description=to_str(first_of(result.get("description"))),
            language=to_str(first_of(result.get("language"))),
            subjects=as_list(result.get("subject")),
            call_number=to_str(first_of(item.get("call_number"))),
            lccn=to_str(first_of(result.get("number_lccn"))),
            notes=join_names(item.get("notes")),
            canonical_link=to_str(result.get("url") or result.get("id")),
            data_sources=[self.source_name],
        )
