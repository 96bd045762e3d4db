"""Wikidata SPARQL provider implementation."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from bookmeta.core.identifiers import isbn_variants
from bookmeta.core.models import BookRecord
from bookmeta.core.normalization import to_int, to_str
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractProvider, ProviderConfig

logger = logging.getLogger(__name__)

# P212 ISBN-13, P957 ISBN-10, P50 author, P123 publisher, P577 publication
# date, P1104 number of pages, P179 series, P136 genre
SPARQL_TEMPLATE = """
SELECT ?book ?bookLabel ?authorLabel ?publisherLabel ?publicationDate ?pages ?seriesLabel WHERE {{
  {{ ?book wdt:P212 ?isbn13 . FILTER(REPLACE(?isbn13, "-", "") = "{isbn13}") }}
  UNION
  {{ ?book wdt:P957 ?isbn10 . FILTER(REPLACE(?isbn10, "-", "") = "{isbn10}") }}
  OPTIONAL {{ ?book wdt:P50 ?author }}
  OPTIONAL {{ ?book wdt:P123 ?publisher }}
  OPTIONAL {{ ?book wdt:P577 ?publicationDate }}
  OPTIONAL {{ ?book wdt:P1104 ?pages }}
  OPTIONAL {{ ?book wdt:P179 ?series }}
  SERVICE wikibase:label {{ bd:serviceParam wikibase:language "en". }}
}}
LIMIT 1
"""


class WikidataProvider(AbstractProvider):
    """
    Wikidata query service provider (free, no API key required).

    API Documentation: https://query.wikidata.org/
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.WIKIDATA
    BASE_URL: ClassVar[str] = "https://query.wikidata.org"
    PRIORITY_TIER: ClassVar[int] = 2

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)

    def _get_default_headers(self) -> dict[str, str]:
        headers = super()._get_default_headers()
        headers["Accept"] = "application/sparql-results+json"
        return headers

    def build_query(self, isbn: str) -> str:
        isbn10, isbn13 = isbn_variants(isbn)
        return SPARQL_TEMPLATE.format(isbn13=isbn13 or "", isbn10=isbn10 or "")

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Run a SPARQL query matching either ISBN form."""
        data = await self._get_json(
            "/sparql",
            params={"query": self.build_query(isbn), "format": "json"},
        )

        bindings = ((data or {}).get("results") or {}).get("bindings") or []
        if not bindings:
            logger.debug(f"No books found in Wikidata for ISBN: {isbn}")
            return None

        return self._parse_binding(bindings[0], isbn)

    def _parse_binding(self, binding: dict[str, Any], isbn: str) -> BookRecord:
        def value(name: str) -> str | None:
            return to_str((binding.get(name) or {}).get("value"))

        published = value("publicationDate")
        if published and "T" in published:
            published = published.split("T", 1)[0]

        return BookRecord(
            title=value("bookLabel"),
            author=value("authorLabel"),
            publisher=value("publisherLabel"),
            published_date=published,
            page_count=to_int(value("pages")),
            series=value("seriesLabel"),
            isbn=isbn,
            canonical_link=value("book"),
            data_sources=[self.source_name],
        )
