"""Crossref provider implementation."""

from __future__ import annotations

import logging
import re
from typing import Any, ClassVar

from bookmeta.core.models import BookRecord
from bookmeta.core.normalization import as_list, first_of, join_names, page_span, to_str
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractProvider, ProviderConfig

logger = logging.getLogger(__name__)


class CrossrefProvider(AbstractProvider):
    """
    Crossref API provider, strongest for academic monographs.

    API Documentation: https://api.crossref.org/swagger-ui/index.html
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.CROSSREF
    BASE_URL: ClassVar[str] = "https://api.crossref.org"
    PRIORITY_TIER: ClassVar[int] = 2

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)
        # Crossref encourages providing contact email
        self._mailto = self.config.contact_email

    def _get_default_headers(self) -> dict[str, str]:
        headers = super()._get_default_headers()
        if self._mailto:
            headers["User-Agent"] = f"bookmeta/0.1 (mailto:{self._mailto})"
        return headers

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Find the first work registered under an ISBN."""
        params: dict[str, Any] = {"filter": f"isbn:{isbn}", "rows": 1}
        if self._mailto:
            params["mailto"] = self._mailto

        data = await self._get_json("/works", params=params)

        items = ((data or {}).get("message") or {}).get("items") or []
        if not items:
            logger.debug(f"No books found in Crossref for ISBN: {isbn}")
            return None

        return self._parse_work(items[0], isbn)

    def _parse_work(self, work: dict[str, Any], isbn: str) -> BookRecord:
        authors = [
            f"{a.get('given') or ''} {a.get('family') or ''}".strip()
            for a in work.get("author") or []
        ]

        published = work.get("published") or work.get("published-print") or {}
        date_parts = (published.get("date-parts") or [[]])[0]
        published_date = "-".join(str(p) for p in date_parts if p is not None) or None

        abstract = work.get("abstract")
        if abstract:
            # Crossref abstracts are JATS XML fragments
            abstract = re.sub(r"<[^>]+>", "", abstract).strip()

        return BookRecord(
            title=first_of(work.get("title")),
            subtitle=first_of(work.get("subtitle")),
            author=join_names(authors),
            isbn=isbn,
            description=to_str(abstract),
            publisher=to_str(work.get("publisher")) or first_of(work.get("container-title")),
            published_date=published_date,
            page_count=page_span(work.get("page")),
            doi=to_str(work.get("DOI")),
            subjects=as_list(work.get("subject")),
            language=to_str(work.get("language")),
            data_sources=[self.source_name],
        )
