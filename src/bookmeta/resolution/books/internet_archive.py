"""Internet Archive provider implementation."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from bookmeta.core.models import BookRecord
from bookmeta.core.normalization import as_list, first_of, join_names, to_str
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractProvider, ProviderConfig

logger = logging.getLogger(__name__)


class InternetArchiveProvider(AbstractProvider):
    """
    Internet Archive advanced search provider (free, no API key required).

    API Documentation: https://archive.org/advancedsearch.php
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.INTERNET_ARCHIVE
    BASE_URL: ClassVar[str] = "https://archive.org"
    PRIORITY_TIER: ClassVar[int] = 2

    FIELDS: ClassVar[tuple[str, ...]] = (
        "identifier",
        "title",
        "creator",
        "publisher",
        "date",
        "subject",
        "description",
        "language",
        "mediatype",
    )

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Search the archive index for an ISBN."""
        params: list[tuple[str, Any]] = [("q", f"isbn:{isbn}")]
        params.extend(("fl[]", field) for field in self.FIELDS)
        params.extend([("rows", 1), ("output", "json")])

        data = await self._get_json("/advancedsearch.php", params=params)

        docs = ((data or {}).get("response") or {}).get("docs") or []
        if not docs:
            logger.debug(f"No books found in Internet Archive for ISBN: {isbn}")
            return None

        return self._parse_doc(docs[0], isbn)

    def _parse_doc(self, doc: dict[str, Any], isbn: str) -> BookRecord:
        description = doc.get("description")
        if isinstance(description, list):
            description = " ".join(str(d) for d in description)

        identifier = doc.get("identifier")
        return BookRecord(
            title=to_str(first_of(doc.get("title"))),
            author=join_names(doc.get("creator")),
            isbn=isbn,
            publisher=to_str(first_of(doc.get("publisher"))),
            published_date=to_str(first_of(doc.get("date"))),
            subjects=as_list(doc.get("subject")),
            description=to_str(description),
            language=to_str(first_of(doc.get("language"))),
            info_link=f"https://archive.org/details/{identifier}" if identifier else None,
            data_sources=[self.source_name],
        )
