"""Trove (National Library of Australia) provider implementation."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from bookmeta.core.models import BookRecord
from bookmeta.core.normalization import as_list, first_of, join_names, to_str
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractProvider, ProviderConfig

logger = logging.getLogger(__name__)


class TroveProvider(AbstractProvider):
    """
    Trove API v3 provider.

    API Documentation: https://trove.nla.gov.au/about/create-something/using-api

    Requires API key, sent in the ``X-API-KEY`` header.
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.TROVE
    BASE_URL: ClassVar[str] = "https://api.trove.nla.gov.au/v3"
    PRIORITY_TIER: ClassVar[int] = 3
    REQUIRES_API_KEY: ClassVar[bool] = True

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)

    def _get_default_headers(self) -> dict[str, str]:
        headers = super()._get_default_headers()
        if self.config.api_key:
            headers["X-API-KEY"] = self.config.api_key
        return headers

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Search the book category for an ISBN."""
        data = await self._get_json(
            "/result",
            params={"q": f"isbn:{isbn}", "category": "book", "encoding": "json", "n": 1},
        )

        works = self._extract_works(data or {})
        if not works:
            logger.debug(f"No books found in Trove for ISBN: {isbn}")
            return None

        return self._parse_work(works[0], isbn)

    @staticmethod
    def _extract_works(data: dict[str, Any]) -> list[dict[str, Any]]:
        # v3 nests results under "category"; v2 used "response.zone"
        groups = data.get("category") or (data.get("response") or {}).get("zone") or []
        for group in groups:
            works = (group.get("records") or {}).get("work") or []
            if works:
                return works
        return []

    def _parse_work(self, work: dict[str, Any], isbn: str) -> BookRecord:
        return BookRecord(
            title=to_str(work.get("title")),
            author=join_names(work.get("contributor")),
            isbn=isbn,
            published_date=to_str(work.get("issued")),
            publisher=to_str(first_of(work.get("publisher"))),
            subjects=as_list(work.get("subject")),
            language=to_str(first_of(work.get("language"))),
            info_link=to_str(work.get("troveUrl")),
            data_sources=[self.source_name],
        )
