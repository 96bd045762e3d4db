"""Open Library provider implementation."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from bookmeta.core.models import BookRecord, Candidate, SearchHints
from bookmeta.core.normalization import first_of, join_names, to_int, to_str
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractSearchProvider, ProviderConfig

logger = logging.getLogger(__name__)

COVER_URL = "https://covers.openlibrary.org/b/id/{cover_id}-L.jpg"


class OpenLibraryProvider(AbstractSearchProvider):
    """
    Open Library API provider (free, no API key required).

    API Documentation: https://openlibrary.org/dev/docs/api/books

    Besides identifier lookups it answers bulk searches and exposes the
    editions of a work, which the aggregator uses to surface older printings.
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.OPEN_LIBRARY
    BASE_URL: ClassVar[str] = "https://openlibrary.org"
    PRIORITY_TIER: ClassVar[int] = 1

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Look up an edition by ISBN, filling gaps from its work record."""
        data = await self._get_json(
            "/api/books",
            params={"bibkeys": f"ISBN:{isbn}", "format": "json", "jscmd": "data"},
        )

        book = (data or {}).get(f"ISBN:{isbn}")
        if not book:
            logger.debug(f"No books found in Open Library for ISBN: {isbn}")
            return None

        record = self._parse_book(book, isbn)

        # Edition records rarely carry a description; the work usually does
        if record.description is None or record.subjects is None:
            if edition_key := book.get("key"):
                work = await self._fetch_work_for_edition(edition_key)
                if work:
                    self._merge_work_data(record, work)

        return record

    async def _fetch_work_for_edition(self, edition_key: str) -> dict[str, Any] | None:
        """Fetch the work an edition belongs to. Failures are not fatal."""
        try:
            edition = await self._get_json(f"{edition_key}.json")
            works = (edition or {}).get("works") or []
            if not works or not works[0].get("key"):
                return None
            return await self._get_json(f"{works[0]['key']}.json")
        except Exception as e:
            logger.debug(f"Open Library work fetch failed for {edition_key}: {e}")
            return None

    def _merge_work_data(self, record: BookRecord, work: dict[str, Any]) -> None:
        """Fill description and subjects from work data."""
        if record.description is None:
            description = work.get("description")
            if isinstance(description, dict):
                description = description.get("value")
            record.description = to_str(description)

        if record.subjects is None and work.get("subjects"):
            record.subjects = [str(s) for s in work["subjects"][:10]]

        if record.first_sentence is None:
            sentence = work.get("first_sentence")
            if isinstance(sentence, dict):
                sentence = sentence.get("value")
            record.first_sentence = to_str(sentence)

    def _parse_book(self, book: dict[str, Any], isbn: str) -> BookRecord:
        """Parse a ``jscmd=data`` book entry."""
        identifiers = book.get("identifiers") or {}
        classifications = book.get("classifications") or {}
        cover = book.get("cover") or {}
        key = book.get("key") or ""

        return BookRecord(
            title=book.get("title"),
            subtitle=book.get("subtitle"),
            author=join_names([a.get("name") for a in book.get("authors") or []]),
            isbn=isbn,
            isbn_10=first_of(identifiers.get("isbn_10")),
            isbn_13=first_of(identifiers.get("isbn_13")),
            lccn=first_of(identifiers.get("lccn")),
            oclc_number=first_of(identifiers.get("oclc")),
            goodreads_id=first_of(identifiers.get("goodreads")),
            librarything_id=first_of(identifiers.get("librarything")),
            olid=key.replace("/books/", "") or None,
            description=to_str(book.get("notes")),
            publisher=join_names([p.get("name") for p in book.get("publishers") or []]),
            published_date=book.get("publish_date"),
            place_of_publication=join_names(
                [p.get("name") for p in book.get("publish_places") or []]
            ),
            page_count=to_int(book.get("number_of_pages")),
            physical_description=to_str(book.get("pagination")),
            weight=to_str(book.get("weight")),
            cover_image_url=cover.get("large") or cover.get("medium") or cover.get("small"),
            subjects=[s.get("name") for s in book.get("subjects") or [] if s.get("name")] or None,
            dewey_decimal=first_of(classifications.get("dewey_decimal_class")),
            lcc=first_of(classifications.get("lc_classifications")),
            canonical_link=book.get("url"),
            data_sources=[self.source_name],
        )

    async def search(
        self,
        title: str,
        author: str | None = None,
        *,
        limit: int = 40,
        hints: SearchHints | None = None,
    ) -> list[Candidate]:
        """Search works, forwarding every supported hint as a filter."""
        params: dict[str, Any] = {"title": title}
        if author:
            params["author"] = author
        if hints:
            if hints.publisher:
                params["publisher"] = hints.publisher
            if hints.subject:
                params["subject"] = hints.subject
            if hints.place:
                params["place"] = hints.place
            if hints.year:
                params["first_publish_year"] = hints.year
            if hints.language:
                params["language"] = hints.language
        params["limit"] = limit

        data = await self._get_json("/search.json", params=params)

        candidates = []
        for doc in (data or {}).get("docs") or []:
            isbns = doc.get("isbn") or []
            isbn = next((i for i in isbns if len(i) == 13), None) or first_of(isbns)
            key = doc.get("key")
            candidates.append(
                Candidate(
                    record=self._parse_search_result(doc),
                    isbn=isbn,
                    source_id=key,
                    work_key=key,
                )
            )
        return candidates

    def _parse_search_result(self, doc: dict[str, Any]) -> BookRecord:
        cover_id = doc.get("cover_i")
        key = doc.get("key") or ""
        return BookRecord(
            title=doc.get("title"),
            author=join_names(doc.get("author_name")),
            published_date=to_str(doc.get("first_publish_year")),
            publisher=first_of(doc.get("publisher")),
            page_count=to_int(doc.get("number_of_pages_median")),
            cover_image_url=COVER_URL.format(cover_id=cover_id) if cover_id else None,
            olid=key.replace("/works/", "") or None,
            data_sources=[self.source_name],
        )

    async def fetch_editions(self, work_key: str, limit: int = 30) -> list[Candidate]:
        """List the editions of a work (``/works/OL123W`` or ``OL123W``)."""
        key = work_key if work_key.startswith("/works/") else f"/works/{work_key}"
        logger.debug(f"Fetching Open Library editions for work: {key}")

        data = await self._get_json(f"{key}/editions.json", params={"limit": limit})

        candidates = []
        for entry in (data or {}).get("entries") or []:
            record = self._parse_edition(entry)
            candidates.append(
                Candidate(
                    record=record,
                    isbn=record.isbn_13 or record.isbn_10,
                    source_id=entry.get("key"),
                    work_key=key,
                )
            )
        return candidates

    def _parse_edition(self, entry: dict[str, Any]) -> BookRecord:
        covers = entry.get("covers") or []
        languages = entry.get("languages") or []
        language_key = (languages[0] or {}).get("key", "") if languages else ""
        key = entry.get("key") or ""

        return BookRecord(
            title=entry.get("title"),
            subtitle=entry.get("subtitle"),
            author=to_str(entry.get("by_statement")),
            published_date=entry.get("publish_date"),
            publisher=first_of(entry.get("publishers")),
            place_of_publication=first_of(entry.get("publish_places")),
            page_count=to_int(entry.get("number_of_pages")),
            isbn_13=first_of(entry.get("isbn_13")),
            isbn_10=first_of(entry.get("isbn_10")),
            lccn=first_of(entry.get("lccn")),
            oclc_number=first_of(entry.get("oclc_numbers")),
            olid=key.replace("/books/", "") or None,
            cover_image_url=(
                COVER_URL.format(cover_id=covers[0]) if covers and covers[0] > 0 else None
            ),
            language=language_key.replace("/languages/", "") or None,
            format=entry.get("physical_format"),
            binding=entry.get("physical_format"),
            edition_statement=entry.get("edition_name"),
            physical_description=entry.get("pagination"),
            data_sources=[str(SourceName.OPEN_LIBRARY_EDITIONS)],
        )
