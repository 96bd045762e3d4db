"""Multi-result search across two bulk-search providers with deduplication."""

from __future__ import annotations

import asyncio
import itertools
import logging

from bookmeta.core.merge import add_source, merge_records
from bookmeta.core.models import BookRecord, Candidate, SearchHints
from bookmeta.core.types import ProgressCallback
from bookmeta.detection.identifier import detect_identifier
from bookmeta.detection.query import parse_query
from bookmeta.resolution.base import AbstractSearchProvider
from bookmeta.resolution.cascade import report_progress
from bookmeta.resolution.fast import FastDualLookup

logger = logging.getLogger(__name__)

COMBINED_SOURCE = "Combined"

MAX_SEARCH_RESULTS = 50


class MultiResultAggregator:
    """
    Turns a free-text query into a deduplicated, capped list of records.

    Candidates from the primary search provider go in first. Secondary
    candidates sharing an ISBN with an existing entry are merged into it;
    the rest are appended. Finally the editions of the secondary provider's
    top work are added, never overwriting an ISBN already present.
    """

    def __init__(
        self,
        fast: FastDualLookup,
        primary_search: AbstractSearchProvider,
        secondary_search: AbstractSearchProvider,
        *,
        limit: int = 40,
        edition_limit: int = 30,
        max_results: int = MAX_SEARCH_RESULTS,
    ) -> None:
        self.fast = fast
        self.primary_search = primary_search
        self.secondary_search = secondary_search
        self.limit = limit
        self.edition_limit = edition_limit
        self.max_results = min(max_results, MAX_SEARCH_RESULTS)

    async def _safe_search(
        self,
        provider: AbstractSearchProvider,
        title: str,
        author: str | None,
        hints: SearchHints,
    ) -> list[Candidate]:
        try:
            return await provider.search(title, author, limit=self.limit, hints=hints)
        except Exception as e:
            logger.warning(f"{provider.source_name} search failed: {e}")
            return []

    async def search(
        self,
        query: str,
        on_progress: ProgressCallback | None = None,
        hints: SearchHints | None = None,
    ) -> list[BookRecord]:
        """Return up to ``max_results`` records for ``query``."""
        isbn = detect_identifier(query)
        if isbn is not None:
            report_progress(on_progress, 1, 2, "Looking up ISBN...")
            record = await self.fast.lookup(isbn)
            report_progress(on_progress, 2, 2, "Complete")
            if record is None:
                return []
            return [record.model_copy(update={"isbn": isbn})]

        parsed = parse_query(query)
        merged_hints = parsed.hints.merged_over(hints)
        title = parsed.title or ""

        report_progress(on_progress, 1, 4, "Searching multiple sources...")

        primary_results, secondary_results = await asyncio.gather(
            self._safe_search(self.primary_search, title, parsed.author, merged_hints),
            self._safe_search(self.secondary_search, title, parsed.author, merged_hints),
        )

        report_progress(on_progress, 2, 4, "Found results, enriching data...")

        results: dict[str, Candidate] = {}
        counter = itertools.count()

        for candidate in primary_results:
            key = candidate.isbn or f"g-{candidate.source_id or f'no-isbn-{next(counter)}'}"
            results[key] = candidate

        for candidate in secondary_results:
            if candidate.isbn and candidate.isbn in results:
                existing = results[candidate.isbn]
                record = merge_records(existing.record, candidate.record, COMBINED_SOURCE)
                for source in [*candidate.record.data_sources, COMBINED_SOURCE]:
                    record = add_source(record, source)
                results[candidate.isbn] = existing.model_copy(update={"record": record})
                continue

            key = candidate.isbn or f"ol-{candidate.source_id or f'no-isbn-{next(counter)}'}"
            results[key] = candidate

        report_progress(on_progress, 3, 4, "Fetching older editions...")

        top_work = next((c for c in secondary_results if c.work_key), None)
        if top_work is not None and top_work.work_key:
            try:
                editions = await self.secondary_search.fetch_editions(
                    top_work.work_key, limit=self.edition_limit
                )
            except Exception as e:
                logger.warning(f"Edition fetch failed, continuing with existing results: {e}")
                editions = []

            for edition in editions:
                key = edition.isbn or f"ol-ed-{next(counter)}"
                if edition.isbn and edition.isbn in results:
                    continue
                results[key] = edition
            logger.debug(f"Added {len(editions)} edition variants for {top_work.work_key}")

        records = [
            candidate.record.model_copy(update={"isbn": candidate.isbn})
            for candidate in results.values()
        ]

        report_progress(on_progress, 4, 4, f"Found {len(records)} results")
        logger.info(f"Found {len(records)} unique books for {query!r}")

        return records[: self.max_results]
