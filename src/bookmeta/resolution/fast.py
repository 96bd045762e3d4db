"""Two-provider concurrent lookup for single-result identifier searches."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from bookmeta.core.merge import MERGEABLE_FIELDS, is_empty
from bookmeta.core.models import BookRecord
from bookmeta.resolution.base import AbstractProvider

logger = logging.getLogger(__name__)

# Filled from the secondary provider when the primary left them empty
SECONDARY_FILL_FIELDS: tuple[str, ...] = ("description", "subjects", "page_count")


class FastDualLookup:
    """
    Queries two trusted providers at once and combines their answers.

    The primary provider wins field by field. The secondary only supplies
    values the primary lacks, with description, subjects and page count
    checked explicitly so an empty string or list from the primary does not
    hide the secondary's data. No per-call timeout is applied.
    """

    def __init__(self, primary: AbstractProvider, secondary: AbstractProvider) -> None:
        self.primary = primary
        self.secondary = secondary

    async def lookup(self, isbn: str) -> BookRecord | None:
        """Return the combined record, or ``None`` when neither provider has data."""
        (first, _), (second, _) = await asyncio.gather(
            self.primary.attempt(isbn),
            self.secondary.attempt(isbn),
        )

        if first is None and second is None:
            logger.info(f"Quick lookup found nothing for {isbn}")
            return None

        values: dict[str, Any] = {}
        for field in MERGEABLE_FIELDS:
            primary_value = getattr(first, field) if first is not None else None
            secondary_value = getattr(second, field) if second is not None else None
            values[field] = primary_value if primary_value is not None else secondary_value

        if second is not None:
            for field in SECONDARY_FILL_FIELDS:
                if is_empty(values[field]) and not is_empty(getattr(second, field)):
                    values[field] = getattr(second, field)

        sources = []
        if first is not None:
            sources.append(self.primary.source_name)
        if second is not None:
            sources.append(self.secondary.source_name)

        record = BookRecord(**values, data_sources=sources)
        logger.debug(f"Quick lookup for {isbn} combined {sources}")
        return record
