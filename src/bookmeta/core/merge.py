"""Field-level merging of partial book records."""

from __future__ import annotations

import logging
from typing import Any

from bookmeta.core.models import BookRecord

logger = logging.getLogger(__name__)

# Fields participating in a merge. Declared explicitly so provider payloads
# can never introduce new attributes into a merged record.
MERGEABLE_FIELDS: tuple[str, ...] = (
    "title",
    "subtitle",
    "author",
    "original_title",
    "translated_from",
    "translator",
    "illustrator",
    "editor",
    "narrator",
    "isbn",
    "isbn_10",
    "isbn_13",
    "issn",
    "cover_image_url",
    "description",
    "excerpt",
    "first_sentence",
    "table_of_contents",
    "publisher",
    "published_date",
    "original_publication_date",
    "place_of_publication",
    "page_count",
    "format",
    "binding",
    "weight",
    "dimensions",
    "categories",
    "subjects",
    "main_category",
    "bisac_codes",
    "thema",
    "fast_subjects",
    "language",
    "call_number",
    "dewey_decimal",
    "lcc",
    "lccn",
    "oclc_number",
    "edition",
    "edition_statement",
    "printing_history",
    "copyright",
    "physical_description",
    "series",
    "number_of_volumes",
    "volume_number",
    "notes",
    "reading_age",
    "lexile_score",
    "ar_level",
    "awards",
    "asin",
    "goodreads_id",
    "librarything_id",
    "google_books_id",
    "olid",
    "oclc_work_id",
    "doi",
    "average_rating",
    "ratings_count",
    "reviews_count",
    "preview_link",
    "info_link",
    "buy_link",
    "canonical_link",
)

# Checklist that ends a cascade once every entry is populated.
IMPORTANT_FIELDS: tuple[str, ...] = (
    "title",
    "author",
    "cover_image_url",
    "description",
    "publisher",
    "published_date",
    "page_count",
    "language",
    "call_number",
    "subjects",
    "dewey_decimal",
    "lcc",
    "subtitle",
    "format",
)


def is_empty(value: Any) -> bool:
    """Absent, blank string, or empty list."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return len(value) == 0
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _union(first: list[Any], second: list[Any]) -> list[Any]:
    # dict preserves first-seen order
    return list(dict.fromkeys([*first, *second]))


def merge_records(
    primary: BookRecord,
    secondary: BookRecord,
    source: str | None = None,
) -> BookRecord:
    """
    Merge ``secondary`` into ``primary`` and return a new record.

    Rules, applied per field of :data:`MERGEABLE_FIELDS`:

    * primary empty, secondary present: take secondary's value
    * both lists: de-duplicated union, kept only when it adds elements
    * both numeric: the larger value
    * otherwise primary wins

    Neither input is mutated. ``data_sources`` is carried over from
    ``primary`` untouched; provenance is the caller's concern.
    """
    updates: dict[str, Any] = {}
    label = source or "secondary"

    for field in MERGEABLE_FIELDS:
        current = getattr(primary, field)
        incoming = getattr(secondary, field)

        if is_empty(incoming):
            continue

        if is_empty(current):
            logger.debug(f"  + Adding {field} from {label}")
            updates[field] = list(incoming) if isinstance(incoming, list) else incoming
        elif isinstance(current, list) and isinstance(incoming, list):
            combined = _union(current, incoming)
            if len(combined) > len(current):
                logger.debug(f"  + Merging {field} lists from {label}")
                updates[field] = combined
        elif _is_number(current) and _is_number(incoming) and incoming > current:
            logger.debug(f"  + Updating {field} from {label} (larger value)")
            updates[field] = incoming

    updates["data_sources"] = list(primary.data_sources)
    return primary.model_copy(update=updates, deep=False)


def populated_fields(record: BookRecord) -> int:
    """Count mergeable fields that hold a value."""
    return sum(1 for field in MERGEABLE_FIELDS if not is_empty(getattr(record, field)))


def missing_fields(record: BookRecord) -> list[str]:
    """Return the important fields that are still empty."""
    return [field for field in IMPORTANT_FIELDS if is_empty(getattr(record, field))]


def add_source(record: BookRecord, source: str) -> BookRecord:
    """Return ``record`` with ``source`` appended to its provenance, once."""
    if source in record.data_sources:
        return record
    return record.model_copy(update={"data_sources": [*record.data_sources, source]})
