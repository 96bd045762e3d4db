"""Book enrichment: resolve fresh metadata and diff it against a stored record."""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bookmeta.core.merge import is_empty
from bookmeta.core.models import BookRecord
from bookmeta.core.normalization import normalize_text
from bookmeta.core.types import ProgressCallback
from bookmeta.resolution.aggregator import MultiResultAggregator
from bookmeta.resolution.cascade import CascadeResolver, report_progress

logger = logging.getLogger(__name__)

FIELD_LABELS: dict[str, str] = {
    "title": "Title",
    "subtitle": "Subtitle",
    "author": "Author",
    "original_title": "Original Title",
    "cover_image_url": "Cover Image",
    "description": "Description",
    "publisher": "Publisher",
    "published_date": "Published Date",
    "page_count": "Page Count",
    "language": "Language",
    "categories": "Categories",
    "subjects": "Subjects",
    "isbn_10": "ISBN-10",
    "isbn_13": "ISBN-13",
    "issn": "ISSN",
    "lccn": "LCCN",
    "oclc_number": "OCLC Number",
    "oclc_work_id": "OCLC Work ID",
    "doi": "DOI",
    "asin": "ASIN",
    "google_books_id": "Google Books ID",
    "goodreads_id": "Goodreads ID",
    "librarything_id": "LibraryThing ID",
    "olid": "Open Library ID",
    "dewey_decimal": "Dewey Decimal",
    "lcc": "LC Classification",
    "call_number": "Call Number",
    "bisac_codes": "BISAC Codes",
    "thema": "Thema Codes",
    "fast_subjects": "FAST Subjects",
    "main_category": "Main Category",
    "format": "Format",
    "binding": "Binding",
    "dimensions": "Dimensions",
    "weight": "Weight",
    "edition": "Edition",
    "edition_statement": "Edition Statement",
    "place_of_publication": "Place of Publication",
    "original_publication_date": "Original Publication Date",
    "copyright": "Copyright",
    "printing_history": "Printing History",
    "physical_description": "Physical Description",
    "translator": "Translator",
    "illustrator": "Illustrator",
    "editor": "Editor",
    "narrator": "Narrator",
    "series": "Series",
    "volume_number": "Volume Number",
    "number_of_volumes": "Number of Volumes",
    "excerpt": "Excerpt",
    "first_sentence": "First Sentence",
    "table_of_contents": "Table of Contents",
    "reading_age": "Reading Age",
    "lexile_score": "Lexile Score",
    "average_rating": "Average Rating",
    "ratings_count": "Ratings Count",
    "reviews_count": "Reviews Count",
    "preview_link": "Preview Link",
    "info_link": "Info Link",
    "buy_link": "Buy Link",
    "awards": "Awards",
    "notes": "Notes",
}

# Compared field by field; provenance and lookup-only fields are excluded
ENRICHABLE_FIELDS: tuple[str, ...] = tuple(k for k in FIELD_LABELS if k != "notes")

FIELD_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Basic Info": (
        "title", "subtitle", "author", "original_title", "cover_image_url",
        "description", "language",
    ),
    "Publication": (
        "publisher", "published_date", "page_count", "format", "binding", "edition",
        "edition_statement", "place_of_publication", "original_publication_date",
        "copyright", "printing_history",
    ),
    "Identifiers": (
        "isbn_10", "isbn_13", "issn", "lccn", "oclc_number", "oclc_work_id", "doi",
        "asin", "google_books_id", "goodreads_id", "librarything_id", "olid",
    ),
    "Classification": (
        "categories", "subjects", "dewey_decimal", "lcc", "call_number",
        "bisac_codes", "thema", "fast_subjects", "main_category",
    ),
    "Physical": ("dimensions", "weight", "physical_description"),
    "Contributors": ("translator", "illustrator", "editor", "narrator"),
    "Series": ("series", "volume_number", "number_of_volumes"),
    "Content": (
        "excerpt", "first_sentence", "table_of_contents", "reading_age", "lexile_score",
    ),
    "Ratings": ("average_rating", "ratings_count", "reviews_count"),
    "Links": ("preview_link", "info_link", "buy_link"),
    "Awards": ("awards",),
}

_IDENTIFIER_PATTERN = re.compile(r"^[0-9]{10,13}$")


def field_category(key: str) -> str:
    """Group a field for display."""
    for category, keys in FIELD_CATEGORIES.items():
        if key in keys:
            return category
    return "Other"


class FieldDiff(BaseModel):
    """A single field where freshly resolved data differs from the stored record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: str
    label: str
    category: str
    current_value: Any = None
    new_value: Any = None
    is_new_field: bool = Field(description="True when the stored value is empty")


class EnrichmentResult(BaseModel):
    """Outcome of enriching one record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    book_title: str | None = None
    diffs: list[FieldDiff] = Field(default_factory=list)
    api_data: BookRecord = Field(default_factory=BookRecord)
    data_sources: list[str] = Field(default_factory=list)
    error: str | None = None

    @property
    def has_changes(self) -> bool:
        return bool(self.diffs)


def _fold(text: str) -> str:
    return normalize_text(text, remove_accents=False, remove_punctuation=False)


def is_different(current: Any, incoming: Any) -> bool:
    """
    Whether ``incoming`` would change ``current``.

    Strings compare case-insensitively with whitespace collapsed. A list differs only when
    ``incoming`` holds an element ``current`` lacks. An empty ``incoming``
    never counts as a change.
    """
    if is_empty(incoming):
        return False
    if is_empty(current):
        return True

    if isinstance(current, list) and isinstance(incoming, list):
        existing = {str(v) for v in current}
        return any(str(v) not in existing for v in incoming)

    if isinstance(current, str) and isinstance(incoming, str):
        return _fold(current) != _fold(incoming)

    return str(current) != str(incoming)


def compute_diffs(book: BookRecord, api_data: BookRecord) -> list[FieldDiff]:
    """Field-by-field diffs over :data:`ENRICHABLE_FIELDS`."""
    diffs = []
    for key in ENRICHABLE_FIELDS:
        current = getattr(book, key)
        new = getattr(api_data, key)
        if is_different(current, new):
            diffs.append(
                FieldDiff(
                    key=key,
                    label=FIELD_LABELS.get(key, key),
                    category=field_category(key),
                    current_value=current,
                    new_value=new,
                    is_new_field=is_empty(current),
                )
            )
    return diffs


def apply_enrichment(book: BookRecord, diffs: list[FieldDiff]) -> BookRecord:
    """Return ``book`` with the selected diffs applied."""
    if not diffs:
        return book
    return book.model_copy(update={diff.key: diff.new_value for diff in diffs})


def format_diff_value(value: Any, max_length: int = 200) -> str:
    """Render a diff value for display."""
    if is_empty(value):
        return "-"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    text = str(value)
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def _lookup_identifier(book: BookRecord) -> str | None:
    identifier = book.isbn_13 or book.isbn_10 or book.isbn
    if identifier and _IDENTIFIER_PATTERN.match(identifier):
        return identifier
    return None


async def enrich_book(
    book: BookRecord,
    cascade: CascadeResolver,
    aggregator: MultiResultAggregator,
    on_progress: ProgressCallback | None = None,
) -> EnrichmentResult:
    """
    Resolve fresh metadata for ``book`` and diff it against the stored values.

    Records with a usable ISBN go through the cascade. Otherwise, or when the
    cascade finds nothing, a ``"<title> <author>"`` search supplies the first
    result. Failures are reported in ``error`` rather than raised.
    """
    try:
        api_data: BookRecord | None = None

        isbn = _lookup_identifier(book)
        if isbn:
            report_progress(on_progress, 0, 100, f"Looking up ISBN {isbn}...")

            def forward(current: int, total: int, name: str) -> None:
                report_progress(on_progress, current, total, f"Querying {name}...")

            result = await cascade.resolve(isbn, on_progress=forward)
            api_data = result.record

        if api_data is None:
            query = f"{book.title or ''} {book.author or ''}".strip()
            if query:
                report_progress(on_progress, 0, 4, f'Searching for "{query}"...')
                results = await aggregator.search(query, on_progress=on_progress)
                if results:
                    api_data = results[0]

        if api_data is None:
            return EnrichmentResult(book_title=book.title, error="No data found from any API")

        return EnrichmentResult(
            book_title=book.title,
            diffs=compute_diffs(book, api_data),
            api_data=api_data,
            data_sources=list(api_data.data_sources),
        )
    except Exception as e:
        logger.exception(f"Enrichment failed for {book.title!r}")
        return EnrichmentResult(book_title=book.title, error=str(e) or "Enrichment failed")
