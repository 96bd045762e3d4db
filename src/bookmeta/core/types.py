"""Core enums and type definitions."""

from collections.abc import Callable
from enum import StrEnum


class SourceName(StrEnum):
    """Known metadata providers.

    Values double as the provenance labels recorded in ``data_sources``.
    """

    GOOGLE_BOOKS = "Google Books"
    OPEN_LIBRARY = "Open Library"
    OPEN_LIBRARY_EDITIONS = "Open Library Editions"
    ISBNDB = "ISBNdb"
    CROSSREF = "CrossRef"
    INTERNET_ARCHIVE = "Internet Archive"
    LIBRARY_OF_CONGRESS = "Library of Congress"
    WIKIDATA = "Wikidata"
    TROVE = "Trove"

    # Marker added when search results from several providers were merged
    COMBINED = "Combined"


class InputType(StrEnum):
    """Types of input that can be provided for resolution."""

    ISBN_10 = "isbn_10"
    ISBN_13 = "isbn_13"
    TITLE = "title"
    UNKNOWN = "unknown"


class ResolutionStatus(StrEnum):
    """Status of a single provider attempt."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"
    TIMEOUT = "timeout"
    SKIPPED = "skipped"


# (current, total, message)
ProgressCallback = Callable[[int, int, str], None]
