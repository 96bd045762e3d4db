"""Shared test fixtures for all tests."""

from __future__ import annotations

import asyncio
from typing import Any, ClassVar

import pytest

from bookmeta.config import BookmetaSettings
from bookmeta.core.models import BookRecord, Candidate, SearchHints
from bookmeta.core.types import SourceName
from bookmeta.resolution.base import AbstractSearchProvider, ProviderConfig

# ============================================================================
# Stub Provider for Orchestration Tests
# ============================================================================


class StubProvider(AbstractSearchProvider):
    """In-memory provider with scripted answers and call recording."""

    SOURCE_NAME: ClassVar[SourceName] = SourceName.GOOGLE_BOOKS
    BASE_URL: ClassVar[str] = "https://stub.invalid"

    def __init__(
        self,
        name: str,
        *,
        tier: int = 1,
        record: BookRecord | None = None,
        delay: float = 0.0,
        error: Exception | None = None,
        search_results: list[Candidate] | None = None,
        search_error: Exception | None = None,
        editions: list[Candidate] | None = None,
        editions_error: Exception | None = None,
        requires_key: bool = False,
        config: ProviderConfig | None = None,
    ) -> None:
        super().__init__(config)
        self._name = name
        self._tier = tier
        self._record = record
        self._delay = delay
        self._error = error
        self._search_results = search_results or []
        self._search_error = search_error
        self._editions = editions or []
        self._editions_error = editions_error
        self._requires_key = requires_key

        self.lookup_calls: list[str] = []
        self.search_calls: list[dict[str, Any]] = []
        self.edition_calls: list[tuple[str, int]] = []

    @property
    def source_name(self) -> str:
        return self._name

    @property
    def priority_tier(self) -> int:
        return self._tier

    @property
    def is_configured(self) -> bool:
        return not self._requires_key or bool(self.config.api_key)

    async def lookup(self, isbn: str) -> BookRecord | None:
        self.lookup_calls.append(isbn)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        if self._record is None:
            return None
        return self._record.model_copy(deep=True)

    async def search(
        self,
        title: str,
        author: str | None = None,
        *,
        limit: int = 40,
        hints: SearchHints | None = None,
    ) -> list[Candidate]:
        self.search_calls.append({"title": title, "author": author, "limit": limit, "hints": hints})
        if self._search_error is not None:
            raise self._search_error
        return [c.model_copy(deep=True) for c in self._search_results]

    async def fetch_editions(self, work_key: str, limit: int = 30) -> list[Candidate]:
        self.edition_calls.append((work_key, limit))
        if self._editions_error is not None:
            raise self._editions_error
        return [c.model_copy(deep=True) for c in self._editions]


@pytest.fixture
def make_provider():
    """Factory fixture building :class:`StubProvider` instances."""

    def _make(name: str, **kwargs: Any) -> StubProvider:
        return StubProvider(name, **kwargs)

    return _make


def candidate(
    title: str,
    isbn: str | None = None,
    *,
    source: str = "Google Books",
    source_id: str | None = None,
    work_key: str | None = None,
    **fields: Any,
) -> Candidate:
    """Build a search candidate with a minimal record."""
    return Candidate(
        record=BookRecord(title=title, data_sources=[source], **fields),
        isbn=isbn,
        source_id=source_id,
        work_key=work_key,
    )


@pytest.fixture
def make_candidate():
    """Factory fixture building search candidates."""
    return candidate


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_book_record() -> BookRecord:
    """Create a fully populated sample book record."""
    return BookRecord(
        title="Sapiens",
        subtitle="A Brief History of Humankind",
        author="Yuval Noah Harari",
        isbn="9780062316097",
        isbn_13="9780062316097",
        isbn_10="0062316095",
        cover_image_url="https://example.com/sapiens.jpg",
        description="From a renowned historian comes a groundbreaking narrative.",
        publisher="Harper",
        published_date="2015-02-10",
        page_count=464,
        language="en",
        call_number="CB113.H4813 2015",
        subjects=["History", "Civilization"],
        dewey_decimal="909",
        lcc="CB113",
        format="Hardcover",
        data_sources=["Google Books"],
    )


@pytest.fixture
def sample_book_record_minimal() -> BookRecord:
    """Create a minimal book record."""
    return BookRecord(title="Minimal Book")


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings() -> BookmetaSettings:
    """Create settings with every credential present."""
    return BookmetaSettings(
        google_books_api_key="test-google-key",
        isbndb_api_key="test-isbndb-key",
        trove_api_key="test-trove-key",
        crossref_email="test@example.com",
        provider_timeout=2.0,
        debug=True,
        log_level="DEBUG",
    )


@pytest.fixture
def mock_settings_minimal() -> BookmetaSettings:
    """Create settings without optional credentials."""
    return BookmetaSettings(
        google_books_api_key=None,
        isbndb_api_key=None,
        trove_api_key=None,
        crossref_email=None,
    )


# ============================================================================
# Test Data Constants
# ============================================================================


VALID_ISBN_10 = "0134093410"  # Clean Code
VALID_ISBN_10_X = "155860832X"  # Has X check digit
VALID_ISBN_13 = "9780134093413"
SAPIENS_ISBN_13 = "9780143127741"

INVALID_ISBN_10 = "0134093411"  # Bad checksum
INVALID_ISBN_13 = "9780134093412"  # Bad checksum


@pytest.fixture
def valid_identifiers() -> dict[str, str]:
    """Return a dictionary of valid identifiers."""
    return {
        "isbn_10": VALID_ISBN_10,
        "isbn_10_x": VALID_ISBN_10_X,
        "isbn_13": VALID_ISBN_13,
    }


@pytest.fixture
def invalid_identifiers() -> dict[str, str]:
    """Return a dictionary of invalid identifiers."""
    return {
        "isbn_10": INVALID_ISBN_10,
        "isbn_13": INVALID_ISBN_13,
    }
