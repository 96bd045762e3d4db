"""Tests for API request/response schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bookmeta.api.schemas import (
    EnrichRequest,
    HealthResponse,
    ResolutionSourceResult,
    ResolveBookRequest,
    ResolveBookResponse,
    SearchBooksRequest,
    SearchBooksResponse,
)
from bookmeta.api.schemas.base import to_camel_case
from bookmeta.core.models import BookRecord
from bookmeta.core.types import ResolutionStatus, SourceName

# ============================================================================
# Request Schema Tests
# ============================================================================


class TestResolveBookRequest:
    """Tests for ResolveBookRequest schema."""

    def test_valid_identifier(self):
        """Identifier-only request should be valid."""
        request = ResolveBookRequest(identifier="978-0-13-409341-3")
        assert request.identifier == "978-0-13-409341-3"

    @pytest.mark.parametrize("identifier", ["", "9" * 33])
    def test_length_bounds(self, identifier: str):
        """Empty or oversized identifiers should be invalid."""
        with pytest.raises(ValidationError):
            ResolveBookRequest(identifier=identifier)


class TestSearchBooksRequest:
    """Tests for SearchBooksRequest schema."""

    def test_query_only(self):
        request = SearchBooksRequest(query="Sapiens")
        assert request.hints.publisher is None

    def test_hints_from_fields(self):
        request = SearchBooksRequest.model_validate(
            {"query": "Sapiens", "publisher": "Harper", "year": "2015", "language": "eng"}
        )
        hints = request.hints
        assert hints.publisher == "Harper"
        assert hints.year == "2015"
        assert hints.language == "eng"

    def test_empty_query_invalid(self):
        """Empty query should be invalid."""
        with pytest.raises(ValidationError):
            SearchBooksRequest(query="")


class TestEnrichRequest:
    """Tests for EnrichRequest schema."""

    def test_camel_case_book(self):
        """Should accept the camelCase record shape the API returns."""
        request = EnrichRequest.model_validate(
            {"book": {"title": "Sapiens", "isbn13": "9780062316097", "pageCount": 464}}
        )
        assert request.book.isbn_13 == "9780062316097"
        assert request.book.page_count == 464


# ============================================================================
# Response Schema Tests
# ============================================================================


class TestResolveBookResponse:
    """Tests for ResolveBookResponse schema."""

    def test_success_response(self):
        """Success response should serialize with camelCase keys."""
        response = ResolveBookResponse(
            identifier="9780062316097",
            status=ResolutionStatus.SUCCESS,
            record=BookRecord(title="Sapiens", cover_image_url="https://x"),
            sources_tried=[
                ResolutionSourceResult(
                    source=SourceName.GOOGLE_BOOKS,
                    status=ResolutionStatus.SUCCESS,
                    duration_ms=200.0,
                ),
                ResolutionSourceResult(
                    source=SourceName.TROVE,
                    status=ResolutionStatus.SKIPPED,
                    error_message="API key not configured",
                ),
            ],
            tiers_run=[1],
            total_duration_ms=250.0,
        )

        data = response.model_dump(by_alias=True, mode="json")

        assert data["status"] == "success"
        assert data["record"]["coverImageUrl"] == "https://x"
        assert data["sourcesTried"][0]["source"] == "Google Books"
        assert data["sourcesTried"][1]["errorMessage"] == "API key not configured"
        assert data["tiersRun"] == [1]
        assert data["totalDurationMs"] == 250.0

    def test_not_found_response(self):
        """Not found response has no record."""
        response = ResolveBookResponse(
            identifier="9780000000002",
            status=ResolutionStatus.NOT_FOUND,
            total_duration_ms=100.0,
        )
        assert response.record is None
        assert response.sources_tried == []


class TestSearchBooksResponse:
    """Tests for SearchBooksResponse schema."""

    def test_search_response(self):
        response = SearchBooksResponse(
            query="Sapiens",
            total=2,
            results=[
                BookRecord(title="Sapiens", data_sources=["Google Books", "Combined"]),
                BookRecord(title="Homo Deus"),
            ],
            total_duration_ms=512.0,
        )

        data = response.model_dump(by_alias=True)

        assert data["total"] == 2
        assert data["results"][0]["dataSources"] == ["Google Books", "Combined"]


class TestHealthResponse:
    """Tests for HealthResponse schema."""

    def test_provider_states(self):
        response = HealthResponse(
            status="degraded",
            version="0.1.0",
            providers={"Google Books": "configured", "Trove": "unconfigured"},
        )
        assert response.providers["Trove"] == "unconfigured"

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            HealthResponse(status="fine", version="0.1.0", providers={})


class TestToCamelCase:
    """Tests for the alias generator."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("total_duration_ms", "totalDurationMs"),
            ("query", "query"),
            ("is_new_field", "isNewField"),
        ],
    )
    def test_conversion(self, name: str, expected: str):
        assert to_camel_case(name) == expected
