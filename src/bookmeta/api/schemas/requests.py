"""Request schemas for API endpoints."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from bookmeta.api.schemas.base import APIBaseSchema
from bookmeta.core.models import BookRecord, SearchHints


class ResolveBookRequest(APIBaseSchema):
    """Request to resolve a book by ISBN."""

    identifier: Annotated[
        str,
        Field(
            min_length=1,
            max_length=32,
            description="ISBN-10 or ISBN-13; hyphens and spaces are ignored.",
        ),
    ]


class QuickLookupRequest(ResolveBookRequest):
    """Request for a two-provider quick lookup."""

    pass


class DetectRequest(APIBaseSchema):
    """Request to classify a query string."""

    query: Annotated[
        str,
        Field(
            min_length=1,
            max_length=1000,
            description="The string to classify.",
        ),
    ]


class SearchBooksRequest(APIBaseSchema):
    """Request to search for books across providers."""

    query: Annotated[
        str,
        Field(
            min_length=1,
            max_length=500,
            description="Free text, 'Title by Author', optionally with 'field: value' hints.",
        ),
    ]

    publisher: Annotated[
        str | None,
        Field(default=None, max_length=200, description="Publisher filter."),
    ]

    subject: Annotated[
        str | None,
        Field(default=None, max_length=200, description="Subject or category filter."),
    ]

    place: Annotated[
        str | None,
        Field(default=None, max_length=200, description="Place of publication filter."),
    ]

    year: Annotated[
        str | None,
        Field(default=None, max_length=10, description="Publication year filter."),
    ]

    language: Annotated[
        str | None,
        Field(default=None, max_length=10, description="Language filter."),
    ]

    @property
    def hints(self) -> SearchHints:
        return SearchHints(
            publisher=self.publisher,
            subject=self.subject,
            place=self.place,
            year=self.year,
            language=self.language,
        )


class EnrichRequest(APIBaseSchema):
    """Request to compute enrichment diffs for a stored record."""

    book: BookRecord
