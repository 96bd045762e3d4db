"""Domain models for book metadata records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookRecord(BaseModel):
    """
    Partial bibliographic record.

    Every attribute is independently optional: a provider fills what it knows
    and leaves the rest as ``None``. Absence is never encoded as ``""`` or ``0``.
    JSON serialization uses camelCase aliases (``coverImageUrl``, ``isbn13``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    # Basic info
    title: str | None = Field(default=None, description="Title of the book")
    subtitle: str | None = Field(default=None, description="Subtitle")
    author: str | None = Field(default=None, description="Author(s), comma separated")
    original_title: str | None = Field(default=None, description="Title in the original language")
    translated_from: str | None = Field(default=None, description="Source language of a translation")

    # Contributors
    translator: str | None = Field(default=None, description="Translator(s)")
    illustrator: str | None = Field(default=None, description="Illustrator(s)")
    editor: str | None = Field(default=None, description="Editor(s)")
    narrator: str | None = Field(default=None, description="Narrator (audiobooks)")

    # Identifiers
    isbn: str | None = Field(default=None, description="Identifier the record was keyed by")
    isbn_10: str | None = Field(default=None, description="10-digit ISBN")
    isbn_13: str | None = Field(default=None, description="13-digit ISBN")
    issn: str | None = Field(default=None, description="ISSN for serial publications")
    lccn: str | None = Field(default=None, description="Library of Congress Control Number")
    oclc_number: str | None = Field(default=None, description="OCLC / WorldCat number")
    oclc_work_id: str | None = Field(default=None, description="OCLC work identifier")
    doi: str | None = Field(default=None, description="Digital Object Identifier")
    asin: str | None = Field(default=None, description="Amazon Standard Identification Number")
    google_books_id: str | None = Field(default=None, description="Google Books volume ID")
    goodreads_id: str | None = Field(default=None, description="Goodreads book ID")
    librarything_id: str | None = Field(default=None, description="LibraryThing work ID")
    olid: str | None = Field(default=None, description="Open Library edition or work ID")

    # Content
    cover_image_url: str | None = Field(default=None, description="Cover image URL")
    description: str | None = Field(default=None, description="Description or synopsis")
    excerpt: str | None = Field(default=None, description="Excerpt")
    first_sentence: str | None = Field(default=None, description="First sentence")
    table_of_contents: str | None = Field(default=None, description="Table of contents")

    # Publication
    publisher: str | None = Field(default=None, description="Publisher name")
    published_date: str | None = Field(default=None, description="Publication date as reported")
    original_publication_date: str | None = Field(
        default=None, description="Date of first publication"
    )
    place_of_publication: str | None = Field(default=None, description="Place of publication")
    edition: str | None = Field(default=None, description="Edition name")
    edition_statement: str | None = Field(default=None, description="Edition statement")
    printing_history: str | None = Field(default=None, description="Printing history")
    copyright: str | None = Field(default=None, description="Copyright statement")

    # Physical
    page_count: int | None = Field(default=None, description="Number of pages")
    format: str | None = Field(default=None, description="Physical format")
    binding: str | None = Field(default=None, description="Binding type")
    weight: str | None = Field(default=None, description="Weight")
    dimensions: str | None = Field(default=None, description="Dimensions")
    physical_description: str | None = Field(default=None, description="Physical description")

    # Classification
    categories: list[str] | None = Field(default=None, description="Genre categories")
    subjects: list[str] | None = Field(default=None, description="Subject headings")
    main_category: str | None = Field(default=None, description="Primary category")
    bisac_codes: list[str] | None = Field(default=None, description="BISAC subject codes")
    thema: list[str] | None = Field(default=None, description="Thema subject codes")
    fast_subjects: list[str] | None = Field(default=None, description="OCLC FAST subjects")
    language: str | None = Field(default=None, description="Language code or name")
    call_number: str | None = Field(default=None, description="Library call number")
    dewey_decimal: str | None = Field(default=None, description="Dewey Decimal classification")
    lcc: str | None = Field(default=None, description="Library of Congress classification")

    # Series
    series: str | None = Field(default=None, description="Series name")
    number_of_volumes: int | None = Field(default=None, description="Volumes in the set")
    volume_number: str | None = Field(default=None, description="Volume within the series")

    # Other
    notes: str | None = Field(default=None, description="Free-form notes")
    reading_age: str | None = Field(default=None, description="Target reading age")
    lexile_score: str | None = Field(default=None, description="Lexile measure")
    ar_level: str | None = Field(default=None, description="Accelerated Reader level")
    awards: list[str] | None = Field(default=None, description="Awards won")

    # Ratings
    average_rating: float | None = Field(default=None, description="Average rating")
    ratings_count: int | None = Field(default=None, description="Number of ratings")
    reviews_count: int | None = Field(default=None, description="Number of reviews")

    # Links
    preview_link: str | None = Field(default=None, description="Preview URL")
    info_link: str | None = Field(default=None, description="Information page URL")
    buy_link: str | None = Field(default=None, description="Purchase URL")
    canonical_link: str | None = Field(default=None, description="Canonical catalogue URL")

    # Provenance
    data_sources: list[str] = Field(
        default_factory=list, description="Providers that contributed data"
    )

    @property
    def primary_isbn(self) -> str | None:
        """Return ISBN-13 if available, otherwise ISBN-10."""
        return self.isbn_13 or self.isbn_10 or self.isbn


class SearchHints(BaseModel):
    """Optional filters forwarded to bulk search providers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    publisher: str | None = Field(default=None, description="Publisher filter")
    subject: str | None = Field(default=None, description="Subject or category filter")
    place: str | None = Field(default=None, description="Place of publication filter")
    year: str | None = Field(default=None, description="Publication year filter")
    language: str | None = Field(default=None, description="Language filter")

    def merged_over(self, fallback: SearchHints | None) -> SearchHints:
        """Return hints where values set here win over those of ``fallback``."""
        if fallback is None:
            return self
        return SearchHints(
            publisher=self.publisher or fallback.publisher,
            subject=self.subject or fallback.subject,
            place=self.place or fallback.place,
            year=self.year or fallback.year,
            language=self.language or fallback.language,
        )


class ParsedQuery(BaseModel):
    """Free-text query split into title, author and field hints."""

    title: str | None = None
    author: str | None = None
    publisher: str | None = None
    subject: str | None = None
    place: str | None = None
    year: str | None = None
    language: str | None = None

    @property
    def hints(self) -> SearchHints:
        return SearchHints(
            publisher=self.publisher,
            subject=self.subject,
            place=self.place,
            year=self.year,
            language=self.language,
        )


class Candidate(BaseModel):
    """A single bulk-search result before deduplication."""

    record: BookRecord
    isbn: str | None = Field(default=None, description="ISBN used as the dedup key")
    source_id: str | None = Field(default=None, description="Provider-internal identifier")
    work_key: str | None = Field(
        default=None, description="Work key used to fetch sibling editions"
    )
