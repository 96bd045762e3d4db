"""Tests for the two-provider quick lookup."""

from __future__ import annotations

from bookmeta.core.models import BookRecord
from bookmeta.resolution.fast import FastDualLookup

ISBN = "9780143127741"


class TestFastDualLookup:
    """Primary wins per field; secondary fills what the primary lacks."""

    async def test_primary_wins(self, make_provider):
        primary = make_provider("Google Books", record=BookRecord(title="Primary", author="P"))
        secondary = make_provider(
            "Open Library", record=BookRecord(title="Secondary", publisher="Pub")
        )

        record = await FastDualLookup(primary, secondary).lookup(ISBN)

        assert record.title == "Primary"
        assert record.author == "P"
        assert record.publisher == "Pub"
        assert record.data_sources == ["Google Books", "Open Library"]

    async def test_secondary_fills_empty_values(self, make_provider):
        """Blank description, empty subjects and missing page count are filled."""
        primary = make_provider(
            "Google Books", record=BookRecord(title="T", description="", subjects=[])
        )
        secondary = make_provider(
            "Open Library",
            record=BookRecord(description="From OL", subjects=["History"], page_count=443),
        )

        record = await FastDualLookup(primary, secondary).lookup(ISBN)

        assert record.description == "From OL"
        assert record.subjects == ["History"]
        assert record.page_count == 443

    async def test_primary_only(self, make_provider):
        primary = make_provider("Google Books", record=BookRecord(title="T"))
        secondary = make_provider("Open Library")

        record = await FastDualLookup(primary, secondary).lookup(ISBN)

        assert record.title == "T"
        assert record.data_sources == ["Google Books"]

    async def test_secondary_only(self, make_provider):
        primary = make_provider("Google Books", error=RuntimeError("down"))
        secondary = make_provider("Open Library", record=BookRecord(title="OL"))

        record = await FastDualLookup(primary, secondary).lookup(ISBN)

        assert record.title == "OL"
        assert record.data_sources == ["Open Library"]

    async def test_neither_has_data(self, make_provider):
        primary = make_provider("Google Books")
        secondary = make_provider("Open Library", error=RuntimeError("down"))

        assert await FastDualLookup(primary, secondary).lookup(ISBN) is None

    async def test_both_called_once(self, make_provider):
        primary = make_provider("Google Books", record=BookRecord(title="T"))
        secondary = make_provider("Open Library", record=BookRecord(title="T"))

        await FastDualLookup(primary, secondary).lookup(ISBN)

        assert primary.lookup_calls == [ISBN]
        assert secondary.lookup_calls == [ISBN]

    async def test_sapiens_by_isbn(self, make_provider):
        primary = make_provider(
            "Google Books",
            record=BookRecord(
                title="Sapiens",
                author="Yuval Noah Harari",
                publisher="Harper",
                published_date="2015",
            ),
        )
        secondary = make_provider(
            "Open Library",
            record=BookRecord(
                title="Sapiens: A Brief History of Humankind",
                page_count=464,
                subjects=["Human beings", "Civilization"],
            ),
        )

        record = await FastDualLookup(primary, secondary).lookup(ISBN)

        assert record.title == "Sapiens"
        assert record.author == "Yuval Noah Harari"
        assert record.publisher == "Harper"
        assert record.published_date == "2015"
        assert record.page_count == 464
        assert record.subjects == ["Human beings", "Civilization"]
        assert record.data_sources == ["Google Books", "Open Library"]
