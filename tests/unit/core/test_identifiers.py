"""Tests for the ISBN value object and identifier variants."""

from __future__ import annotations

import pytest

from bookmeta.core.identifiers import ISBN, isbn_variants


# ============================================================================
# ISBN Tests
# ============================================================================


class TestISBN:
    """Tests for ISBN validation and conversion."""

    # Valid ISBN-10 examples
    @pytest.mark.parametrize(
        "isbn,expected",
        [
            ("0134093410", "0134093410"),  # Clean Code
            ("0-13-409341-0", "0134093410"),  # With hyphens
            ("0 13 409341 0", "0134093410"),  # With spaces
            ("155860832X", "155860832X"),  # X check digit
            ("155860832x", "155860832X"),  # Lowercase x
            ("0-306-40615-2", "0306406152"),  # Another valid ISBN
        ],
    )
    def test_isbn10_valid(self, isbn: str, expected: str):
        """Valid ISBN-10 should be parsed and normalized."""
        parsed = ISBN.parse(isbn)
        assert parsed.value == expected
        assert parsed.format == "isbn10"

    @pytest.mark.parametrize(
        "isbn",
        [
            "0134093411",  # Invalid checksum
            "013409341",  # Too short (9 digits)
            "01340934100",  # Too long (11 digits)
            "ABCDEFGHIJ",  # Non-numeric
            "0134093X10",  # X in wrong position
        ],
    )
    def test_isbn10_invalid(self, isbn: str):
        """Invalid ISBN-10 should raise ValueError."""
        with pytest.raises(ValueError):
            ISBN.parse(isbn)

    # Valid ISBN-13 examples
    @pytest.mark.parametrize(
        "isbn,expected",
        [
            ("9780134093413", "9780134093413"),  # Clean Code
            ("978-0-13-409341-3", "9780134093413"),  # With hyphens
            ("978 0 13 409341 3", "9780134093413"),  # With spaces
            ("9790001000000", "9790001000000"),  # 979 prefix
            ("978-3-16-148410-0", "9783161484100"),  # Another valid
        ],
    )
    def test_isbn13_valid(self, isbn: str, expected: str):
        """Valid ISBN-13 should be parsed and normalized."""
        parsed = ISBN.parse(isbn)
        assert parsed.value == expected
        assert parsed.format == "isbn13"

    @pytest.mark.parametrize(
        "isbn",
        [
            "9780134093412",  # Invalid checksum
            "978013409341",  # Too short (12 digits)
            "97801340934133",  # Too long (14 digits)
            "9770134093413",  # Invalid prefix (977)
            "978ABCDEFGHIJ",  # Non-numeric
        ],
    )
    def test_isbn13_invalid(self, isbn: str):
        """Invalid ISBN-13 should raise ValueError."""
        with pytest.raises(ValueError):
            ISBN.parse(isbn)

    # Conversion tests
    def test_isbn10_to_isbn13(self):
        """ISBN-10 to ISBN-13 conversion should work correctly."""
        isbn10 = ISBN.parse("0134093410")
        isbn13 = isbn10.to_isbn13()
        assert isbn13.value == "9780134093413"
        assert isbn13.format == "isbn13"

    def test_isbn13_to_isbn13(self):
        """Converting ISBN-13 to ISBN-13 should return same value."""
        isbn13 = ISBN.parse("9780134093413")
        result = isbn13.to_isbn13()
        assert result.value == isbn13.value

    def test_isbn13_to_isbn10(self):
        """ISBN-13 to ISBN-10 conversion should work for 978 prefix."""
        isbn13 = ISBN.parse("9780134093413")
        isbn10 = isbn13.to_isbn10()
        assert isbn10 is not None
        assert isbn10.value == "0134093410"
        assert isbn10.format == "isbn10"

    def test_isbn13_979_to_isbn10_fails(self):
        """ISBN-13 with 979 prefix cannot be converted to ISBN-10."""
        isbn13 = ISBN.parse("9790001000000")
        isbn10 = isbn13.to_isbn10()
        assert isbn10 is None

    def test_isbn_with_x_check_digit_conversion(self):
        """ISBN-10 with X check digit should convert correctly."""
        isbn10 = ISBN.parse("155860832X")
        isbn13 = isbn10.to_isbn13()
        # Convert back and verify X is preserved
        back = isbn13.to_isbn10()
        assert back is not None
        assert back.value == "155860832X"

    # Hash and equality tests
    def test_isbn10_and_isbn13_same_hash(self):
        """ISBN-10 and equivalent ISBN-13 should hash the same."""
        isbn10 = ISBN.parse("0134093410")
        isbn13 = ISBN.parse("9780134093413")
        assert hash(isbn10) == hash(isbn13)

    def test_isbn_string_representation(self):
        """ISBN __str__ should return normalized value."""
        isbn = ISBN.parse("978-0-13-409341-3")
        assert str(isbn) == "9780134093413"

    def test_is_valid(self):
        """is_valid reports checksum failures without raising."""
        assert ISBN.is_valid("9780134093413") is True
        assert ISBN.is_valid("9780134093412") is False
        assert ISBN.is_valid("12345") is False


# ============================================================================
# isbn_variants Tests
# ============================================================================


class TestISBNVariants:
    """Tests for deriving both identifier forms."""

    def test_from_isbn13(self):
        assert isbn_variants("9780143127741") == ("0143127748", "9780143127741")

    def test_from_isbn10(self):
        assert isbn_variants("0-14-312774-8") == ("0143127748", "9780143127741")

    def test_979_has_no_isbn10(self):
        assert isbn_variants("9790001000000") == (None, "9790001000000")

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("9780134093412", (None, "9780134093412")),  # Bad checksum, 13 digits
            ("0134093411", ("0134093411", None)),  # Bad checksum, 10 digits
            ("12345", (None, None)),
        ],
    )
    def test_invalid_values_passed_through(self, value: str, expected: tuple):
        """Unconvertible identifiers keep their raw form in the matching slot."""
        assert isbn_variants(value) == expected
