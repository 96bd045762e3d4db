"""ISBN value object with validation and normalization."""

from __future__ import annotations

import re
from typing import ClassVar, Literal, Self

from pydantic import BaseModel, Field, field_validator, model_validator


class ISBN(BaseModel):
    """Normalized ISBN representation supporting both ISBN-10 and ISBN-13."""

    value: str = Field(..., description="Normalized ISBN value (digits only, with X for ISBN-10)")
    format: Literal["isbn10", "isbn13"]

    ISBN10_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[0-9]{9}[0-9X]$")
    ISBN13_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^(978|979)[0-9]{10}$")

    @field_validator("value", mode="before")
    @classmethod
    def normalize_isbn(cls, v: str) -> str:
        """Remove hyphens and spaces, uppercase X."""
        return re.sub(r"[-\s]", "", str(v)).upper()

    @model_validator(mode="after")
    def validate_isbn_format(self) -> Self:
        """Validate ISBN checksum and format consistency."""
        if self.format == "isbn10":
            if not self.ISBN10_PATTERN.match(self.value):
                raise ValueError(f"Invalid ISBN-10 format: {self.value}")
            if not self._checksum_ok(self.value, "isbn10"):
                raise ValueError(f"Invalid ISBN-10 checksum: {self.value}")
        else:
            if not self.ISBN13_PATTERN.match(self.value):
                raise ValueError(f"Invalid ISBN-13 format: {self.value}")
            if not self._checksum_ok(self.value, "isbn13"):
                raise ValueError(f"Invalid ISBN-13 checksum: {self.value}")
        return self

    @staticmethod
    def _checksum_ok(value: str, fmt: str) -> bool:
        if fmt == "isbn10":
            total = sum((10 if c == "X" else int(c)) * (10 - i) for i, c in enumerate(value))
            return total % 11 == 0
        total = sum(int(c) * (1 if i % 2 == 0 else 3) for i, c in enumerate(value))
        return total % 10 == 0

    def to_isbn13(self) -> ISBN:
        """Convert to ISBN-13 format."""
        if self.format == "isbn13":
            return self
        base = "978" + self.value[:-1]
        return ISBN(value=base + str(self._isbn13_check_digit(base)), format="isbn13")

    def to_isbn10(self) -> ISBN | None:
        """Convert to ISBN-10 if possible (only 978 prefix)."""
        if self.format == "isbn10":
            return self
        if not self.value.startswith("978"):
            return None
        base = self.value[3:-1]
        return ISBN(value=base + self._isbn10_check_digit(base), format="isbn10")

    @staticmethod
    def _isbn13_check_digit(base: str) -> int:
        total = sum(int(c) * (1 if i % 2 == 0 else 3) for i, c in enumerate(base))
        return (10 - (total % 10)) % 10

    @staticmethod
    def _isbn10_check_digit(base: str) -> str:
        total = sum(int(c) * (10 - i) for i, c in enumerate(base))
        checksum = (11 - (total % 11)) % 11
        return "X" if checksum == 10 else str(checksum)

    @classmethod
    def parse(cls, value: str) -> ISBN:
        """Parse an ISBN string, auto-detecting format."""
        normalized = re.sub(r"[-\s]", "", value).upper()
        if len(normalized) == 10:
            return cls(value=normalized, format="isbn10")
        elif len(normalized) == 13:
            return cls(value=normalized, format="isbn13")
        raise ValueError(f"Invalid ISBN length: {len(normalized)}")

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check whether ``value`` parses as an ISBN with a correct checksum."""
        try:
            cls.parse(value)
        except ValueError:
            return False
        return True

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        # Normalize to ISBN-13 for consistent hashing
        return hash(self.to_isbn13().value)


def isbn_variants(value: str) -> tuple[str | None, str | None]:
    """
    Return ``(isbn10, isbn13)`` for an identifier.

    Identifiers with a bad checksum cannot be converted; the raw value is
    returned in the slot matching its length.
    """
    try:
        isbn = ISBN.parse(value)
    except ValueError:
        raw = re.sub(r"[-\s]", "", value)
        return (raw if len(raw) == 10 else None, raw if len(raw) == 13 else None)

    isbn10 = isbn.to_isbn10()
    return (isbn10.value if isbn10 else None, isbn.to_isbn13().value)
