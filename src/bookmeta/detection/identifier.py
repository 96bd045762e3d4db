"""Identifier detection for free-form lookup input."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from bookmeta.core.identifiers import ISBN
from bookmeta.core.normalization import strip_isbn
from bookmeta.core.types import InputType


@dataclass
class DetectionResult:
    """Result of input type detection."""

    input_type: InputType
    confidence: float  # 0.0 to 1.0
    normalized_value: str | None = None
    parsed_identifier: ISBN | None = None

    @property
    def is_identifier(self) -> bool:
        return self.input_type in (InputType.ISBN_10, InputType.ISBN_13)

    @property
    def checksum_valid(self) -> bool:
        return self.parsed_identifier is not None

    def __repr__(self) -> str:
        return (
            f"DetectionResult(type={self.input_type.value}, "
            f"confidence={self.confidence:.2f}, value={self.normalized_value!r})"
        )


class IdentifierDetector:
    """
    Decides whether a query is a book identifier.

    A query is an identifier when, after removing hyphens and whitespace, it
    is exactly 10 or exactly 13 decimal digits. Checksums are not required;
    a valid checksum only raises the reported confidence.
    """

    DIGITS_10_OR_13: ClassVar[re.Pattern[str]] = re.compile(r"^(?:[0-9]{10}|[0-9]{13})$")

    def detect_identifier(self, query: str) -> str | None:
        """Return the bare identifier, or ``None`` for free text."""
        cleaned = strip_isbn(query)
        if self.DIGITS_10_OR_13.match(cleaned):
            return cleaned
        return None

    def detect(self, query: str) -> DetectionResult:
        """Classify ``query`` as an ISBN-10, ISBN-13 or title search."""
        query = query.strip()

        if not query:
            return DetectionResult(
                input_type=InputType.UNKNOWN,
                confidence=0.0,
                normalized_value=None,
            )

        if result := self._try_isbn(query):
            return result

        return DetectionResult(
            input_type=InputType.TITLE,
            confidence=0.5,
            normalized_value=query,
        )

    def _try_isbn(self, query: str) -> DetectionResult | None:
        identifier = self.detect_identifier(query)
        if identifier is None:
            return None

        input_type = InputType.ISBN_13 if len(identifier) == 13 else InputType.ISBN_10
        try:
            parsed = ISBN.parse(identifier)
        except ValueError:
            # Digits of the right length but a bad checksum: still an identifier
            return DetectionResult(
                input_type=input_type,
                confidence=0.7,
                normalized_value=identifier,
            )

        return DetectionResult(
            input_type=input_type,
            confidence=0.95,
            normalized_value=identifier,
            parsed_identifier=parsed,
        )


_detector = IdentifierDetector()


def detect_identifier(query: str) -> str | None:
    """Module-level shortcut for :meth:`IdentifierDetector.detect_identifier`."""
    return _detector.detect_identifier(query)
