"""Free-text query parsing: ``field: value`` hints and ``Title by Author``."""

from __future__ import annotations

import re
from typing import ClassVar

from bookmeta.core.models import ParsedQuery


def _field_pattern(keys: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(keys)
    return re.compile(
        rf'\s*(?:{alternation}):\s*"([^"]+)"|\s*(?:{alternation}):\s*(\S+)',
        re.IGNORECASE,
    )


class QueryParser:
    """
    Splits a search query into a title, an author and field hints.

    Recognised hints, scanned in this order::

        publisher: / pub:
        subject: / subj: / category: / cat:
        place: / city:
        year: / yr:
        language: / lang:

    Values are either a single non-whitespace run or a double-quoted phrase.
    The first occurrence of each hint supplies its value; every occurrence is
    removed from the text, so parsing the leftover text again finds nothing.
    """

    FIELD_PATTERNS: ClassVar[tuple[tuple[str, re.Pattern[str]], ...]] = (
        ("publisher", _field_pattern(("publisher", "pub"))),
        ("subject", _field_pattern(("subject", "subj", "category", "cat"))),
        ("place", _field_pattern(("place", "city"))),
        ("year", _field_pattern(("year", "yr"))),
        ("language", _field_pattern(("language", "lang"))),
    )

    BY_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^(.+?)\s+by\s+(.+)$", re.IGNORECASE)

    def extract_fields(self, text: str) -> tuple[dict[str, str], str]:
        """
        Pull hint fields out of ``text``.

        Returns:
            Tuple of (field values, remaining text)
        """
        remaining = text.strip()
        fields: dict[str, str] = {}

        # Removing one match can splice together a new one, so repeat until
        # a full pass over all patterns finds nothing.
        changed = True
        while changed:
            changed = False
            for name, pattern in self.FIELD_PATTERNS:
                while match := pattern.search(remaining):
                    value = (match.group(1) or match.group(2)).strip()
                    fields.setdefault(name, value)
                    remaining = (remaining[: match.start()] + remaining[match.end() :]).strip()
                    changed = True

        return fields, remaining

    def parse(self, query: str) -> ParsedQuery:
        """Parse a free-text query into title, author and hints."""
        fields, remaining = self.extract_fields(query)

        if match := self.BY_PATTERN.match(remaining):
            return ParsedQuery(
                title=match.group(1).strip(),
                author=match.group(2).strip(),
                **fields,
            )

        return ParsedQuery(title=remaining or None, author=None, **fields)


_parser = QueryParser()


def parse_query(query: str) -> ParsedQuery:
    """Module-level shortcut for :meth:`QueryParser.parse`."""
    return _parser.parse(query)
