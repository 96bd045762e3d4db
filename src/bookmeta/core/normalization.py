"""Text normalization helpers shared by provider adapters and enrichment."""

import re
import unicodedata
from typing import Any


def normalize_text(
    text: str,
    *,
    lowercase: bool = True,
    remove_accents: bool = True,
    remove_punctuation: bool = True,
    collapse_whitespace: bool = True,
) -> str:
    """
    Normalize text for comparison purposes.

    Args:
        text: Input text to normalize
        lowercase: Convert to lowercase
        remove_accents: Remove diacritical marks (e -> e)
        remove_punctuation: Remove all punctuation
        collapse_whitespace: Replace multiple spaces with single space

    Returns:
        Normalized string suitable for comparison
    """
    if not text:
        return ""

    result = text

    if remove_accents:
        nfkd = unicodedata.normalize("NFKD", result)
        result = "".join(c for c in nfkd if not unicodedata.combining(c))

    if lowercase:
        result = result.lower()

    if remove_punctuation:
        result = re.sub(r"[^\w\s]", "", result)

    if collapse_whitespace:
        result = re.sub(r"\s+", " ", result).strip()

    return result


def strip_isbn(value: str) -> str:
    """Remove hyphens and whitespace from an identifier."""
    return re.sub(r"[-\s]", "", value)


def https_url(url: str | None) -> str | None:
    """Upgrade a plain ``http:`` URL to ``https:``."""
    if not url:
        return None
    if url.startswith("http:"):
        return "https:" + url[5:]
    return url


def join_names(names: Any) -> str | None:
    """Join a provider's name list into a comma separated string."""
    if not names:
        return None
    if isinstance(names, str):
        return names.strip() or None
    parts = [str(n).strip() for n in names if n and str(n).strip()]
    return ", ".join(parts) or None


def first_of(value: Any) -> Any:
    """Return the first element of a list, or the value itself."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def as_list(value: Any) -> list[str] | None:
    """Coerce a scalar or list of strings into a non-empty list."""
    if value is None:
        return None
    items = value if isinstance(value, list) else [value]
    result = [str(v).strip() for v in items if v is not None and str(v).strip()]
    return result or None


def to_str(value: Any) -> str | None:
    """Stringify a scalar, mapping blanks to ``None``."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_int(value: Any) -> int | None:
    """Parse a page count or similar integer, ignoring junk."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if match := re.search(r"\d+", str(value)):
        return int(match.group())
    return None


def page_span(pages: str | None) -> int | None:
    """Convert a ``"start-end"`` page range into a page count."""
    if not pages:
        return None
    parts = pages.split("-")
    if len(parts) == 2 and parts[0].strip().isdigit() and parts[1].strip().isdigit():
        return int(parts[1]) - int(parts[0]) + 1
    return None
