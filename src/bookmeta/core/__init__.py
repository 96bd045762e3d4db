"""Core types, models, and utilities."""

from .exceptions import (
    BookmetaError,
    ConfigurationMissingError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    RateLimitError,
    ResolutionError,
    ValidationError,
)
from .identifiers import ISBN, isbn_variants
from .merge import (
    IMPORTANT_FIELDS,
    MERGEABLE_FIELDS,
    is_empty,
    merge_records,
    missing_fields,
    populated_fields,
)
from .models import BookRecord, Candidate, ParsedQuery, SearchHints
from .normalization import normalize_text, strip_isbn
from .types import InputType, ProgressCallback, ResolutionStatus, SourceName

__all__ = [
    # Types
    "InputType",
    "ProgressCallback",
    "ResolutionStatus",
    "SourceName",
    # Identifiers
    "ISBN",
    "isbn_variants",
    # Models
    "BookRecord",
    "Candidate",
    "ParsedQuery",
    "SearchHints",
    # Merge
    "IMPORTANT_FIELDS",
    "MERGEABLE_FIELDS",
    "is_empty",
    "merge_records",
    "missing_fields",
    "populated_fields",
    # Normalization
    "normalize_text",
    "strip_isbn",
    # Exceptions
    "BookmetaError",
    "ConfigurationMissingError",
    "ProviderTimeoutError",
    "ProviderUnavailableError",
    "RateLimitError",
    "ResolutionError",
    "ValidationError",
]
