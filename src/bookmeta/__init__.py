"""Bookmeta - Book metadata resolution and aggregation across public catalogues."""

from bookmeta.client import BookmetaClient, resolve_book, search_books
from bookmeta.core.models import BookRecord, Candidate, SearchHints
from bookmeta.core.types import InputType, ResolutionStatus, SourceName
from bookmeta.resolution.cascade import CascadeConfig, CascadeResult

__version__ = "0.1.0"
__all__ = [
    # Client
    "BookmetaClient",
    "resolve_book",
    "search_books",
    # Types
    "InputType",
    "ResolutionStatus",
    "SourceName",
    # Models
    "BookRecord",
    "Candidate",
    "SearchHints",
    # Results
    "CascadeConfig",
    "CascadeResult",
    # Version
    "__version__",
]
