"""Query classification: identifier detection and free-text parsing."""

from .identifier import DetectionResult, IdentifierDetector, detect_identifier
from .query import QueryParser, parse_query

__all__ = [
    "DetectionResult",
    "IdentifierDetector",
    "QueryParser",
    "detect_identifier",
    "parse_query",
]
