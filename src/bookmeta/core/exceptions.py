"""Custom exception hierarchy for bookmeta."""

from typing import Any


class BookmetaError(Exception):
    """Base exception for all bookmeta errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(BookmetaError):
    """Input validation failed."""

    pass


class ResolutionError(BookmetaError):
    """Failed to resolve metadata from a provider."""

    pass


class ProviderUnavailableError(ResolutionError):
    """External provider API is unavailable or returned a non-success status."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.status_code = status_code


class RateLimitError(ProviderUnavailableError):
    """Provider rejected the request with a rate-limit response."""

    def __init__(
        self,
        message: str,
        source: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, source, status_code=429, details=details)
        self.retry_after = retry_after


class ProviderTimeoutError(ResolutionError):
    """Provider did not answer within the per-call timeout."""

    def __init__(
        self,
        message: str,
        source: str,
        timeout: float,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.timeout = timeout


class ConfigurationMissingError(ResolutionError):
    """Provider requires a credential that is not configured."""

    def __init__(
        self,
        message: str,
        source: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source

