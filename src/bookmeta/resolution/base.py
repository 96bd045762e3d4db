"""Abstract provider base with HTTP client management and attempt bookkeeping."""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, ClassVar

import httpx
from pydantic import BaseModel

from bookmeta.core.exceptions import (
    ProviderTimeoutError,
    ProviderUnavailableError,
    RateLimitError,
)
from bookmeta.core.models import BookRecord, Candidate, SearchHints
from bookmeta.core.types import ResolutionStatus, SourceName

logger = logging.getLogger(__name__)


class ProviderConfig(BaseModel):
    """Configuration for a provider."""

    api_key: str | None = None
    base_url: str | None = None
    timeout: float = 30.0
    contact_email: str | None = None
    enabled: bool = True


class ProviderAttempt(BaseModel):
    """Outcome of invoking one provider once."""

    source: str
    status: ResolutionStatus
    duration_ms: float = 0.0
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.status == ResolutionStatus.SUCCESS


class AbstractProvider(ABC):
    """
    Abstract base class for all metadata providers.

    Provides:
    - HTTP client management with connection pooling
    - Credential checks for providers that need an API key
    - A single-shot ``attempt`` wrapper that turns every failure into data

    Subclasses translate exactly one external schema into :class:`BookRecord`.
    No retries are performed; one logical lookup is one request (plus the
    follow-up requests a provider documents, e.g. Open Library works).
    """

    SOURCE_NAME: ClassVar[SourceName]
    BASE_URL: ClassVar[str]
    PRIORITY_TIER: ClassVar[int] = 1
    REQUIRES_API_KEY: ClassVar[bool] = False

    def __init__(self, config: ProviderConfig | None = None) -> None:
        self.config = config or ProviderConfig()
        self._client: httpx.AsyncClient | None = None

    @property
    def source_name(self) -> str:
        """Provider label used for provenance and progress reporting."""
        return str(self.SOURCE_NAME)

    @property
    def priority_tier(self) -> int:
        """Cascade tier (1 is tried first)."""
        return self.PRIORITY_TIER

    @property
    def is_enabled(self) -> bool:
        """Whether this provider is enabled."""
        return self.config.enabled

    @property
    def is_configured(self) -> bool:
        """Whether every credential this provider needs is present."""
        return not self.REQUIRES_API_KEY or bool(self.config.api_key)

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url or self.BASE_URL,
                timeout=httpx.Timeout(self.config.timeout),
                headers=self._get_default_headers(),
                follow_redirects=True,
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(
                message=f"HTTP error: {e}",
                source=self.source_name,
            ) from e

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests. Override to add auth."""
        return {
            "User-Agent": "bookmeta/0.1",
            "Accept": "application/json",
        }

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _make_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a single HTTP request, mapping 429 to :class:`RateLimitError`."""
        async with self._get_client() as client:
            response = await client.request(method, url, **kwargs)

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                message="Rate limit exceeded",
                source=self.source_name,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        return response

    async def _get_json(self, url: str, **kwargs: Any) -> Any | None:
        """
        GET ``url`` and decode its JSON body.

        Returns ``None`` on 404. Other non-success statuses raise
        :class:`ProviderUnavailableError`.
        """
        response = await self._make_request("GET", url, **kwargs)

        if response.status_code == 404:
            return None

        if not response.is_success:
            raise ProviderUnavailableError(
                message=f"{self.source_name} returned HTTP {response.status_code}",
                source=self.source_name,
                status_code=response.status_code,
            )

        return response.json()

    @abstractmethod
    async def lookup(self, isbn: str) -> BookRecord | None:
        """
        Look up a single book by identifier.

        Args:
            isbn: A bare 10 or 13 digit identifier

        Returns:
            A partial record, or ``None`` when the provider has no data
        """
        ...

    async def attempt(
        self,
        isbn: str,
        timeout: float | None = None,
    ) -> tuple[BookRecord | None, ProviderAttempt]:
        """
        Run :meth:`lookup` without ever raising.

        A missing credential skips the call. Exceptions, malformed payloads
        and calls exceeding ``timeout`` all degrade to "no data".
        """
        start = time.monotonic()

        def _attempt(status: ResolutionStatus, error: str | None = None) -> ProviderAttempt:
            return ProviderAttempt(
                source=self.source_name,
                status=status,
                duration_ms=(time.monotonic() - start) * 1000,
                error_message=error,
            )

        if not self.is_configured:
            logger.debug(f"{self.source_name} not configured, skipping")
            return None, _attempt(ResolutionStatus.SKIPPED, "API key not configured")

        try:
            async with asyncio.timeout(timeout):
                record = await self.lookup(isbn)
        except TimeoutError:
            error = ProviderTimeoutError(
                message=f"Timed out after {timeout}s",
                source=self.source_name,
                timeout=timeout,
            )
            logger.warning(f"{self.source_name}: {error.message} for {isbn}")
            return None, _attempt(ResolutionStatus.TIMEOUT, error.message)
        except Exception as e:
            logger.warning(f"{self.source_name} lookup failed for {isbn}: {e}")
            return None, _attempt(ResolutionStatus.ERROR, str(e))

        if record is None:
            return None, _attempt(ResolutionStatus.NOT_FOUND)

        return record, _attempt(ResolutionStatus.SUCCESS)

    async def __aenter__(self) -> AbstractProvider:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class AbstractSearchProvider(AbstractProvider):
    """Provider that can also answer free-text searches with many candidates."""

    @abstractmethod
    async def search(
        self,
        title: str,
        author: str | None = None,
        *,
        limit: int = 40,
        hints: SearchHints | None = None,
    ) -> list[Candidate]:
        """Search by title and optional author, returning up to ``limit`` candidates."""
        ...

    async def fetch_editions(self, work_key: str, limit: int = 30) -> list[Candidate]:
        """Return sibling editions of a work. Providers without works return nothing."""
        return []
