"""Provider registry for managing provider instances and building resolvers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bookmeta.core.exceptions import ConfigurationMissingError
from bookmeta.core.types import SourceName
from bookmeta.resolution.aggregator import MultiResultAggregator
from bookmeta.resolution.base import AbstractProvider, AbstractSearchProvider, ProviderConfig
from bookmeta.resolution.cascade import CascadeConfig, CascadeResolver
from bookmeta.resolution.fast import FastDualLookup

if TYPE_CHECKING:
    from bookmeta.config import BookmetaSettings


@dataclass(frozen=True)
class ProviderDescriptor:
    """A registered provider with its display name and cascade tier."""

    name: str
    priority_tier: int
    provider: AbstractProvider

    def __post_init__(self) -> None:
        if not 1 <= self.priority_tier <= 4:
            raise ValueError(f"Priority tier must be between 1 and 4, got {self.priority_tier}")


class ProviderRegistry:
    """
    Holds every provider in declared order and builds resolvers over them.

    Declared order is the order of registration; it decides merge precedence
    inside a cascade tier. Providers needing a credential are registered
    even without one so the cascade can report them as skipped.
    """

    def __init__(self) -> None:
        self._descriptors: list[ProviderDescriptor] = []

    def register(
        self,
        provider: AbstractProvider,
        *,
        priority_tier: int | None = None,
        name: str | None = None,
    ) -> ProviderDescriptor:
        """Register a provider, defaulting its tier and name from the class."""
        descriptor = ProviderDescriptor(
            name=name or provider.source_name,
            priority_tier=priority_tier or provider.priority_tier,
            provider=provider,
        )
        self._descriptors.append(descriptor)
        return descriptor

    @property
    def descriptors(self) -> list[ProviderDescriptor]:
        return list(self._descriptors)

    def tiers(self) -> list[int]:
        """Distinct tiers in ascending order."""
        return sorted({d.priority_tier for d in self._descriptors})

    def get(self, name: str) -> AbstractProvider:
        """Look up a registered provider by its display name."""
        for descriptor in self._descriptors:
            if descriptor.name == name:
                return descriptor.provider
        raise ConfigurationMissingError(
            message=f"Provider not registered: {name}",
            source=name,
        )

    def _search_provider(self, name: str) -> AbstractSearchProvider:
        provider = self.get(name)
        if not isinstance(provider, AbstractSearchProvider):
            raise ConfigurationMissingError(
                message=f"Provider does not support search: {name}",
                source=name,
            )
        return provider

    def cascade(self, config: CascadeConfig | None = None) -> CascadeResolver:
        """Get a cascade resolver over every registered provider."""
        return CascadeResolver(self._descriptors, config)

    def fast_lookup(
        self,
        primary: str = SourceName.GOOGLE_BOOKS,
        secondary: str = SourceName.OPEN_LIBRARY,
    ) -> FastDualLookup:
        """Get a two-provider quick lookup."""
        return FastDualLookup(self.get(primary), self.get(secondary))

    def aggregator(
        self,
        *,
        limit: int = 40,
        edition_limit: int = 30,
        max_results: int = 50,
    ) -> MultiResultAggregator:
        """Get a multi-result aggregator over the two bulk-search providers."""
        return MultiResultAggregator(
            fast=self.fast_lookup(),
            primary_search=self._search_provider(SourceName.GOOGLE_BOOKS),
            secondary_search=self._search_provider(SourceName.OPEN_LIBRARY),
            limit=limit,
            edition_limit=edition_limit,
            max_results=max_results,
        )

    @classmethod
    def from_settings(cls, settings: BookmetaSettings) -> ProviderRegistry:
        """
        Create a registry with every provider configured from settings.

        Registration order is the declared merge order.
        """
        from bookmeta.resolution.books import (
            CrossrefProvider,
            GoogleBooksProvider,
            InternetArchiveProvider,
            ISBNdbProvider,
            LibraryOfCongressProvider,
            OpenLibraryProvider,
            TroveProvider,
            WikidataProvider,
        )

        def config(api_key: str | None = None) -> ProviderConfig:
            return ProviderConfig(
                api_key=api_key,
                contact_email=settings.crossref_email,
                timeout=settings.http_timeout,
            )

        registry = cls()

        # Tier 1
        registry.register(GoogleBooksProvider(config(settings.google_books_api_key)))
        registry.register(OpenLibraryProvider(config()))
        registry.register(ISBNdbProvider(config(settings.isbndb_api_key)))

        # Tier 2
        registry.register(CrossrefProvider(config()))
        registry.register(InternetArchiveProvider(config()))
        registry.register(LibraryOfCongressProvider(config()))
        registry.register(WikidataProvider(config()))

        # Tier 3
        registry.register(TroveProvider(config(settings.trove_api_key)))

        return registry

    async def close_all(self) -> None:
        """Close all registered providers."""
        for descriptor in self._descriptors:
            await descriptor.provider.close()
