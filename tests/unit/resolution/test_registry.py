"""Tests for the provider registry."""

from __future__ import annotations

import pytest

from bookmeta.config import BookmetaSettings
from bookmeta.core.exceptions import ConfigurationMissingError
from bookmeta.resolution.aggregator import MultiResultAggregator
from bookmeta.resolution.cascade import CascadeConfig
from bookmeta.resolution.registry import ProviderRegistry


class TestRegistryFromSettings:
    """Tests for building the default provider set."""

    def test_declared_order_and_tiers(self, mock_settings: BookmetaSettings):
        registry = ProviderRegistry.from_settings(mock_settings)

        assert [(d.name, d.priority_tier) for d in registry.descriptors] == [
            ("Google Books", 1),
            ("Open Library", 1),
            ("ISBNdb", 1),
            ("CrossRef", 2),
            ("Internet Archive", 2),
            ("Library of Congress", 2),
            ("Wikidata", 2),
            ("Trove", 3),
        ]
        assert registry.tiers() == [1, 2, 3]

    def test_credentials_passed_through(self, mock_settings: BookmetaSettings):
        registry = ProviderRegistry.from_settings(mock_settings)

        assert registry.get("ISBNdb").config.api_key == "test-isbndb-key"
        assert registry.get("Trove").config.api_key == "test-trove-key"
        assert registry.get("CrossRef").config.contact_email == "test@example.com"

    def test_keyed_providers_registered_without_keys(
        self, mock_settings_minimal: BookmetaSettings
    ):
        """Providers missing credentials stay registered but unconfigured."""
        registry = ProviderRegistry.from_settings(mock_settings_minimal)

        assert registry.get("ISBNdb").is_configured is False
        assert registry.get("Trove").is_configured is False
        assert registry.get("Google Books").is_configured is True


class TestRegistryLookup:
    """Tests for lookups and factories."""

    def test_get_unknown_raises(self):
        with pytest.raises(ConfigurationMissingError, match="not registered"):
            ProviderRegistry().get("Nope")

    def test_register_overrides(self, make_provider):
        registry = ProviderRegistry()
        descriptor = registry.register(make_provider("A", tier=1), priority_tier=4, name="Alias")

        assert descriptor.priority_tier == 4
        assert registry.get("Alias").source_name == "A"

    def test_cascade_uses_config(self, make_provider):
        registry = ProviderRegistry()
        registry.register(make_provider("A"))

        cascade = registry.cascade(CascadeConfig(provider_timeout=1.5))

        assert cascade.config.provider_timeout == 1.5
        assert [d.name for d in cascade.providers] == ["A"]

    def test_aggregator_requires_search_providers(self, make_provider):
        registry = ProviderRegistry()
        registry.register(make_provider("Google Books"))
        registry.register(make_provider("Open Library"))

        aggregator = registry.aggregator(limit=10, edition_limit=5, max_results=20)

        assert isinstance(aggregator, MultiResultAggregator)
        assert aggregator.limit == 10
        assert aggregator.max_results == 20

    def test_aggregator_missing_provider(self, make_provider):
        registry = ProviderRegistry()
        registry.register(make_provider("Google Books"))

        with pytest.raises(ConfigurationMissingError):
            registry.aggregator()

    async def test_close_all(self, make_provider):
        registry = ProviderRegistry()
        registry.register(make_provider("A"))

        await registry.close_all()
