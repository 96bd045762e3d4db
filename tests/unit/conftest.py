"""Unit test fixtures for provider tests."""

from __future__ import annotations

import pytest

from bookmeta.resolution.base import ProviderConfig

# ============================================================================
# Provider Configuration Fixtures
# ============================================================================


@pytest.fixture
def provider_config() -> ProviderConfig:
    """Create a provider config with a key for testing."""
    return ProviderConfig(
        api_key="test-api-key",
        contact_email="test@example.com",
        timeout=10.0,
        enabled=True,
    )


@pytest.fixture
def provider_config_no_key() -> ProviderConfig:
    """Create a provider config without API key."""
    return ProviderConfig(api_key=None, timeout=10.0, enabled=True)
