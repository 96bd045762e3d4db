"""Integration test fixtures: the ASGI app wired to scripted providers."""

from __future__ import annotations

from typing import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from bookmeta.api.app import create_app
from bookmeta.core.models import BookRecord
from bookmeta.resolution.base import ProviderConfig
from bookmeta.resolution.registry import ProviderRegistry
from bookmeta.services.resolution import BookMetadataService

# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def provider_registry(make_provider, make_candidate) -> ProviderRegistry:
    """Registry mirroring the production layout with scripted providers."""
    registry = ProviderRegistry()

    registry.register(
        make_provider(
            "Google Books",
            record=BookRecord(title="Sapiens", author="Yuval Noah Harari", page_count=464),
            search_results=[
                make_candidate("Sapiens", "9780062316097", source_id="1EiJAwAAQBAJ"),
                make_candidate("Sapiens: A Graphic History", "9780063051331"),
            ],
        )
    )
    registry.register(
        make_provider(
            "Open Library",
            record=BookRecord(title="Sapiens", description="A brief history of humankind."),
            search_results=[
                make_candidate(
                    "Sapiens",
                    "9780062316097",
                    source="Open Library",
                    source_id="/works/OL17075811W",
                    work_key="/works/OL17075811W",
                    publisher="Harper",
                ),
            ],
            editions=[
                make_candidate(
                    "Sapiens", "9781846558238", source="Open Library Editions", publisher="Harvill"
                ),
            ],
        )
    )
    registry.register(make_provider("ISBNdb", requires_key=True))
    registry.register(
        make_provider("Library of Congress", tier=2, record=BookRecord(lcc="CB113.H4813"))
    )
    registry.register(make_provider("Trove", tier=3, config=ProviderConfig(enabled=False)))
    return registry


@pytest.fixture
def test_app(provider_registry: ProviderRegistry) -> FastAPI:
    """
    Create the app with state populated directly.

    ASGITransport does not run the lifespan, so the registry and service are
    attached here instead of being built from settings.
    """
    app = create_app(cors_origins=[])
    app.state.provider_registry = provider_registry
    app.state.metadata_service = BookMetadataService(provider_registry)
    return app


@pytest.fixture
async def test_client(test_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to the test app."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
