"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from bookmeta.config import BookmetaSettings, get_settings
from bookmeta.resolution.registry import ProviderRegistry
from bookmeta.services.resolution import BookMetadataService


async def get_provider_registry(request: Request) -> ProviderRegistry:
    """Get provider registry from app state."""
    return request.app.state.provider_registry


async def get_metadata_service(request: Request) -> BookMetadataService:
    """Get the metadata service built at startup."""
    return request.app.state.metadata_service


# Type aliases for cleaner dependency injection
Settings = Annotated[BookmetaSettings, Depends(get_settings)]
Providers = Annotated[ProviderRegistry, Depends(get_provider_registry)]
MetadataService = Annotated[BookMetadataService, Depends(get_metadata_service)]
