"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BookmetaSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="BOOKMETA_",
    )

    # Provider credentials
    google_books_api_key: str | None = Field(
        default=None,
        description="Google Books API key (optional, increases quotas)",
    )
    isbndb_api_key: str | None = Field(
        default=None,
        description="ISBNdb API key (provider is skipped without one)",
    )
    trove_api_key: str | None = Field(
        default=None,
        description="Trove (National Library of Australia) API key",
    )
    crossref_email: str | None = Field(
        default=None,
        description="Email for Crossref polite pool (recommended)",
    )

    # Orchestration
    provider_timeout: float = Field(
        default=8.0,
        gt=0.0,
        description="Per-provider call timeout in seconds for the cascade",
    )
    http_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Transport-level timeout for provider HTTP clients",
    )
    bulk_search_limit: int = Field(
        default=40,
        ge=1,
        le=40,
        description="Maximum candidates requested from each bulk search provider",
    )
    edition_limit: int = Field(
        default=30,
        ge=0,
        description="Maximum editions fetched during edition expansion",
    )
    max_search_results: int = Field(
        default=50,
        ge=1,
        le=50,
        description="Cap on the number of records returned by a multi-result search",
    )

    # App settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins for the HTTP API",
    )


@lru_cache
def get_settings() -> BookmetaSettings:
    """Get cached settings instance."""
    return BookmetaSettings()
