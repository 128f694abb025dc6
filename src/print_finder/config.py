"""Configuration module using pydantic-settings for type-safe env variable loading."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from print_finder.consts import (
    DEFAULT_USER_AGENT,
    MAKERWORLD_BASE_URL,
    MAKERWORLD_SEARCH_URL,
    MAX_RESULTS_PER_SOURCE,
    PRINTABLES_API_URL,
    THINGIVERSE_API_URL,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Uses pydantic-settings for type-safe configuration with validation.
    Automatically loads from .env file if present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Thingiverse API Configuration
    thingiverse_token: str = Field(
        default="",
        description="Thingiverse app access token, sent as the access_token query parameter",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Search Configuration
    max_results_per_source: int = Field(
        default=MAX_RESULTS_PER_SOURCE,
        ge=1,
        le=MAX_RESULTS_PER_SOURCE,
        description="Maximum number of results kept from each source (at most 15)",
    )
    search_timeout: int = Field(
        default=30,
        ge=1,
        le=120,
        description="Transport timeout in seconds for each upstream request",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="Browser-like User-Agent sent to the Makerworld search page",
    )

    # Upstream endpoints
    printables_api_url: str = Field(
        default=PRINTABLES_API_URL,
        description="Printables GraphQL endpoint",
    )
    thingiverse_api_url: str = Field(
        default=THINGIVERSE_API_URL,
        description="Thingiverse search endpoint (term is appended as a path segment)",
    )
    makerworld_search_url: str = Field(
        default=MAKERWORLD_SEARCH_URL,
        description="Makerworld HTML search page",
    )
    makerworld_base_url: str = Field(
        default=MAKERWORLD_BASE_URL,
        description="Origin used to resolve relative Makerworld model links",
    )


# Global settings instance
settings = Settings()
