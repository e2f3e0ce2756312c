"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the storefront using Pydantic Settings.

This module implements the Singleton pattern to ensure a single global
configuration instance throughout the application lifecycle.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- JSON array settings for category lists
- Search tuning knobs (threshold, minimum query length, display limit)

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Security Considerations:
-----------------------
- Never commit .env files to version control
- Change ADMIN_CODE from its default before exposing the service

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


DEFAULT_CATEGORIES = ["fridges", "cloth-washers", "acs", "fans", "dish-washers", "other"]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        products_file: Path to the persisted catalog JSON
        uploads_directory: Directory where uploaded product images live
        admin_code: Shared secret gating catalog writes
        categories: Known categories (JSON array string)
        searchable_categories: Categories covered by fuzzy search (JSON array string)
        search_threshold: Minimum (exclusive) similarity for a match
        search_min_query_length: Queries shorter than this return nothing
        search_display_limit: Default number of results returned by the API
        upload_max_bytes: Maximum accepted image size
        whatsapp_phone: Phone number receiving order messages
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> settings.searchable_categories_list
        ['other']
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Appliance Storefront",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=True,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    products_file: str = Field(
        default="data/products.json",
        description="Path to the persisted catalog JSON"
    )

    categories: str = Field(
        default=json.dumps(DEFAULT_CATEGORIES),
        description="Known categories as JSON array string"
    )

    searchable_categories: str = Field(
        default='["other"]',
        description="Categories covered by fuzzy search as JSON array string"
    )

    # =========================================================================
    # ADMIN SETTINGS
    # =========================================================================
    admin_code: str = Field(
        default="1234",
        min_length=1,
        description="Shared secret required for catalog writes and uploads"
    )

    # =========================================================================
    # SEARCH SETTINGS
    # =========================================================================
    search_threshold: float = Field(
        default=0.6,
        ge=0.0,
        lt=1.0,
        description="Similarity must be strictly greater than this to match"
    )

    search_min_query_length: int = Field(
        default=2,
        ge=1,
        le=20,
        description="Queries shorter than this return no results"
    )

    search_display_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Default number of search results returned"
    )

    # =========================================================================
    # UPLOAD SETTINGS
    # =========================================================================
    uploads_directory: str = Field(
        default="uploads",
        description="Directory for uploaded product images"
    )

    upload_max_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        description="Maximum accepted image size in bytes"
    )

    # =========================================================================
    # ORDER HAND-OFF SETTINGS
    # =========================================================================
    whatsapp_phone: str = Field(
        default="+96171294697",
        description="Phone number that receives order messages"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Args:
            value: Raw environment value

        Returns:
            Lowercase normalized environment name
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("whatsapp_phone")
    @classmethod
    def validate_whatsapp_phone(cls, value: str) -> str:
        """Require at least one digit in the order phone number."""
        if not any(ch.isdigit() for ch in value):
            raise ValueError(f"Phone number has no digits: {value!r}")
        return value.strip()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def products_path(self) -> Path:
        """Get products file as Path object."""
        return Path(self.products_file)

    @property
    def uploads_path(self) -> Path:
        """Get uploads directory as Path object."""
        return Path(self.uploads_directory)

    @property
    def categories_list(self) -> List[str]:
        """Parse known categories from JSON string to list."""
        return self._parse_json_list(self.categories, DEFAULT_CATEGORIES)

    @property
    def searchable_categories_list(self) -> List[str]:
        """Parse searchable categories from JSON string to list."""
        return self._parse_json_list(self.searchable_categories, ["other"])

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        return self._parse_json_list(self.cors_origins, ["*"])

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    @staticmethod
    def _parse_json_list(raw: str, fallback: List[str]) -> List[str]:
        """Parse a JSON array of strings, falling back on malformed input."""
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Invalid JSON list setting: {raw}, defaulting to {fallback}")
            return list(fallback)

        if isinstance(values, list) and all(isinstance(v, str) for v in values):
            return values

        logger.warning(f"Expected a JSON array of strings, got: {raw}")
        return list(fallback)

    def ensure_directories(self) -> None:
        """
        Create all required directories.

        Creates:
        - Catalog data directory
        - Uploads directory
        """
        self.products_path.parent.mkdir(parents=True, exist_ok=True)
        self.uploads_path.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging (never includes the admin code)."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug}, "
            f"products_file={self.products_file!r})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Uses lru_cache to ensure only one Settings instance is created
    throughout the application lifecycle.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
