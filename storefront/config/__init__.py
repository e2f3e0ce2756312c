"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from storefront.config import get_settings, Settings

    settings = get_settings()
    print(settings.products_file)
    print(settings.searchable_categories_list)

==============================================================================
"""

from .settings import DEFAULT_CATEGORIES, Settings, get_settings

__all__ = [
    "DEFAULT_CATEGORIES",
    "Settings",
    "get_settings",
]
