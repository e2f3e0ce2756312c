"""
==============================================================================
Catalog Package - Product Management
==============================================================================

Category-partitioned product catalog persisted as a single JSON file.

Classes:
--------
- Product: Immutable pydantic model for products
- CatalogChange: Change feed event
- CatalogStore: Catalog owner with add/remove/list and atomic persistence

==============================================================================
"""

from .models import CatalogChange, ChangeKind, Product
from .store import DEFAULT_CATALOG, CatalogStore

__all__ = [
    "CatalogChange",
    "ChangeKind",
    "Product",
    "DEFAULT_CATALOG",
    "CatalogStore",
]
