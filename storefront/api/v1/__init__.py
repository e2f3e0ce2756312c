"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- products: Catalog browsing, order hand-off, admin add/remove
- search: Fuzzy product search
- uploads: Admin image upload
- admin: Admin code check

==============================================================================
"""

from . import admin, health, products, search, uploads

__all__ = ["admin", "health", "products", "search", "uploads"]
