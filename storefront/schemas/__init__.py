"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: Shared response schemas
- Product: Catalog, admin and search schemas

==============================================================================
"""

from .common import MessageResponse
from .product import (
    AdminVerifyRequest,
    ProductCreateRequest,
    ProductRemoveRequest,
    ProductResponse,
    SearchResponse,
    SearchResultResponse,
)

__all__ = [
    # Common
    "MessageResponse",
    # Product
    "AdminVerifyRequest",
    "ProductCreateRequest",
    "ProductRemoveRequest",
    "ProductResponse",
    "SearchResponse",
    "SearchResultResponse",
]
