"""
==============================================================================
Services Package - Collaborators Around the Catalog
==============================================================================

This package provides:
- UploadService: Stores product images for the admin panel
- OrderLinkBuilder: WhatsApp hand-off link for a selected product

==============================================================================
"""

from .upload_service import StoredImage, UploadService
from .order_service import OrderLinkBuilder

__all__ = [
    "StoredImage",
    "UploadService",
    "OrderLinkBuilder",
]
