"""
==============================================================================
Image Upload Endpoints
==============================================================================

Admin image upload. The returned imageUrl is then passed to product
creation.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from storefront.core import exceptions
from storefront.core.dependencies import get_admin_gate, get_upload_service
from storefront.core.security import AdminGate
from storefront.services.upload_service import UploadService


router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post("")
async def upload_image(
    image: Optional[UploadFile] = File(None),
    password: Optional[str] = Form(None),
    gate: AdminGate = Depends(get_admin_gate),
    service: UploadService = Depends(get_upload_service)
):
    """Store one product image (admin code required)."""
    gate.verify(password)

    if image is None:
        raise exceptions.invalid_image("No image file uploaded")

    service.extension_for(image.content_type)
    data = await service.read(image)
    stored = service.store(data, image.filename, image.content_type)

    return {
        "success": True,
        "imageUrl": stored.url,
        "filename": stored.filename
    }
