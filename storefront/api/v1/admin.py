"""
==============================================================================
Admin Endpoints
==============================================================================

Admin code check backing the admin panel prompt.

==============================================================================
"""

from fastapi import APIRouter, Depends

from storefront.core.dependencies import get_admin_gate
from storefront.core.security import AdminGate
from storefront.schemas.common import MessageResponse
from storefront.schemas.product import AdminVerifyRequest


router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/verify", response_model=MessageResponse)
async def verify_admin_code(data: AdminVerifyRequest, gate: AdminGate = Depends(get_admin_gate)):
    """Check an admin code; 401 when it does not match."""
    gate.verify(data.code)
    return MessageResponse(message="Admin code accepted")
