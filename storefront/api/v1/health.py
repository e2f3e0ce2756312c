"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Request


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, request: Request):
        self._state = request.app.state

    def check_catalog(self) -> dict:
        """Check catalog status."""
        store = getattr(self._state, "catalog_store", None)
        if store is None:
            return {"status": "not_loaded", "products": 0, "writable": False}

        products_file = store.products_file
        writable = products_file.exists() and products_file.parent.exists()
        return {"status": "healthy", "products": store.count(), "writable": writable}

    def get_health(self) -> dict:
        """Get full health status."""
        catalog_info = self.check_catalog()

        overall = "healthy" if catalog_info["status"] == "healthy" and catalog_info["writable"] else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "catalog": catalog_info["status"]
            },
            "details": {
                "products_loaded": catalog_info["products"]
            }
        }


@router.get("")
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns system status including API and catalog.
    """
    controller = HealthController(request)
    return controller.get_health()


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe for container orchestration."""
    return {"ready": getattr(request.app.state, "catalog_store", None) is not None}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
