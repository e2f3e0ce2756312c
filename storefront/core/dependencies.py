"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for the objects created at application startup.

The catalog store, search matcher and helpers live on ``app.state`` for
the lifetime of the application; routes receive them through these
dependencies instead of module-level globals.

Admin writes read their JSON body in a dependency that checks the admin
code before the body is validated or any catalog state is touched, so a
wrong code is always reported as 401.

Usage Examples:
--------------
    @router.get("/search")
    async def search(matcher: SearchMatcher = Depends(get_matcher)):
        ...

==============================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from storefront.catalog.store import CatalogStore
from storefront.config import Settings
from storefront.core import exceptions
from storefront.core.security import AdminGate
from storefront.schemas.product import ProductCreateRequest, ProductRemoveRequest
from storefront.search.matcher import SearchMatcher
from storefront.services.order_service import OrderLinkBuilder
from storefront.services.upload_service import UploadService


def _state_attr(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise exceptions.catalog_not_loaded()
    return value


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_catalog_store(request: Request) -> CatalogStore:
    return _state_attr(request, "catalog_store")


def get_matcher(request: Request) -> SearchMatcher:
    return _state_attr(request, "matcher")


def get_admin_gate(request: Request) -> AdminGate:
    return request.app.state.admin_gate


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


def get_order_links(request: Request) -> OrderLinkBuilder:
    return request.app.state.order_links


# =============================================================================
# ADMIN REQUEST BODIES
# =============================================================================

RequestModel = TypeVar("RequestModel", bound=BaseModel)


async def _json_object(request: Request) -> dict:
    """Request body as a JSON object, or an empty dict when it is anything else."""
    try:
        payload: Any = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def admin_request(model: Type[RequestModel]) -> Callable:
    """
    Build a dependency yielding ``model`` parsed from an admin-gated body.

    The ``password`` field is verified first; only then is the body
    validated against ``model``.
    """

    async def dependency(request: Request) -> RequestModel:
        payload = await _json_object(request)
        get_admin_gate(request).verify(payload.get("password"))

        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise exceptions.invalid_request(e.errors()) from e

    return dependency


get_create_request = admin_request(ProductCreateRequest)
get_remove_request = admin_request(ProductRemoveRequest)
