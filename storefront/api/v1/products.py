"""
==============================================================================
Product Catalog Endpoints
==============================================================================

Endpoints for browsing the catalog, the selection hand-off, and the
admin add/remove operations.

==============================================================================
"""

from fastapi import APIRouter, Depends

from storefront.catalog.models import Product
from storefront.catalog.store import CatalogStore
from storefront.core.dependencies import (
    get_catalog_store,
    get_create_request,
    get_order_links,
    get_remove_request,
)
from storefront.schemas.product import ProductCreateRequest, ProductRemoveRequest, ProductResponse
from storefront.services.order_service import OrderLinkBuilder


router = APIRouter(prefix="/products", tags=["Products"])


def _serialize(product: Product) -> dict:
    return ProductResponse.from_product(product).model_dump(by_alias=True)


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, store: CatalogStore):
        self._store = store

    def list_all(self) -> dict:
        """Full catalog grouped by category."""
        snapshot = self._store.snapshot()
        return {
            "success": True,
            "total": sum(len(products) for products in snapshot.values()),
            "categories": {
                category: [_serialize(p) for p in products]
                for category, products in snapshot.items()
            }
        }

    def get_categories(self) -> dict:
        """Categories with product counts."""
        snapshot = self._store.snapshot()
        return {
            "success": True,
            "categories": [
                {"name": category, "products": len(products)}
                for category, products in snapshot.items()
            ]
        }

    def list_category(self, category: str) -> dict:
        """Products of one category in display order."""
        products = self._store.list(category)
        return {
            "success": True,
            "category": category,
            "total": len(products),
            "products": [_serialize(p) for p in products]
        }

    def order_link(self, category: str, product_id: str, links: OrderLinkBuilder) -> dict:
        """Messaging hand-off for a selected product."""
        product = self._store.get(category, product_id)
        return {
            "success": True,
            "product": _serialize(product),
            "category": category,
            "message": links.message(product),
            "url": links.build(product)
        }

    def create(self, data: ProductCreateRequest) -> dict:
        """Add a product (admin code already verified)."""
        product = self._store.add(
            data.category,
            name=data.name,
            description=data.description,
            image_url=data.image_url,
        )
        return {
            "success": True,
            "product": _serialize(product),
            "category": data.category.strip()
        }

    def remove(self, data: ProductRemoveRequest) -> dict:
        """Remove a product (admin code already verified)."""
        removed = self._store.remove(data.category, data.product_id)
        return {
            "success": True,
            "removedProduct": _serialize(removed),
            "category": data.category.strip()
        }


@router.get("")
async def list_products(store: CatalogStore = Depends(get_catalog_store)):
    """Get the full catalog, category by category."""
    controller = ProductController(store)
    return controller.list_all()


@router.get("/categories")
async def get_categories(store: CatalogStore = Depends(get_catalog_store)):
    """Get all categories with their product counts."""
    controller = ProductController(store)
    return controller.get_categories()


@router.get("/{category}")
async def list_category(category: str, store: CatalogStore = Depends(get_catalog_store)):
    """Get the products of one category."""
    controller = ProductController(store)
    return controller.list_category(category)


@router.get("/{category}/{product_id}/order-link")
async def get_order_link(
    category: str,
    product_id: str,
    store: CatalogStore = Depends(get_catalog_store),
    links: OrderLinkBuilder = Depends(get_order_links)
):
    """Get the WhatsApp link that places an order for a product."""
    controller = ProductController(store)
    return controller.order_link(category, product_id, links)


@router.post("")
def create_product(
    data: ProductCreateRequest = Depends(get_create_request),
    store: CatalogStore = Depends(get_catalog_store)
):
    """Add a product to a category (admin code required)."""
    controller = ProductController(store)
    return controller.create(data)


@router.delete("")
def remove_product(
    data: ProductRemoveRequest = Depends(get_remove_request),
    store: CatalogStore = Depends(get_catalog_store)
):
    """Remove a product from a category by id (admin code required)."""
    controller = ProductController(store)
    return controller.remove(data)
