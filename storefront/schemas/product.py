"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for catalog, search and admin operations.

Write requests are parsed only after the admin code has been checked, and
keep every field optional and unconstrained; missing or over-long fields are
reported by the catalog store.

==============================================================================
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.catalog.models import Product


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ProductCreateRequest(BaseModel):
    """Admin request to add a product."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: Optional[str] = Field(default=None)
    category: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    password: Optional[str] = Field(default=None)


class ProductRemoveRequest(BaseModel):
    """Admin request to remove a product."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    category: Optional[str] = Field(default=None)
    product_id: Optional[str] = Field(default=None, alias="productId")
    password: Optional[str] = Field(default=None)


class AdminVerifyRequest(BaseModel):
    """Admin code check from the admin panel prompt."""
    code: Optional[str] = Field(default=None)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ProductResponse(BaseModel):
    """Product as returned by the API."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    id: str
    description: str = ""
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        """Create response from Product model."""
        return cls(
            name=product.name,
            id=product.id,
            description=product.description,
            image_url=product.image_url,
        )


class SearchResultResponse(BaseModel):
    """One ranked search hit."""
    model_config = ConfigDict(populate_by_name=True)

    product: ProductResponse
    category: str
    matched_keyword: str = Field(alias="matchedKeyword")
    similarity: float = Field(ge=0.0, le=1.0)


class SearchResponse(BaseModel):
    """Search endpoint payload."""
    success: bool = Field(default=True)
    query: str
    total: int = Field(ge=0)
    results: List[SearchResultResponse]
