"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for catalog items and catalog change events.

==============================================================================
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """
    Product model for catalog items.

    Immutable once created; the only way to change a product is to remove
    it and add a new one.

    Attributes:
        name: Product display name
        id: Identifier, unique within its category
        description: Optional free text
        image_url: Reference to an already-stored image (serialized as imageUrl)
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    name: str = Field(..., min_length=1, description="Product name")
    id: str = Field(..., min_length=1, description="Identifier within the category")
    description: str = Field(default="", description="Product description")
    image_url: Optional[str] = Field(default=None, alias="imageUrl", description="Image reference")

    def to_record(self) -> dict:
        """Serialize using the persisted field names."""
        return self.model_dump(by_alias=True)


class ChangeKind(str, Enum):
    """Kind of catalog mutation."""
    ADDED = "added"
    REMOVED = "removed"


class CatalogChange(BaseModel):
    """Change feed event, published after a mutation has been persisted."""

    model_config = ConfigDict(frozen=True)

    kind: ChangeKind
    category: str
    product: Product
