"""Product domain models."""

from datetime import datetime
from enum import Enum
from typing import Annotated
from uuid import UUID

from pydantic import Field

from .common import Schema, utc_now

# Largest value a BSON int64 can hold
MAX_STOCK_QUANTITY = 2**63 - 1


class ProductStatus(str, Enum):
    """Product availability status."""

    IN_STOCK = "InStock"
    OUT_OF_STOCK = "OutOfStock"


# Shared fields for Product schemas
class ProductBase(Schema):
    """Descriptive and stock fields shared across product schemas."""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: str = Field(
        default="", max_length=2000, description="Product description"
    )
    price: float = Field(default=0, ge=0, description="Unit price")
    stock_quantity: int = Field(
        ..., ge=0, le=MAX_STOCK_QUANTITY, description="Units available for sale"
    )


class ProductCreate(ProductBase):
    """Payload for creating a product. Identity, status and dates are server-side."""

    pass


class Product(ProductBase):
    """Stored product entity."""

    id: UUID = Field(..., description="Product identifier")
    status: ProductStatus = Field(
        default=ProductStatus.IN_STOCK, description="Availability status"
    )
    created_date: Annotated[
        datetime, Field(default_factory=utc_now, description="Creation timestamp")
    ]

    def is_out_of_stock(self) -> bool:
        """Check whether the product is flagged as out of stock."""
        return self.status == ProductStatus.OUT_OF_STOCK
