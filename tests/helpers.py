"""Test doubles and builders shared across test modules."""

from typing import Dict, List, Optional
from uuid import UUID, uuid4

from app.domain.models.common import utc_now
from app.domain.models.product import Product, ProductStatus
from app.infrastructure.database.repositories.product_repository import (
    ProductRepositoryInterface,
)


class InMemoryProductRepository(ProductRepositoryInterface):
    """Dict-backed product store with the same contract as the MongoDB one."""

    def __init__(self):
        self.products: Dict[UUID, Product] = {}

    async def get_all(self) -> List[Product]:
        ordered = sorted(self.products.values(), key=lambda p: p.created_date)
        return [p.model_copy(deep=True) for p in ordered]

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        product = self.products.get(product_id)
        return product.model_copy(deep=True) if product else None

    async def add(self, product: Product) -> None:
        self.products[product.id] = product.model_copy(deep=True)

    async def update(self, product: Product) -> Optional[Product]:
        stored = self.products.get(product.id)
        if stored is None:
            return None
        updated = product.model_copy(
            update={"created_date": stored.created_date}, deep=True
        )
        self.products[product.id] = updated
        return updated.model_copy(deep=True)

    async def delete(self, product_id: UUID) -> bool:
        return self.products.pop(product_id, None) is not None

    async def decrement_stock(
        self, product_id: UUID, quantity: int
    ) -> Optional[Product]:
        product = self.products.get(product_id)
        if (
            product is None
            or product.status != ProductStatus.IN_STOCK
            or product.stock_quantity < quantity
        ):
            return None
        product.stock_quantity -= quantity
        if product.stock_quantity == 0:
            product.status = ProductStatus.OUT_OF_STOCK
        return product.model_copy(deep=True)


def make_product(**overrides) -> Product:
    fields = {
        "id": uuid4(),
        "name": "Ceramic Mug",
        "description": "350ml glazed stoneware mug",
        "price": 12.5,
        "stock_quantity": 5,
        "status": ProductStatus.IN_STOCK,
        "created_date": utc_now(),
    }
    fields.update(overrides)
    return Product(**fields)
