"""Product service for search and purchase business logic."""

from typing import List
from uuid import UUID

from app.core.exceptions.exceptions import (
    InsufficientStockError,
    OutOfStockError,
    ValidationError,
)
from app.core.logging import get_logger
from app.domain.models.product import Product, ProductStatus
from app.infrastructure.database.repositories.product_repository import (
    ProductRepositoryInterface,
)

logger = get_logger(__name__)


class ProductService:
    """Service for handling product business logic."""

    def __init__(self, product_repository: ProductRepositoryInterface) -> None:
        """
        Initialize Product service with required dependencies.

        Args:
            product_repository: Repository for product operations
        """
        self.product_repository = product_repository

    def search_products(self, products: List[Product], search_term: str) -> List[Product]:
        """
        Filter products by name.

        Matching is a case-insensitive substring test on the product name.
        A blank term returns the input unchanged. Relative order is kept.

        Args:
            products: Products to filter
            search_term: Text to look for in product names

        Returns:
            Matching products
        """
        term = (search_term or "").strip().casefold()
        if not term:
            return list(products)

        return [p for p in products if term in p.name.casefold()]

    def check_purchasable(self, product: Product, quantity: int) -> None:
        """
        Reject a purchase that cannot succeed against the given snapshot.

        This is an early answer for the caller only. The snapshot may be
        stale by the time ``buy`` runs.

        Raises:
            OutOfStockError: If the product is flagged out of stock
            InsufficientStockError: If quantity exceeds the stock on hand
        """
        if product.is_out_of_stock():
            raise OutOfStockError(details={"product_id": str(product.id)})
        if quantity > product.stock_quantity:
            raise InsufficientStockError(
                quantity,
                product.stock_quantity,
                details={"product_id": str(product.id)},
            )

    async def buy(self, product_id: UUID, quantity: int) -> bool:
        """
        Purchase ``quantity`` units of a product.

        The stock check and the decrement happen in one conditional update,
        so concurrent purchases can never drive stock below zero.

        Args:
            product_id: Product to purchase
            quantity: Units to take, at least 1

        Returns:
            True if the stock was decremented, False otherwise

        Raises:
            ValidationError: If quantity is not positive
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        product = await self.product_repository.decrement_stock(product_id, quantity)
        if product is None:
            logger.info(
                f"Purchase of {quantity} unit(s) rejected for product {product_id}"
            )
            return False

        logger.info(
            f"Purchased {quantity} unit(s) of product {product_id}, "
            f"{product.stock_quantity} remaining"
        )
        return True

    def apply_stock_status(self, product: Product) -> Product:
        """Derive the availability status from the stock quantity."""
        if product.stock_quantity == 0:
            product.status = ProductStatus.OUT_OF_STOCK
        else:
            product.status = ProductStatus.IN_STOCK
        return product
