"""Product repository for database operations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from motor.core import AgnosticCollection
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.core.config.settings import settings
from app.core.exceptions.exceptions import RepositoryError
from app.core.logging import get_logger
from app.domain.models.product import Product, ProductStatus
from app.infrastructure.database.mongodb import MongoDB, mongodb
from app.infrastructure.database.repositories.base_repository import BaseRepository

logger = get_logger(__name__)

# Fields fixed at creation and never rewritten by update()
IMMUTABLE_FIELDS = ("_id", "created_date")


class ProductRepositoryInterface(ABC):
    """Product store operations consumed by the API layer."""

    @abstractmethod
    async def get_all(self) -> List[Product]:
        """Get every product, oldest first."""

    @abstractmethod
    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        """Get product by ID."""

    @abstractmethod
    async def add(self, product: Product) -> None:
        """Persist a new product."""

    @abstractmethod
    async def update(self, product: Product) -> Optional[Product]:
        """Replace the mutable fields of an existing product.

        Returns the stored product, or None when no product has that ID.
        """

    @abstractmethod
    async def delete(self, product_id: UUID) -> bool:
        """Delete product permanently."""

    @abstractmethod
    async def decrement_stock(
        self, product_id: UUID, quantity: int
    ) -> Optional[Product]:
        """Atomically take ``quantity`` units from an in-stock product.

        Applies only when the product is in stock with at least ``quantity``
        units, and flips the status to out of stock when nothing remains.
        Returns the updated product, or None when the condition did not hold.
        """


class ProductRepository(BaseRepository, ProductRepositoryInterface):
    """MongoDB product repository implementation."""

    def __init__(
        self,
        collection: Optional[AgnosticCollection] = None,
        database: MongoDB = mongodb,
    ):
        super().__init__(settings.products_collection, collection, database)

    @staticmethod
    def _to_document(product: Product) -> Dict[str, Any]:
        """Convert a product to its MongoDB document."""
        doc = product.model_dump(exclude={"id"})
        doc["_id"] = str(product.id)
        doc["status"] = product.status.value
        return doc

    @staticmethod
    def _from_document(doc: Dict[str, Any]) -> Product:
        """Build a product from a MongoDB document."""
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = doc["_id"]
        return Product.model_validate(data)

    async def get_all(self) -> List[Product]:
        try:
            cursor = self.collection.find({}).sort("created_date", ASCENDING)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to get all products: {e}")
            raise RepositoryError("Failed to load products") from e

        return [self._from_document(doc) for doc in documents]

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        try:
            doc = await self.collection.find_one({"_id": str(product_id)})
        except PyMongoError as e:
            logger.error(f"Failed to get product by ID {product_id}: {e}")
            raise RepositoryError(f"Failed to load product {product_id}") from e

        if doc is None:
            return None
        return self._from_document(doc)

    async def add(self, product: Product) -> None:
        try:
            await self.collection.insert_one(self._to_document(product))
        except PyMongoError as e:
            logger.error(f"Failed to create product {product.id}: {e}")
            raise RepositoryError(f"Failed to create product {product.id}") from e

        logger.info(f"Created product with ID: {product.id}")

    async def update(self, product: Product) -> Optional[Product]:
        fields = {
            k: v
            for k, v in self._to_document(product).items()
            if k not in IMMUTABLE_FIELDS
        }
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": str(product.id)},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update product {product.id}: {e}")
            raise RepositoryError(f"Failed to update product {product.id}") from e

        if doc is None:
            return None
        logger.info(f"Updated product {product.id}")
        return self._from_document(doc)

    async def delete(self, product_id: UUID) -> bool:
        try:
            result = await self.collection.delete_one({"_id": str(product_id)})
        except PyMongoError as e:
            logger.error(f"Failed to delete product {product_id}: {e}")
            raise RepositoryError(f"Failed to delete product {product_id}") from e

        success = result.deleted_count > 0
        if success:
            logger.info(f"Deleted product {product_id}")
        return success

    async def decrement_stock(
        self, product_id: UUID, quantity: int
    ) -> Optional[Product]:
        in_stock = ProductStatus.IN_STOCK.value
        out_of_stock = ProductStatus.OUT_OF_STOCK.value
        try:
            # Single-document pipeline update; the filter is the guard
            doc = await self.collection.find_one_and_update(
                {
                    "_id": str(product_id),
                    "status": in_stock,
                    "stock_quantity": {"$gte": quantity},
                },
                [
                    {
                        "$set": {
                            "stock_quantity": {
                                "$subtract": ["$stock_quantity", quantity]
                            }
                        }
                    },
                    {
                        "$set": {
                            "status": {
                                "$cond": [
                                    {"$lte": ["$stock_quantity", 0]},
                                    out_of_stock,
                                    in_stock,
                                ]
                            }
                        }
                    },
                ],
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to decrement stock for product {product_id}: {e}")
            raise RepositoryError(
                f"Failed to update stock for product {product_id}"
            ) from e

        if doc is None:
            return None
        return self._from_document(doc)
