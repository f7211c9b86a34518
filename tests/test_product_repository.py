from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, Mock
from uuid import uuid4

import pytest
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.core.exceptions.exceptions import RepositoryError
from app.domain.models.product import ProductStatus
from app.infrastructure.database.repositories.product_repository import (
    ProductRepository,
)
from tests.helpers import make_product

CREATED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def document(product_id, **overrides):
    doc = {
        "_id": str(product_id),
        "name": "Ceramic Mug",
        "description": "",
        "price": 12.5,
        "stock_quantity": 5,
        "status": "InStock",
        "created_date": CREATED,
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def collection():
    mock_collection = MagicMock()
    mock_collection.find_one = AsyncMock()
    mock_collection.insert_one = AsyncMock()
    mock_collection.find_one_and_update = AsyncMock()
    mock_collection.delete_one = AsyncMock()
    return mock_collection


@pytest.fixture
def repository(collection):
    return ProductRepository(collection=collection)


class TestProductRepository:

    async def test_get_all_maps_documents_in_creation_order(
        self, repository, collection
    ):
        first, second = uuid4(), uuid4()
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.to_list = AsyncMock(
            return_value=[document(first), document(second, name="Kettle")]
        )
        collection.find.return_value = cursor

        products = await repository.get_all()

        assert [p.id for p in products] == [first, second]
        assert products[1].name == "Kettle"
        collection.find.assert_called_once_with({})
        cursor.sort.assert_called_once_with("created_date", 1)

    async def test_get_by_id_returns_product(self, repository, collection):
        product_id = uuid4()
        collection.find_one.return_value = document(product_id, status="OutOfStock")

        product = await repository.get_by_id(product_id)

        assert product.id == product_id
        assert product.status == ProductStatus.OUT_OF_STOCK
        assert product.created_date == CREATED
        collection.find_one.assert_awaited_once_with({"_id": str(product_id)})

    async def test_get_by_id_returns_none_when_missing(self, repository, collection):
        collection.find_one.return_value = None

        assert await repository.get_by_id(uuid4()) is None

    async def test_add_stores_snake_case_document(self, repository, collection):
        product = make_product(created_date=CREATED)

        await repository.add(product)

        stored = collection.insert_one.await_args.args[0]
        assert stored == {
            "_id": str(product.id),
            "name": product.name,
            "description": product.description,
            "price": product.price,
            "stock_quantity": product.stock_quantity,
            "status": "InStock",
            "created_date": CREATED,
        }

    async def test_update_never_rewrites_id_or_creation_date(
        self, repository, collection
    ):
        product = make_product(name="Large Mug")
        collection.find_one_and_update.return_value = document(
            product.id, name="Large Mug"
        )

        updated = await repository.update(product)

        query, change = collection.find_one_and_update.await_args.args
        assert query == {"_id": str(product.id)}
        assert "_id" not in change["$set"]
        assert "created_date" not in change["$set"]
        assert change["$set"]["name"] == "Large Mug"
        assert updated.created_date == CREATED

    async def test_update_returns_none_when_missing(self, repository, collection):
        collection.find_one_and_update.return_value = None

        assert await repository.update(make_product()) is None

    async def test_delete_reports_whether_a_document_was_removed(
        self, repository, collection
    ):
        collection.delete_one.return_value = Mock(deleted_count=1)
        assert await repository.delete(uuid4()) is True

        collection.delete_one.return_value = Mock(deleted_count=0)
        assert await repository.delete(uuid4()) is False

    async def test_decrement_stock_is_guarded_by_status_and_quantity(
        self, repository, collection
    ):
        product_id = uuid4()
        collection.find_one_and_update.return_value = document(
            product_id, stock_quantity=2
        )

        product = await repository.decrement_stock(product_id, 3)

        assert product.stock_quantity == 2
        call = collection.find_one_and_update.await_args
        query, pipeline = call.args
        assert query == {
            "_id": str(product_id),
            "status": "InStock",
            "stock_quantity": {"$gte": 3},
        }
        assert pipeline[0] == {
            "$set": {"stock_quantity": {"$subtract": ["$stock_quantity", 3]}}
        }
        assert pipeline[1] == {
            "$set": {
                "status": {
                    "$cond": [
                        {"$lte": ["$stock_quantity", 0]},
                        "OutOfStock",
                        "InStock",
                    ]
                }
            }
        }
        assert call.kwargs["return_document"] == ReturnDocument.AFTER

    async def test_decrement_stock_returns_none_when_guard_fails(
        self, repository, collection
    ):
        collection.find_one_and_update.return_value = None

        assert await repository.decrement_stock(uuid4(), 1) is None

    async def test_driver_errors_become_repository_errors(
        self, repository, collection
    ):
        collection.find_one.side_effect = PyMongoError("connection refused")

        with pytest.raises(RepositoryError):
            await repository.get_by_id(uuid4())
