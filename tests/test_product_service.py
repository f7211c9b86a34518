from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from app.core.exceptions.exceptions import (
    InsufficientStockError,
    OutOfStockError,
    ValidationError,
)
from app.domain.models.product import ProductStatus
from app.domain.services.product_service import ProductService
from tests.helpers import InMemoryProductRepository, make_product


@pytest.fixture
def mock_product_repo():
    repo = Mock()
    repo.decrement_stock = AsyncMock()
    return repo


@pytest.fixture
def product_service(mock_product_repo):
    return ProductService(mock_product_repo)


class TestSearchProducts:

    def test_blank_term_returns_everything(self, product_service):
        products = [make_product(name="Mug"), make_product(name="Kettle")]

        assert product_service.search_products(products, "") == products
        assert product_service.search_products(products, "   ") == products
        assert product_service.search_products(products, None) == products

    def test_matches_name_substring_ignoring_case(self, product_service):
        products = [
            make_product(name="Espresso Beans"),
            make_product(name="Burr Grinder"),
            make_product(name="decaf beans"),
        ]

        result = product_service.search_products(products, " Beans ")

        assert [p.name for p in result] == ["Espresso Beans", "decaf beans"]

    def test_no_match_returns_empty_list(self, product_service):
        products = [make_product(name="Mug")]

        assert product_service.search_products(products, "kettle") == []


class TestCheckPurchasable:

    def test_out_of_stock_is_rejected_first(self, product_service):
        product = make_product(stock_quantity=0, status=ProductStatus.OUT_OF_STOCK)

        with pytest.raises(OutOfStockError) as exc_info:
            product_service.check_purchasable(product, 5)

        assert exc_info.value.status_code == 400

    def test_quantity_above_stock_is_rejected(self, product_service):
        product = make_product(stock_quantity=2)

        with pytest.raises(InsufficientStockError) as exc_info:
            product_service.check_purchasable(product, 3)

        assert exc_info.value.message == (
            "Requested quantity (3) exceeds available stock (2)."
        )

    def test_quantity_equal_to_stock_is_allowed(self, product_service):
        product_service.check_purchasable(make_product(stock_quantity=2), 2)


class TestBuy:

    async def test_successful_decrement_returns_true(
        self, product_service, mock_product_repo
    ):
        product_id = uuid4()
        mock_product_repo.decrement_stock.return_value = make_product(
            id=product_id, stock_quantity=2
        )

        assert await product_service.buy(product_id, 3) is True
        mock_product_repo.decrement_stock.assert_awaited_once_with(product_id, 3)

    async def test_unmatched_decrement_returns_false(
        self, product_service, mock_product_repo
    ):
        mock_product_repo.decrement_stock.return_value = None

        assert await product_service.buy(uuid4(), 1) is False

    async def test_non_positive_quantity_is_rejected(
        self, product_service, mock_product_repo
    ):
        with pytest.raises(ValidationError):
            await product_service.buy(uuid4(), 0)

        mock_product_repo.decrement_stock.assert_not_called()

    async def test_reduces_stock_by_exact_quantity(self):
        repository = InMemoryProductRepository()
        product = make_product(stock_quantity=5)
        await repository.add(product)
        service = ProductService(repository)

        assert await service.buy(product.id, 3) is True

        stored = await repository.get_by_id(product.id)
        assert stored.stock_quantity == 2
        assert stored.status == ProductStatus.IN_STOCK


class TestApplyStockStatus:

    def test_zero_stock_is_out_of_stock(self, product_service):
        product = make_product(stock_quantity=0)

        assert product_service.apply_stock_status(product).status == (
            ProductStatus.OUT_OF_STOCK
        )

    def test_positive_stock_is_in_stock(self, product_service):
        product = make_product(stock_quantity=1, status=ProductStatus.OUT_OF_STOCK)

        assert product_service.apply_stock_status(product).status == (
            ProductStatus.IN_STOCK
        )
