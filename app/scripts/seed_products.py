#!/usr/bin/env python3
"""Script to seed sample products for local testing."""

import argparse
import asyncio
import random
from typing import List
from uuid import uuid4

from app.core.config.settings import settings
from app.core.logging import get_logger
from app.domain.models.common import utc_now
from app.domain.models.product import Product, ProductStatus
from app.infrastructure.database.mongodb import mongodb
from app.infrastructure.database.repositories.product_repository import (
    ProductRepository,
)

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    ("Espresso Beans", "Dark roast whole beans, 1kg bag"),
    ("Pour-Over Kettle", "Gooseneck kettle with temperature gauge"),
    ("Ceramic Mug", "350ml glazed stoneware mug"),
    ("Burr Grinder", "Conical burr grinder with 40 settings"),
    ("Paper Filters", "Pack of 100 unbleached filters"),
    ("Milk Frother", "Handheld battery-powered frother"),
    ("Travel Tumbler", "Insulated stainless steel, 500ml"),
    ("Cold Brew Jar", "1.5L glass jar with mesh filter"),
    ("Digital Scale", "0.1g precision coffee scale with timer"),
    ("Decaf Beans", "Swiss water process decaf, 500g bag"),
]


def build_sample_products() -> List[Product]:
    """Build the sample catalog; some entries start out of stock."""
    products = []
    for name, description in SAMPLE_PRODUCTS:
        stock = random.choice([0, 3, 5, 10, 25, 50])
        products.append(
            Product(
                id=uuid4(),
                name=name,
                description=description,
                price=round(random.uniform(4, 120), 2),
                stock_quantity=stock,
                status=(
                    ProductStatus.IN_STOCK if stock > 0 else ProductStatus.OUT_OF_STOCK
                ),
                created_date=utc_now(),
            )
        )
    return products


async def seed_products(clear: bool = False) -> None:
    """Insert the sample catalog, optionally clearing the collection first."""
    await mongodb.connect()
    try:
        repository = ProductRepository()

        if clear:
            result = await repository.collection.delete_many({})
            logger.info(f"Cleared {result.deleted_count} existing product(s)")

        for product in build_sample_products():
            await repository.add(product)

        logger.info(
            f"Seeded {len(SAMPLE_PRODUCTS)} products into "
            f"{settings.mongodb_name}.{settings.products_collection}"
        )
    finally:
        await mongodb.disconnect()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample products")
    parser.add_argument(
        "--clear", action="store_true", help="delete existing products first"
    )
    args = parser.parse_args()
    asyncio.run(seed_products(clear=args.clear))


if __name__ == "__main__":
    main()
