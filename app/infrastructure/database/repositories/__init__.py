"""Repository module initialization."""

from .base_repository import BaseRepository
from .product_repository import ProductRepository, ProductRepositoryInterface

__all__ = [
    "BaseRepository",
    "ProductRepository",
    "ProductRepositoryInterface",
]
