"""
Dependency injection container.
Manages service and repository instances for a single application.
"""

from typing import Any, Dict, Optional

from fastapi import Request

from app.domain.services.product_service import ProductService
from app.infrastructure.database.repositories.product_repository import (
    ProductRepository,
    ProductRepositoryInterface,
)


class DependencyContainer:
    """
    Dependency injection container.

    Holds repository and service instances as per-application singletons.
    Instances are created lazily so the container can be built before the
    database connection is open. Pre-built repositories may be passed in to
    replace the MongoDB-backed defaults.
    """

    def __init__(
        self, product_repository: Optional[ProductRepositoryInterface] = None
    ):
        """Initialize the container with optional repository overrides."""
        self._repositories: Dict[str, Any] = {}
        self._services: Dict[str, Any] = {}
        self._repository_classes = {
            "product": ProductRepository,
        }
        if product_repository is not None:
            self._repositories["product"] = product_repository

    def _get_repository(self, repo_name: str) -> Any:
        """Lazy-load repository instance."""
        if repo_name not in self._repositories:
            repo_class = self._repository_classes.get(repo_name)
            if repo_class is None:
                raise KeyError(f"Repository class '{repo_name}' not found")
            self._repositories[repo_name] = repo_class()

        return self._repositories[repo_name]

    def _get_service(self, service_name: str) -> Any:
        """Lazy-load service instance with dependencies."""
        if service_name not in self._services:
            if service_name == "product":
                self._services[service_name] = ProductService(
                    self._get_repository("product")
                )
            else:
                raise KeyError(f"Service '{service_name}' not found")

        return self._services[service_name]

    def get_service(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service name not found
        """
        return self._get_service(service_name)

    def get_repository(self, repo_name: str) -> Any:
        """
        Get repository instance by name.

        Raises:
            KeyError: If repository name not found
        """
        return self._get_repository(repo_name)


# FastAPI dependency functions
def get_container(request: Request) -> DependencyContainer:
    """Get the container attached to the running application."""
    return request.app.state.container


def get_product_repository(request: Request) -> ProductRepositoryInterface:
    """Get product repository instance from container."""
    return get_container(request).get_repository("product")


def get_product_service(request: Request) -> ProductService:
    """Get ProductService instance from container."""
    return get_container(request).get_service("product")
