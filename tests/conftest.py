import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import DependencyContainer
from app.core.startup import AppStartupService
from main import create_application
from tests.helpers import InMemoryProductRepository


@pytest.fixture
def product_repository():
    return InMemoryProductRepository()


@pytest.fixture
def app(product_repository):
    return create_application(
        container=DependencyContainer(product_repository=product_repository),
        startup_service=AppStartupService(initializers=[]),
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
