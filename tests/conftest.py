import os

# Keep test runs from writing a log file into the working directory
os.environ["LOG_FILE"] = ""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from pedidos_service.catalog import CatalogStore, default_catalog
from pedidos_service.main import create_app
from pedidos_service.models import Product
from pedidos_service.repository import OrderRepository


class FakeSecretBackend:
    """Counts fetches; names listed in `missing` fail."""

    def __init__(self, values=None, missing=()):
        self.values = values if values is not None else {"db_password": "s3cr3t"}
        self.missing = set(missing)
        self.calls = []

    def fetch(self, secret_name):
        self.calls.append(secret_name)
        if secret_name in self.missing or secret_name not in self.values:
            raise RuntimeError(f"secret {secret_name} not found")
        return self.values[secret_name]


@pytest.fixture()
def catalog():
    return default_catalog()


@pytest.fixture()
def small_catalog():
    return CatalogStore([
        Product(id=1, name="Croissant", unit_price=Decimal("1.50")),
        Product(id=4, name="Napolitana", unit_price=Decimal("1.80")),
        Product(id=7, name="Galleta", unit_price=Decimal("2.005")),
        Product(id=8, name="Caramelo", unit_price=Decimal("0.10")),
    ])


@pytest.fixture()
def repository():
    return OrderRepository()


@pytest.fixture()
def secret_backend():
    return FakeSecretBackend()


@pytest.fixture()
def app(catalog, repository):
    return create_app(catalog=catalog, repository=repository, secrets={})


@pytest.fixture()
def client(app):
    return TestClient(app)
