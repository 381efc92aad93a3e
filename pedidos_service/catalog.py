"""
catalog.py — Read-only Product Catalog

The catalog is loaded once at startup and never mutated. Lookups that miss
return None; deciding whether that is an error is up to the caller.
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .models import Product


class CatalogStore:
    """
    In-memory product catalog.

    Keeps insertion order for listing and an id index for O(1) lookups.
    """

    def __init__(self, products: Iterable[Product]):
        self._products: List[Product] = list(products)
        self._by_id: Dict[int, Product] = {}
        for product in self._products:
            if product.id in self._by_id:
                raise ValueError(f"Duplicate product id in catalog: {product.id}")
            self._by_id[product.id] = product

    def find_by_id(self, product_id) -> Optional[Product]:
        return self._by_id.get(product_id)

    def list_products(self) -> List[Product]:
        return list(self._products)

    def __len__(self):
        return len(self._products)


def default_catalog() -> CatalogStore:
    """Builds the bakery catalog the service ships with."""
    return CatalogStore([
        Product(id=1, name="Croissant de Mantequilla", unit_price=Decimal("1.50"),
                description="Clásico croissant francés, hojaldrado y tierno. Perfecto para el desayuno."),
        Product(id=2, name="Baguette Rústica", unit_price=Decimal("2.20"),
                description="Pan de corteza crujiente y miga suave, elaborado con masa madre."),
        Product(id=3, name="Tarta de Fresa y Nata", unit_price=Decimal("25.00"),
                description="Deliciosa tarta con una base de masa quebrada, nata montada y fresas frescas."),
        Product(id=4, name="Napolitana de Chocolate", unit_price=Decimal("1.80"),
                description="Dulce hojaldre relleno de dos barras de chocolate intenso."),
        Product(id=5, name="Empanada de Carne", unit_price=Decimal("2.50"),
                description="Empanada casera horneada con un sabroso relleno de carne de ternera, cebolla y especias."),
        Product(id=6, name="Muffin de Arándanos", unit_price=Decimal("2.00"), description=None),
    ])
