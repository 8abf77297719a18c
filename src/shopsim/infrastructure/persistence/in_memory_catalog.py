"""Dict-backed implementation of Catalog.

State lives for the lifetime of the process only. Python dicts keep
insertion order, which gives ``list_products`` a stable order.
"""

from __future__ import annotations

from typing import Iterator

from shopsim.domain.exceptions import DuplicateIdError
from shopsim.domain.model.product import Product
from shopsim.domain.repository.catalog import Catalog


class InMemoryCatalog(Catalog):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._products: dict[str, Product] = {}
        for product in products or []:
            self.add_product(product)

    # --- Catalog interface ----------------------------------------------------

    def add_product(self, product: Product) -> None:
        if product.id in self._products:
            raise DuplicateIdError(f"Product ID {product.id} already exists.")
        self._products[product.id] = product

    def get_product(self, product_id: str) -> Product | None:
        return self._products.get(product_id.strip())

    def list_products(self) -> Iterator[Product]:
        return iter(list(self._products.values()))

    def __len__(self) -> int:
        return len(self._products)
