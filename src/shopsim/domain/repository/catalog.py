"""Abstract repository for the Product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Every other structure (cart lines, order snapshots)
refers to products by id and resolves them through this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from shopsim.domain.exceptions import EntityNotFoundError
from shopsim.domain.model.product import Product


class Catalog(ABC):

    @abstractmethod
    def add_product(self, product: Product) -> None:
        """Store a new product; raises DuplicateIdError if the id is taken."""

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_products(self) -> Iterator[Product]:
        """Iterate every product in insertion order.

        Each call returns a fresh iterator.
        """

    def contains(self, product_id: str) -> bool:
        return self.get_product(product_id) is not None

    def require_product(self, product_id: str) -> Product:
        product = self.get_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")
        return product
