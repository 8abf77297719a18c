"""Application service: Add To Cart use case."""

from __future__ import annotations

import structlog

from shopsim.domain.model.customer import Customer
from shopsim.domain.repository.catalog import Catalog

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(self, customer: Customer, catalog: Catalog) -> None:
        self._customer = customer
        self._catalog = catalog

    def handle(self, product_id: str, quantity: int) -> int:
        """Add *quantity* units to the cart; returns the line's new quantity."""
        product = self._catalog.require_product(product_id)
        line = self._customer.cart.add_line(product, quantity)
        logger.info(
            "Added to cart",
            product_id=product.id,
            quantity=quantity,
            line_quantity=line.quantity.value,
        )
        return line.quantity.value
