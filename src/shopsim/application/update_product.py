"""Application service: Update Product use case (admin only)."""

from __future__ import annotations

import structlog

from shopsim.application.dto import ProductDTO
from shopsim.domain.exceptions import ValidationError
from shopsim.domain.model.admin_session import AdminSession
from shopsim.domain.model.value_objects import Money
from shopsim.domain.repository.catalog import Catalog

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, catalog: Catalog, session: AdminSession) -> None:
        self._catalog = catalog
        self._session = session

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        new_stock: int | None = None,
    ) -> ProductDTO:
        """Change a product's price and/or stock level.

        A new price is visible to carts immediately; placed orders keep
        the price captured when they were checked out.
        """
        self._session.require_admin()
        if new_price is None and new_stock is None:
            raise ValidationError("Nothing to update")

        product = self._catalog.require_product(product_id)

        # Validate both values before touching the product.
        price = Money.of(new_price) if new_price is not None else None
        if new_stock is not None:
            if isinstance(new_stock, bool) or not isinstance(new_stock, int):
                raise ValidationError(f"Stock must be an integer, got {new_stock!r}")
            if new_stock < 0:
                raise ValidationError("Stock cannot be negative")

        if price is not None:
            product.update_price(price)
        if new_stock is not None:
            product.set_stock(new_stock)

        logger.info(
            "Product updated",
            product_id=product.id,
            price=str(product.price),
            stock=product.stock,
        )
        return ProductDTO.from_product(product)
