"""Application service: Add Product use case (admin only)."""

from __future__ import annotations

from typing import Mapping

import structlog

from shopsim.application.dto import ProductDTO
from shopsim.domain.exceptions import DuplicateIdError, ValidationError
from shopsim.domain.model.admin_session import AdminSession
from shopsim.domain.model.product import Category, Product
from shopsim.domain.repository.catalog import Catalog

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, catalog: Catalog, session: AdminSession) -> None:
        self._catalog = catalog
        self._session = session

    def handle(
        self,
        product_id: str,
        name: str,
        price: str,
        stock: int,
        category: str,
        attributes: Mapping[str, str],
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        self._session.require_admin()

        if self._catalog.contains(product_id):
            raise DuplicateIdError(f"Product ID {product_id} already exists.")

        try:
            kind = Category(category.upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown product category: {category!r}") from exc

        product = Product.create(product_id, name, price, stock, kind, attributes)
        self._catalog.add_product(product)
        logger.info(
            "Product added",
            product_id=product.id,
            category=kind.value,
            price=str(product.price),
            stock=product.stock,
            admin=self._session.username,
        )
        return ProductDTO.from_product(product)
