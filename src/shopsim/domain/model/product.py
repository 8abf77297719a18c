"""Product aggregate.

Products live in the catalog and are referenced everywhere else by id.
The product kind (electronics, clothing, ...) is a tag plus a bag of
category attributes rather than a subclass per kind; the presentation
layer dispatches on the tag when rendering.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from shopsim.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ValidationError,
)
from shopsim.domain.model.value_objects import Money


class Category(Enum):
    ELECTRONICS = "ELECTRONICS"
    CLOTHING = "CLOTHING"


# Attribute each category must carry.
REQUIRED_ATTRIBUTES: dict[Category, tuple[str, ...]] = {
    Category.ELECTRONICS: ("brand",),
    Category.CLOTHING: ("size",),
}


@dataclass(eq=False)
class Product:
    """A product in the catalog.

    This is an aggregate root. ``stock`` is the only field mutated after
    creation, and only through ``decrease_stock`` / ``set_stock``, both of
    which hold the product's own lock so the counter can never go negative.
    """

    id: str
    name: str
    price: Money
    stock: int
    category: Category
    attributes: Mapping[str, str] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        price: str | int | Money,
        stock: int,
        category: Category,
        attributes: Mapping[str, str] | None = None,
    ) -> Product:
        """Create a new product, enforcing all construction invariants."""
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        if not isinstance(price, Money):
            try:
                price = Money.of(price)
            except ValidationError as exc:
                raise ValidationError(f"Invalid price: {exc}") from exc

        if isinstance(stock, bool) or not isinstance(stock, int):
            raise ValidationError(f"Stock must be an integer, got {stock!r}")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")

        attributes = {k: v.strip() for k, v in (attributes or {}).items()}
        for key in REQUIRED_ATTRIBUTES[category]:
            if not attributes.get(key):
                raise ValidationError(
                    f"{category.value.title()} products require a '{key}'"
                )

        return Product(
            id=product_id.strip(),
            name=name.strip(),
            price=price,
            stock=stock,
            category=category,
            attributes=MappingProxyType(attributes),
        )

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Carts pick the new price up immediately; placed orders keep the
        price captured in their snapshot.
        """
        self.price = new_price

    # --- Stock ----------------------------------------------------------------

    @property
    def is_available(self) -> bool:
        return self.stock > 0

    def decrease_stock(self, quantity: int) -> None:
        """Permanently remove *quantity* units from stock."""
        if quantity <= 0:
            raise InvalidQuantityError("Quantity must be positive")
        with self._lock:
            if quantity > self.stock:
                raise InsufficientStockError(
                    f"Insufficient stock for {self.name} "
                    f"(need {quantity}, have {self.stock})"
                )
            self.stock -= quantity

    def set_stock(self, stock: int) -> None:
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        with self._lock:
            self.stock = stock
