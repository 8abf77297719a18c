"""The customer's pre-checkout selection.

Lines hold a product *id*, never the product itself. Totals are
recomputed from the catalog on every call, so a price change made
after an item was added shows up at checkout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from shopsim.domain.exceptions import InsufficientStockError, InvalidQuantityError
from shopsim.domain.model.product import Product
from shopsim.domain.model.value_objects import Money, Quantity

if TYPE_CHECKING:
    from shopsim.domain.repository.catalog import Catalog


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: Quantity


class Cart:
    """Ordered cart lines, unique by product id."""

    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def add_line(self, product: Product, quantity: int) -> CartLine:
        """Add *quantity* of *product*, merging with an existing line.

        The merged quantity must fit in the product's current stock; this
        is re-checked at checkout because stock can change in between.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityError("Quantity must be positive")
        if not product.is_available:
            raise InsufficientStockError(f"Sorry, {product.name} is SOLD OUT")

        index = self._index_of(product.id)
        existing = self._lines[index].quantity.value if index is not None else 0
        wanted = existing + quantity
        if wanted > product.stock:
            raise InsufficientStockError(
                f"Requested quantity exceeds stock for {product.name} "
                f"(requested {wanted}, in stock {product.stock})"
            )

        line = CartLine(product_id=product.id, quantity=Quantity(wanted))
        if index is None:
            self._lines.append(line)
        else:
            self._lines[index] = line
        return line

    def remove_line(self, product_id: str) -> bool:
        """Remove the line for *product_id*; absent ids are ignored."""
        index = self._index_of(product_id)
        if index is None:
            return False
        del self._lines[index]
        return True

    def total(self, catalog: Catalog) -> Money:
        """Sum of current unit price × quantity across all lines."""
        result = Money.zero()
        for line in self._lines:
            product = catalog.require_product(line.product_id)
            result = result + product.price * line.quantity.value
        return result

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, product_id: str) -> int | None:
        for i, line in enumerate(self._lines):
            if line.product_id == product_id:
                return i
        return None
