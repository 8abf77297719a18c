"""Application service: Show Cart use case (query).

Prices are read from the catalog at call time, so the cart always shows
current prices together with the discount the next checkout would apply.
"""

from __future__ import annotations

from shopsim.application.dto import CartDTO, CartLineDTO
from shopsim.domain.model.customer import Customer
from shopsim.domain.model.value_objects import Money
from shopsim.domain.repository.catalog import Catalog
from shopsim.domain.service.checkout_engine import CheckoutPolicy


class ShowCartHandler:

    def __init__(
        self,
        customer: Customer,
        catalog: Catalog,
        policy: CheckoutPolicy,
    ) -> None:
        self._customer = customer
        self._catalog = catalog
        self._policy = policy

    def handle(self) -> CartDTO:
        cart = self._customer.cart
        lines: list[CartLineDTO] = []
        for line in cart.lines:
            product = self._catalog.require_product(line.product_id)
            lines.append(
                CartLineDTO(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=line.quantity.value,
                    unit_price=str(product.price),
                    line_total=str(product.price * line.quantity.value),
                )
            )

        subtotal = cart.total(self._catalog) if lines else Money.zero()
        discount = self._policy.discount_for(subtotal)
        return CartDTO(
            lines=lines,
            subtotal=str(subtotal),
            discount=str(discount),
            total=str(subtotal - discount),
        )
