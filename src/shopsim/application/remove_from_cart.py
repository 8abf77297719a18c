"""Application service: Remove From Cart use case.

Removing a product that is not in the cart is not an error; the
return value tells the caller whether anything was removed.
"""

from __future__ import annotations

from shopsim.domain.model.customer import Customer


class RemoveFromCartHandler:

    def __init__(self, customer: Customer) -> None:
        self._customer = customer

    def handle(self, product_id: str) -> bool:
        return self._customer.cart.remove_line(product_id.strip())
