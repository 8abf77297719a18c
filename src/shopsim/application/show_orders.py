"""Application service: Show Order History use case (query)."""

from __future__ import annotations

from shopsim.application.dto import OrderDTO
from shopsim.domain.model.customer import Customer


class ShowOrdersHandler:

    def __init__(self, customer: Customer) -> None:
        self._customer = customer

    def handle(self) -> list[OrderDTO]:
        """Return the customer's orders, oldest first."""
        return [OrderDTO.from_order(o) for o in self._customer.orders.list_orders()]
