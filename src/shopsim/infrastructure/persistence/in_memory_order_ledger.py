"""List-backed implementation of OrderLedger."""

from __future__ import annotations

from typing import Iterator

from shopsim.domain.exceptions import DuplicateIdError
from shopsim.domain.model.order import Order
from shopsim.domain.repository.order_ledger import OrderLedger


class InMemoryOrderLedger(OrderLedger):

    def __init__(self) -> None:
        self._orders: list[Order] = []

    # --- OrderLedger interface ------------------------------------------------

    def next_id(self) -> int:
        if not self._orders:
            return 1
        return max(o.id for o in self._orders) + 1

    def append(self, order: Order) -> None:
        if any(o.id == order.id for o in self._orders):
            raise DuplicateIdError(f"Order #{order.id} already recorded")
        self._orders.append(order)

    def list_orders(self) -> Iterator[Order]:
        return iter(tuple(self._orders))

    def __len__(self) -> int:
        return len(self._orders)
