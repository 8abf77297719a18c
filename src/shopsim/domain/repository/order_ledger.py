"""Abstract repository for the append-only Order history."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from shopsim.domain.model.order import Order


class OrderLedger(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def append(self, order: Order) -> None:
        """Record a completed order. Existing orders are never touched."""

    @abstractmethod
    def list_orders(self) -> Iterator[Order]:
        """Iterate orders in the order they were appended."""

    def __len__(self) -> int:
        return sum(1 for _ in self.list_orders())
