"""Order aggregate: the immutable record of a completed checkout.

An Order is built once, in the archiving step of a checkout, from a
snapshot of the cart lines and the payments collected. It is frozen:
later price changes, restocks or balance top-ups never reach it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from shopsim.domain.exceptions import ValidationError
from shopsim.domain.model.payment import PaymentRecord
from shopsim.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class OrderLine:
    """Captures the product name and price at checkout time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at checkout time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class Order:
    """Aggregate root for completed purchases.

    Use ``Order.create()``, which checks that the payments add up to the
    amount charged for the order.
    """

    id: int
    customer_name: str
    lines: tuple[OrderLine, ...]
    subtotal: Money
    discount: Money
    total_paid: Money
    payments: tuple[PaymentRecord, ...]
    placed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        order_id: int,
        customer_name: str,
        lines: list[OrderLine],
        subtotal: Money,
        discount: Money,
        payments: list[PaymentRecord],
        tolerance: Decimal = Decimal("1e-9"),
    ) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one line")

        total_paid = subtotal - discount
        paid = Money.zero()
        for record in payments:
            paid = paid + record.amount
        if abs(paid.amount - total_paid.amount) > tolerance:
            raise ValidationError(
                f"Payments {paid} do not settle order total {total_paid}"
            )

        return Order(
            id=order_id,
            customer_name=customer_name,
            lines=tuple(lines),
            subtotal=subtotal,
            discount=discount,
            total_paid=total_paid,
            payments=tuple(payments),
        )

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)
