"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data from the application layer to the CLI without exposing
domain internals. Money values are pre-formatted strings (e.g. "$15.00");
everything else about presentation is the CLI's job.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopsim.domain.model.order import Order
from shopsim.domain.model.payment import PaymentInstrument
from shopsim.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str  # "ELECTRONICS" | "CLOTHING"
    attributes: dict[str, str]
    price: str
    stock: int

    @property
    def sold_out(self) -> bool:
        return self.stock == 0

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            category=product.category.value,
            attributes=dict(product.attributes),
            price=str(product.price),
            stock=product.stock,
        )


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    subtotal: str
    discount: str
    total: str

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class InstrumentDTO:
    """A registered payment method as listed to the customer."""

    index: int  # 1-based
    kind: str
    description: str
    balance: str

    @staticmethod
    def from_instrument(index: int, instrument: PaymentInstrument) -> InstrumentDTO:
        return InstrumentDTO(
            index=index,
            kind=instrument.kind,
            description=instrument.describe(),
            balance=str(instrument.current_balance()),
        )


@dataclass(frozen=True)
class PaymentRecordDTO:
    kind: str
    description: str
    amount: str


@dataclass(frozen=True)
class OrderLineDTO:
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    customer_name: str
    lines: list[OrderLineDTO]
    subtotal: str
    discount: str
    total_paid: str
    payments: list[PaymentRecordDTO]
    placed_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            customer_name=order.customer_name,
            lines=[
                OrderLineDTO(
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in order.lines
            ],
            subtotal=str(order.subtotal),
            discount=str(order.discount),
            total_paid=str(order.total_paid),
            payments=[
                PaymentRecordDTO(
                    kind=record.instrument_kind,
                    description=record.instrument_description,
                    amount=str(record.amount),
                )
                for record in order.payments
            ],
            placed_at=order.placed_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class CheckoutResultDTO:
    order: OrderDTO
    sold_out: list[str]  # names of products whose stock reached zero
    instruments: list[InstrumentDTO]  # balances after payment
