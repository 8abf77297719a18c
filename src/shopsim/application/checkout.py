"""Application service: Checkout use case.

Thin orchestration around the CheckoutEngine domain service: runs the
checkout with the caller's payment prompt and maps the placed order,
the products that sold out, and the post-payment balances into DTOs.
"""

from __future__ import annotations

from shopsim.application.dto import (
    CartDTO,
    CartLineDTO,
    CheckoutResultDTO,
    InstrumentDTO,
    OrderDTO,
)
from shopsim.domain.model.customer import Customer
from shopsim.domain.repository.catalog import Catalog
from shopsim.domain.service.checkout_engine import CheckoutEngine
from shopsim.domain.service.payment_prompt import PaymentPrompt


class CheckoutHandler:

    def __init__(
        self,
        customer: Customer,
        catalog: Catalog,
        engine: CheckoutEngine,
    ) -> None:
        self._customer = customer
        self._catalog = catalog
        self._engine = engine

    def quote(self) -> CartDTO:
        """Price the cart as the checkout would, without charging anything."""
        quote = self._engine.quote(self._customer.cart)
        return CartDTO(
            lines=[
                CartLineDTO(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in quote.lines
            ],
            subtotal=str(quote.subtotal),
            discount=str(quote.discount),
            total=str(quote.total),
        )

    def handle(self, prompt: PaymentPrompt) -> CheckoutResultDTO:
        order = self._engine.checkout(self._customer, prompt)

        sold_out = []
        for line in order.lines:
            product = self._catalog.get_product(line.product_id)
            if product is not None and not product.is_available:
                sold_out.append(product.name)

        return CheckoutResultDTO(
            order=OrderDTO.from_order(order),
            sold_out=sold_out,
            instruments=[
                InstrumentDTO.from_instrument(i, instrument)
                for i, instrument in enumerate(self._customer.instruments, start=1)
            ],
        )
