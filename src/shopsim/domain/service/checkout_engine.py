"""Domain service: Checkout Engine.

Turns a customer's cart into a placed order:

  IDLE -> COMPUTING_TOTAL -> COLLECTING_PAYMENT -> COMMITTING_STOCK
       -> ARCHIVING -> DONE

Any failure before DONE returns the engine to IDLE and propagates the
error. Failures in COMPUTING_TOTAL leave everything untouched. Payments
are collected *before* stock is committed, and charges already made when
a later step fails are kept (the customer was charged) unless the policy
enables ``refund_on_abort``, in which case each one is credited back.

Stock commit is validate-then-mutate: every line is checked against
current stock before any product is decremented, so a commit failure
never leaves the catalog partially decremented.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

import structlog

from shopsim.domain.exceptions import (
    CheckoutCancelledError,
    DomainError,
    EmptyCartError,
    InsufficientFundsError,
    InsufficientStockError,
    InvalidPaymentAmountError,
    ShopError,
    ValidationError,
)
from shopsim.domain.model.cart import Cart
from shopsim.domain.model.customer import Customer
from shopsim.domain.model.order import Order, OrderLine
from shopsim.domain.model.payment import PaymentInstrument, PaymentRecord
from shopsim.domain.model.product import Product
from shopsim.domain.model.value_objects import Money
from shopsim.domain.repository.catalog import Catalog
from shopsim.domain.service.payment_prompt import PaymentPrompt

logger = structlog.get_logger(__name__)


class CheckoutState(Enum):
    IDLE = "IDLE"
    COMPUTING_TOTAL = "COMPUTING_TOTAL"
    COLLECTING_PAYMENT = "COLLECTING_PAYMENT"
    COMMITTING_STOCK = "COMMITTING_STOCK"
    ARCHIVING = "ARCHIVING"
    DONE = "DONE"


# ---------------------------------------------------------------------------
# Policy for business rules
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CheckoutPolicy:
    """Volume discount and settlement settings.

    A subtotal strictly above ``discount_threshold`` earns
    ``discount_rate`` off, rounded to cents.
    """

    discount_threshold: Decimal = Decimal("100")
    discount_rate: Decimal = Decimal("0.10")
    settlement_epsilon: Decimal = Decimal("1e-9")
    refund_on_abort: bool = False

    def __post_init__(self) -> None:
        for name in ("discount_threshold", "discount_rate", "settlement_epsilon"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                object.__setattr__(self, name, Decimal(str(value)))
        if self.discount_threshold < 0:
            raise ValidationError("Discount threshold cannot be negative")
        if not Decimal("0") <= self.discount_rate <= Decimal("1"):
            raise ValidationError("Discount rate must be between 0 and 1")
        if self.settlement_epsilon < 0:
            raise ValidationError("Settlement epsilon cannot be negative")

    def discount_for(self, subtotal: Money) -> Money:
        if subtotal.amount > self.discount_threshold:
            return subtotal.scaled(self.discount_rate)
        return Money.zero()


@dataclass(frozen=True)
class CheckoutQuote:
    """Result of COMPUTING_TOTAL: what the customer is about to pay."""

    lines: tuple[OrderLine, ...]
    subtotal: Money
    discount: Money
    total: Money


class CheckoutEngine:

    def __init__(self, catalog: Catalog, policy: CheckoutPolicy | None = None) -> None:
        self._catalog = catalog
        self.policy = policy or CheckoutPolicy()
        self.state = CheckoutState.IDLE

    # --- Public API -----------------------------------------------------------

    def quote(self, cart: Cart) -> CheckoutQuote:
        """Price the cart with the volume discount applied.

        Raises EmptyCartError for an empty cart and InsufficientStockError
        if a line no longer fits in current stock. Mutates nothing.
        """
        if cart.is_empty:
            raise EmptyCartError("Cart is empty. Add items before checkout.")

        lines: list[OrderLine] = []
        for line in cart.lines:
            product = self._catalog.require_product(line.product_id)
            self._check_stock(product, line.quantity.value)
            lines.append(
                OrderLine(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=line.quantity,
                    unit_price=product.price,  # <-- price snapshot
                )
            )

        subtotal = cart.total(self._catalog)
        discount = self.policy.discount_for(subtotal)
        return CheckoutQuote(
            lines=tuple(lines),
            subtotal=subtotal,
            discount=discount,
            total=subtotal - discount,
        )

    def checkout(self, customer: Customer, prompt: PaymentPrompt) -> Order:
        """Run one checkout for *customer* and return the placed order."""
        if self.state not in (CheckoutState.IDLE, CheckoutState.DONE):
            raise DomainError(f"A checkout is already in progress ({self.state.value})")

        charged: list[tuple[PaymentInstrument, PaymentRecord]] = []
        self._transition(CheckoutState.COMPUTING_TOTAL)
        try:
            try:
                quote = self.quote(customer.cart)
            except ShopError as exc:
                logger.info("Checkout rejected", reason=str(exc))
                self._transition(CheckoutState.IDLE)
                raise
            logger.info(
                "Checkout priced",
                customer=customer.name,
                subtotal=str(quote.subtotal),
                discount=str(quote.discount),
                total=str(quote.total),
            )

            try:
                self._transition(CheckoutState.COLLECTING_PAYMENT)
                self._collect_payments(customer, quote.total, prompt, charged)

                self._transition(CheckoutState.COMMITTING_STOCK)
                self._commit_stock(customer.cart)
            except ShopError as exc:
                self._abort(exc, charged)
                raise

            self._transition(CheckoutState.ARCHIVING)
            order = Order.create(
                order_id=customer.orders.next_id(),
                customer_name=customer.name,
                lines=list(quote.lines),
                subtotal=quote.subtotal,
                discount=quote.discount,
                payments=[record for _, record in charged],
                tolerance=self.policy.settlement_epsilon,
            )
            customer.orders.append(order)
            customer.cart.clear()

            self._transition(CheckoutState.DONE)
        finally:
            # Interrupted prompts and archiving failures must not wedge the engine.
            if self.state not in (CheckoutState.IDLE, CheckoutState.DONE):
                logger.warning(
                    "Checkout interrupted",
                    stage=self.state.value,
                    charges_kept=len(charged),
                )
                self._transition(CheckoutState.IDLE)

        logger.info(
            "Order placed",
            order_id=order.id,
            customer=customer.name,
            total_paid=str(order.total_paid),
            payments=len(order.payments),
        )
        return order

    # --- Steps ----------------------------------------------------------------

    def _collect_payments(
        self,
        customer: Customer,
        total: Money,
        prompt: PaymentPrompt,
        charged: list[tuple[PaymentInstrument, PaymentRecord]],
    ) -> None:
        remaining = total
        while remaining.amount > self.policy.settlement_epsilon:
            choice = prompt.choose_instrument(customer.instruments, remaining)
            if choice is None or choice == 0:
                raise CheckoutCancelledError(
                    "Checkout cancelled.",
                    payments=tuple(record for _, record in charged),
                )
            instrument = customer.instrument_at(choice)
            amount = self._parse_amount(prompt.choose_amount(instrument, remaining), remaining)

            try:
                instrument.charge(amount)
            except InsufficientFundsError as exc:
                logger.warning(
                    "Payment declined",
                    instrument=instrument.describe(),
                    amount=str(amount),
                    reason=str(exc),
                )
                prompt.charge_declined(instrument, exc)
                continue

            record = PaymentRecord.of(instrument, amount)
            charged.append((instrument, record))
            remaining = remaining - amount
            logger.info(
                "Payment accepted",
                instrument=record.instrument_description,
                amount=str(amount),
                remaining=str(remaining),
            )
            prompt.charge_accepted(record, remaining)

    def _commit_stock(self, cart: Cart) -> None:
        # Phase 1: resolve and validate every line
        to_commit: list[tuple[Product, int]] = []
        for line in cart.lines:
            product = self._catalog.require_product(line.product_id)
            self._check_stock(product, line.quantity.value)
            to_commit.append((product, line.quantity.value))

        # Phase 2: mutate
        for product, qty in to_commit:
            product.decrease_stock(qty)
            logger.debug("Stock committed", product_id=product.id, quantity=qty, left=product.stock)

    def _abort(
        self,
        exc: ShopError,
        charged: list[tuple[PaymentInstrument, PaymentRecord]],
    ) -> None:
        logger.warning(
            "Checkout aborted",
            stage=self.state.value,
            reason=str(exc),
            charges_kept=0 if self.policy.refund_on_abort else len(charged),
        )
        if self.policy.refund_on_abort:
            for instrument, record in reversed(charged):
                instrument.credit(record.amount)
                logger.info(
                    "Payment refunded",
                    instrument=record.instrument_description,
                    amount=str(record.amount),
                )
        self._transition(CheckoutState.IDLE)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _check_stock(product: Product, quantity: int) -> None:
        if quantity > product.stock:
            raise InsufficientStockError(
                f"Insufficient stock for {product.name} "
                f"(need {quantity}, have {product.stock})"
            )

    @staticmethod
    def _parse_amount(raw: str | int | Decimal | Money, remaining: Money) -> Money:
        try:
            amount = raw if isinstance(raw, Money) else Money.of(raw)
        except ValidationError as exc:
            raise InvalidPaymentAmountError(f"Invalid payment amount: {raw!r}") from exc
        if amount.amount.normalize().as_tuple().exponent < -2:
            raise InvalidPaymentAmountError(
                f"Invalid payment amount: {raw!r} (at most two decimal places)"
            )
        if amount.is_zero or amount > remaining:
            raise InvalidPaymentAmountError(
                f"Invalid payment amount {amount} (must be above $0.00 and at most {remaining})"
            )
        return amount

    def _transition(self, new_state: CheckoutState) -> None:
        logger.debug("Checkout state", previous=self.state.value, current=new_state.value)
        self.state = new_state
