"""Customer aggregate. Owns a cart, payment instruments and order history."""

from __future__ import annotations

from shopsim.domain.exceptions import InvalidIndexError, ValidationError
from shopsim.domain.model.cart import Cart
from shopsim.domain.model.payment import PaymentInstrument
from shopsim.domain.repository.order_ledger import OrderLedger


class Customer:
    """The single shopper of a session.

    Instruments are kept in registration order; that order is what the
    1-based indexes shown to the user refer to.
    """

    def __init__(self, name: str, orders: OrderLedger) -> None:
        if not name or not name.strip():
            raise ValidationError("Customer name cannot be empty")
        self.name = name.strip()
        self.cart = Cart()
        self.orders = orders
        self._instruments: list[PaymentInstrument] = []

    @property
    def instruments(self) -> tuple[PaymentInstrument, ...]:
        return tuple(self._instruments)

    def add_instrument(self, instrument: PaymentInstrument) -> int:
        """Register an instrument and return its 1-based index."""
        self._instruments.append(instrument)
        return len(self._instruments)

    def instrument_at(self, index: int) -> PaymentInstrument:
        """Look up an instrument by its 1-based display index."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndexError(f"Invalid payment method index: {index!r}")
        if index < 1 or index > len(self._instruments):
            raise InvalidIndexError(
                f"Invalid payment method index: {index} "
                f"(choose 1-{len(self._instruments)})"
                if self._instruments
                else "No payment methods registered"
            )
        return self._instruments[index - 1]

    def remove_instrument(self, index: int) -> PaymentInstrument:
        instrument = self.instrument_at(index)
        del self._instruments[index - 1]
        return instrument
