"""Application service: Add Payment Method use case.

Supports every registered instrument kind; the kind is chosen by name
(``card`` or ``wallet``) and the identifier is the card number or the
wallet email respectively.
"""

from __future__ import annotations

from typing import Callable

import structlog

from shopsim.application.dto import InstrumentDTO
from shopsim.domain.exceptions import InvalidInstrumentError, ValidationError
from shopsim.domain.model.customer import Customer
from shopsim.domain.model.payment import (
    CardInstrument,
    PaymentInstrument,
    WalletInstrument,
)
from shopsim.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)

INSTRUMENT_FACTORIES: dict[str, Callable[[str, Money], PaymentInstrument]] = {
    CardInstrument.kind: CardInstrument,
    WalletInstrument.kind: WalletInstrument,
}


class AddPaymentMethodHandler:

    def __init__(self, customer: Customer) -> None:
        self._customer = customer

    def handle(self, kind: str, identifier: str, balance: str) -> InstrumentDTO:
        factory = INSTRUMENT_FACTORIES.get(kind.strip().lower())
        if factory is None:
            raise InvalidInstrumentError(f"Invalid payment method type: {kind!r}")

        try:
            opening = Money.of(balance)
        except ValidationError as exc:
            raise InvalidInstrumentError(f"Invalid opening balance: {balance!r}") from exc

        instrument = factory(identifier, opening)
        index = self._customer.add_instrument(instrument)
        logger.info("Payment method added", kind=instrument.kind, index=index)
        return InstrumentDTO.from_instrument(index, instrument)
