"""Application service: Add Funds use case."""

from __future__ import annotations

import structlog

from shopsim.application.dto import InstrumentDTO
from shopsim.domain.exceptions import InvalidAmountError, ValidationError
from shopsim.domain.model.customer import Customer
from shopsim.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


class FundPaymentMethodHandler:

    def __init__(self, customer: Customer) -> None:
        self._customer = customer

    def handle(self, index: int, amount: str) -> InstrumentDTO:
        """Credit *amount* to the instrument at 1-based *index*."""
        instrument = self._customer.instrument_at(index)
        try:
            money = Money.of(amount)
        except ValidationError as exc:
            raise InvalidAmountError("Amount to add must be positive") from exc

        instrument.credit(money)
        logger.info(
            "Funds added",
            instrument=instrument.describe(),
            amount=str(money),
            balance=str(instrument.current_balance()),
        )
        return InstrumentDTO.from_instrument(index, instrument)
