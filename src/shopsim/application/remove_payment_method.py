"""Application service: Remove Payment Method use case."""

from __future__ import annotations

import structlog

from shopsim.domain.model.customer import Customer

logger = structlog.get_logger(__name__)


class RemovePaymentMethodHandler:

    def __init__(self, customer: Customer) -> None:
        self._customer = customer

    def handle(self, index: int) -> str:
        """Remove the instrument at 1-based *index*; returns its description."""
        instrument = self._customer.remove_instrument(index)
        logger.info("Payment method removed", kind=instrument.kind, index=index)
        return instrument.describe()
