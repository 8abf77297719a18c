"""Application service: Show Payment Methods use case (query)."""

from __future__ import annotations

from shopsim.application.dto import InstrumentDTO
from shopsim.domain.model.customer import Customer


class ShowPaymentMethodsHandler:

    def __init__(self, customer: Customer) -> None:
        self._customer = customer

    def handle(self) -> list[InstrumentDTO]:
        return [
            InstrumentDTO.from_instrument(i, instrument)
            for i, instrument in enumerate(self._customer.instruments, start=1)
        ]
