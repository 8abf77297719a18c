"""Port through which the checkout engine asks the customer for payments.

The engine never reads input or prints anything itself. The CLI supplies
an implementation backed by interactive prompts; tests supply a scripted one.
Values returned here are treated as untrusted: the engine re-validates
every index and amount.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Sequence

from shopsim.domain.exceptions import ShopError
from shopsim.domain.model.payment import PaymentInstrument, PaymentRecord
from shopsim.domain.model.value_objects import Money


class PaymentPrompt(ABC):

    @abstractmethod
    def choose_instrument(
        self, instruments: Sequence[PaymentInstrument], remaining: Money
    ) -> int | None:
        """Return a 1-based instrument index, or ``None``/``0`` to cancel."""

    @abstractmethod
    def choose_amount(
        self, instrument: PaymentInstrument, remaining: Money
    ) -> str | int | Decimal | Money:
        """Return the amount to charge to *instrument*."""

    def charge_accepted(self, record: PaymentRecord, remaining: Money) -> None:
        """Called after each successful charge."""

    def charge_declined(self, instrument: PaymentInstrument, error: ShopError) -> None:
        """Called when a charge fails and the customer may retry."""
