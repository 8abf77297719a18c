"""Interactive PaymentPrompt backed by click prompts."""

from __future__ import annotations

from typing import Sequence

import click

from shopsim.domain.exceptions import ShopError
from shopsim.domain.model.payment import PaymentInstrument, PaymentRecord
from shopsim.domain.model.value_objects import Money
from shopsim.domain.service.payment_prompt import PaymentPrompt


class ClickPaymentPrompt(PaymentPrompt):

    def choose_instrument(
        self, instruments: Sequence[PaymentInstrument], remaining: Money
    ) -> int | None:
        return click.prompt("Select payment method (index) or 0 to cancel", type=int)

    def choose_amount(self, instrument: PaymentInstrument, remaining: Money) -> str:
        click.echo(
            f"Selected {instrument.describe()} (Balance: {instrument.current_balance()})"
        )
        return click.prompt(f"Enter amount to pay (max {remaining})", type=str)

    def charge_accepted(self, record: PaymentRecord, remaining: Money) -> None:
        click.echo(f"Paid {record.amount} using {record.instrument_description}.")
        if not remaining.is_zero:
            click.echo(f"Remaining balance to pay: {remaining}")

    def charge_declined(self, instrument: PaymentInstrument, error: ShopError) -> None:
        click.echo(f"Payment failed: {error}")
