"""Payment instruments and payment records.

Every instrument exposes the same capability set: ``charge``, ``credit``,
``describe`` and ``current_balance``. New kinds of instrument are new
subclasses of ``PaymentInstrument``; callers never branch on the kind.

Invariant: an instrument's balance is never negative. ``charge`` and
``credit`` are the only mutators and each runs under the instrument's own
lock, so a debit either applies in full or not at all.
"""

from __future__ import annotations

import re
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

from shopsim.domain.exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidInstrumentError,
)
from shopsim.domain.model.value_objects import Money

_CARD_NUMBER = re.compile(r"\d{16}")
_EMAIL = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


class PaymentInstrument(ABC):

    kind: str = "instrument"

    def __init__(self, balance: Money) -> None:
        if not isinstance(balance, Money):
            raise InvalidInstrumentError(
                f"Balance must be Money, got {type(balance).__name__}"
            )
        self._balance = balance
        self._lock = threading.Lock()

    @abstractmethod
    def describe(self) -> str:
        """Human-readable, masked description of the instrument."""

    def current_balance(self) -> Money:
        return self._balance

    def charge(self, amount: Money) -> None:
        """Debit *amount*; raises InsufficientFundsError if it exceeds the balance."""
        if amount.is_zero:
            raise InvalidAmountError("Charge amount must be positive")
        with self._lock:
            if amount > self._balance:
                raise InsufficientFundsError(
                    f"Insufficient funds on {self.describe()} "
                    f"(balance {self._balance}, requested {amount})"
                )
            self._balance = self._balance - amount

    def credit(self, amount: Money) -> None:
        """Add funds (top-up or refund)."""
        if amount.is_zero:
            raise InvalidAmountError("Amount to add must be positive")
        with self._lock:
            self._balance = self._balance + amount

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()!r}, balance={self._balance})"


class CardInstrument(PaymentInstrument):
    """A credit card identified by a 16-digit number; only the last four are shown."""

    kind = "card"

    def __init__(self, card_number: str, balance: Money) -> None:
        card_number = (card_number or "").strip()
        if not _CARD_NUMBER.fullmatch(card_number):
            raise InvalidInstrumentError("Invalid card number (must be 16 digits)")
        super().__init__(balance)
        self._card_number = card_number

    @property
    def last_four(self) -> str:
        return self._card_number[-4:]

    def describe(self) -> str:
        return f"Credit Card ending in {self.last_four}"


class WalletInstrument(PaymentInstrument):
    """An e-wallet account identified by its email address."""

    kind = "wallet"

    def __init__(self, email: str, balance: Money) -> None:
        email = (email or "").strip()
        if not _EMAIL.fullmatch(email):
            raise InvalidInstrumentError(f"Invalid wallet email: {email!r}")
        super().__init__(balance)
        self.email = email

    def describe(self) -> str:
        return f"Wallet ({self.email})"


@dataclass(frozen=True)
class PaymentRecord:
    """One successful charge made during a checkout."""

    instrument_kind: str
    instrument_description: str
    amount: Money

    @staticmethod
    def of(instrument: PaymentInstrument, amount: Money) -> PaymentRecord:
        return PaymentRecord(
            instrument_kind=instrument.kind,
            instrument_description=instrument.describe(),
            amount=amount,
        )
