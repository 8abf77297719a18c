"""Domain-level exceptions.

All business rule violations are expressed as subclasses of ShopError
so the menu loop can catch them uniformly and display user-friendly messages.

Three families exist:

- ``ValidationError``: bad construction input (negative price, malformed
  card number, ...).
- ``DomainError``: a well-formed request the current state cannot satisfy
  (empty cart, insufficient funds, ...).
- ``AuthorizationError``: an admin action attempted while logged out.
"""

from __future__ import annotations


class ShopError(Exception):
    """Base class for all domain errors."""


class ValidationError(ShopError):
    """Construction input violates an invariant."""


class InvalidInstrumentError(ValidationError):
    """A payment instrument was created with a malformed identifier or balance."""


class DomainError(ShopError):
    """A business rule rejected the requested operation."""


class EntityNotFoundError(DomainError):
    """A requested entity does not exist."""


class DuplicateIdError(DomainError):
    pass


class InvalidQuantityError(DomainError):
    pass


class InsufficientStockError(DomainError):
    pass


class InsufficientFundsError(DomainError):
    pass


class InvalidAmountError(DomainError):
    """A charge or credit amount was zero or negative."""


class InvalidPaymentAmountError(DomainError):
    """A checkout payment was non-positive or exceeded the remaining balance."""


class InvalidIndexError(DomainError):
    pass


class EmptyCartError(DomainError):
    pass


class CheckoutCancelledError(DomainError):
    """The customer cancelled while payment was still outstanding.

    ``payments`` holds the records charged before the cancel; they are
    not reversed unless the checkout policy enables refunds.
    """

    def __init__(self, message: str, payments: tuple = ()) -> None:
        super().__init__(message)
        self.payments = payments


class AuthorizationError(ShopError):
    """An admin-only action was attempted without an admin session."""
