"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from shopsim.application.add_payment_method import AddPaymentMethodHandler
from shopsim.domain.model.admin_session import AdminSession
from shopsim.domain.model.customer import Customer
from shopsim.domain.model.product import Category, Product
from shopsim.domain.service.checkout_engine import CheckoutEngine, CheckoutPolicy
from shopsim.infrastructure.credentials import StaticCredentialVerifier
from shopsim.infrastructure.persistence.in_memory_catalog import InMemoryCatalog
from shopsim.infrastructure.persistence.in_memory_order_ledger import (
    InMemoryOrderLedger,
)

logger = structlog.get_logger(__name__)

SEED_PRODUCTS = [
    ("E01", "Smartphone", "299.99", 5, Category.ELECTRONICS, {"brand": "Samsung"}),
    ("E02", "Laptop", "799.99", 2, Category.ELECTRONICS, {"brand": "Dell"}),
    ("C01", "T-shirt", "19.99", 10, Category.CLOTHING, {"size": "M"}),
    ("C02", "Jeans", "39.99", 7, Category.CLOTHING, {"size": "L"}),
]

DEMO_INSTRUMENTS = [
    ("card", "1234567890123456", "1000.00"),
    ("wallet", "user@example.com", "500.00"),
]


@dataclass(frozen=True)
class Settings:
    policy: CheckoutPolicy = field(default_factory=CheckoutPolicy)
    admin_credentials: dict[str, str] = field(default_factory=lambda: {"admin": "1234"})
    seed_products: list[tuple] = field(default_factory=lambda: list(SEED_PRODUCTS))
    demo_instruments: list[tuple[str, str, str]] = field(
        default_factory=lambda: list(DEMO_INSTRUMENTS)
    )


@dataclass
class Shop:
    """Everything one shopping session needs."""

    catalog: InMemoryCatalog
    customer: Customer
    session: AdminSession
    engine: CheckoutEngine


def seeded_catalog(settings: Settings) -> InMemoryCatalog:
    """Build the store catalog. Any ValidationError here is a configuration error."""
    catalog = InMemoryCatalog()
    for product_id, name, price, stock, category, attributes in settings.seed_products:
        catalog.add_product(
            Product.create(product_id, name, price, stock, category, attributes)
        )
    logger.debug("Catalog seeded", products=len(catalog))
    return catalog


def build_shop(customer_name: str, settings: Settings | None = None) -> Shop:
    settings = settings or Settings()
    catalog = seeded_catalog(settings)

    customer = Customer(customer_name, orders=InMemoryOrderLedger())
    add_instrument = AddPaymentMethodHandler(customer)
    for kind, identifier, balance in settings.demo_instruments:
        add_instrument.handle(kind, identifier, balance)

    return Shop(
        catalog=catalog,
        customer=customer,
        session=AdminSession(StaticCredentialVerifier(settings.admin_credentials)),
        engine=CheckoutEngine(catalog, settings.policy),
    )
