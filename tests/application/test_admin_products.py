"""Integration tests for the admin catalog use cases (add / update product)."""

from decimal import Decimal

import pytest

from shopsim.application.add_product import AddProductHandler
from shopsim.application.show_catalog import ShowCatalogHandler
from shopsim.application.update_product import UpdateProductHandler
from shopsim.domain.exceptions import (
    AuthorizationError,
    DuplicateIdError,
    EntityNotFoundError,
    ValidationError,
)
from shopsim.domain.model.admin_session import AdminSession
from shopsim.infrastructure.credentials import StaticCredentialVerifier
from tests.fakes import make_catalog, make_product


def _setup(logged_in: bool = True):
    catalog = make_catalog(make_product("E01"))
    session = AdminSession(StaticCredentialVerifier({"admin": "1234"}))
    if logged_in:
        session.login("admin", "1234")
    return catalog, session


class TestAddProduct:

    def test_adds_clothing(self):
        catalog, session = _setup()
        dto = AddProductHandler(catalog, session).handle(
            "C05", "Hoodie", "49.90", 3, "clothing", {"size": "XL"}
        )
        assert dto.category == "CLOTHING"
        assert dto.price == "$49.90"
        assert catalog.get_product("C05").attributes["size"] == "XL"

    def test_requires_admin(self):
        catalog, session = _setup(logged_in=False)
        with pytest.raises(AuthorizationError):
            AddProductHandler(catalog, session).handle(
                "C05", "Hoodie", "49.90", 3, "CLOTHING", {"size": "XL"}
            )
        assert not catalog.contains("C05")

    def test_duplicate_id_rejected(self):
        catalog, session = _setup()
        with pytest.raises(DuplicateIdError):
            AddProductHandler(catalog, session).handle(
                "E01", "Tablet", "199", 1, "ELECTRONICS", {"brand": "Acme"}
            )

    def test_unknown_category_rejected(self):
        catalog, session = _setup()
        with pytest.raises(ValidationError, match="Unknown product category"):
            AddProductHandler(catalog, session).handle("F01", "Apple", "1", 1, "food", {})

    @pytest.mark.parametrize("price,stock", [("-1", 1), ("abc", 1), ("5", -3)])
    def test_invalid_price_or_stock_rejected(self, price, stock):
        catalog, session = _setup()
        with pytest.raises(ValidationError):
            AddProductHandler(catalog, session).handle(
                "E09", "Tablet", price, stock, "ELECTRONICS", {"brand": "Acme"}
            )
        assert not catalog.contains("E09")


class TestUpdateProduct:

    def test_updates_price_and_stock(self):
        catalog, session = _setup()
        dto = UpdateProductHandler(catalog, session).handle("E01", new_price="19.99", new_stock=0)
        assert dto.price == "$19.99"
        assert dto.sold_out

    def test_requires_admin(self):
        catalog, session = _setup(logged_in=False)
        with pytest.raises(AuthorizationError):
            UpdateProductHandler(catalog, session).handle("E01", new_stock=1)

    def test_unknown_product(self):
        catalog, session = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(catalog, session).handle("ZZ", new_stock=1)

    @pytest.mark.parametrize("price,stock", [("99.00", -1), ("99.00", "7"), ("abc", 3)])
    def test_failed_update_changes_nothing(self, price, stock):
        catalog, session = _setup()
        with pytest.raises(ValidationError):
            UpdateProductHandler(catalog, session).handle("E01", new_price=price, new_stock=stock)
        product = catalog.get_product("E01")
        assert product.price.amount == Decimal("25.00")
        assert product.stock == 10

    def test_nothing_to_update(self):
        catalog, session = _setup()
        with pytest.raises(ValidationError, match="Nothing to update"):
            UpdateProductHandler(catalog, session).handle("E01")


class TestShowCatalog:

    def test_lists_products_as_dtos(self):
        catalog, _ = _setup()
        products = ShowCatalogHandler(catalog).handle()
        assert [(p.id, p.category, p.attributes) for p in products] == [
            ("E01", "ELECTRONICS", {"brand": "Acme"})
        ]

    def test_repeated_listing_is_identical(self):
        catalog, _ = _setup()
        handler = ShowCatalogHandler(catalog)
        assert handler.handle() == handler.handle()
