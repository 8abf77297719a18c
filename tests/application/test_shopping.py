"""Integration tests for cart, checkout, order history and payment method use cases."""

import pytest

from shopsim.application.add_payment_method import AddPaymentMethodHandler
from shopsim.application.add_to_cart import AddToCartHandler
from shopsim.application.checkout import CheckoutHandler
from shopsim.application.fund_payment_method import FundPaymentMethodHandler
from shopsim.application.remove_from_cart import RemoveFromCartHandler
from shopsim.application.remove_payment_method import RemovePaymentMethodHandler
from shopsim.application.show_cart import ShowCartHandler
from shopsim.application.show_orders import ShowOrdersHandler
from shopsim.application.show_payment_methods import ShowPaymentMethodsHandler
from shopsim.domain.exceptions import (
    EmptyCartError,
    EntityNotFoundError,
    InsufficientStockError,
    InvalidAmountError,
    InvalidIndexError,
    InvalidInstrumentError,
)
from shopsim.domain.service.checkout_engine import CheckoutEngine, CheckoutPolicy
from tests.fakes import ScriptedPaymentPrompt, make_catalog, make_customer, make_product


def _setup():
    phone = make_product("E01", "Smartphone", "60.00", stock=3)
    shirt = make_product("C01", "T-shirt", "20.00", stock=10)
    catalog = make_catalog(phone, shirt)
    customer = make_customer()
    return catalog, customer


class TestCartHandlers:

    def test_add_and_show(self):
        catalog, customer = _setup()
        add = AddToCartHandler(customer, catalog)
        assert add.handle("E01", 1) == 1
        assert add.handle("E01", 1) == 2
        add.handle("C01", 1)

        cart = ShowCartHandler(customer, catalog, CheckoutPolicy()).handle()
        assert [(line.product_id, line.quantity) for line in cart.lines] == [("E01", 2), ("C01", 1)]
        assert cart.subtotal == "$140.00"
        assert cart.discount == "$14.00"
        assert cart.total == "$126.00"

    def test_show_empty_cart(self):
        catalog, customer = _setup()
        cart = ShowCartHandler(customer, catalog, CheckoutPolicy()).handle()
        assert cart.is_empty
        assert cart.total == "$0.00"

    def test_add_unknown_product(self):
        catalog, customer = _setup()
        with pytest.raises(EntityNotFoundError):
            AddToCartHandler(customer, catalog).handle("NOPE", 1)

    def test_add_beyond_stock(self):
        catalog, customer = _setup()
        with pytest.raises(InsufficientStockError):
            AddToCartHandler(customer, catalog).handle("E01", 4)
        assert customer.cart.is_empty

    def test_remove(self):
        catalog, customer = _setup()
        AddToCartHandler(customer, catalog).handle("E01", 1)
        remove = RemoveFromCartHandler(customer)
        assert remove.handle(" E01 ") is True
        assert remove.handle("E01") is False


class TestCheckoutHandler:

    def test_quote_matches_cart(self):
        catalog, customer = _setup()
        AddToCartHandler(customer, catalog).handle("C01", 2)
        quote = CheckoutHandler(customer, catalog, CheckoutEngine(catalog)).quote()
        assert quote.total == "$40.00"

    def test_quote_empty_cart(self):
        catalog, customer = _setup()
        with pytest.raises(EmptyCartError):
            CheckoutHandler(customer, catalog, CheckoutEngine(catalog)).quote()

    def test_checkout_reports_sold_out_and_balances(self):
        catalog, customer = _setup()
        AddToCartHandler(customer, catalog).handle("E01", 3)
        handler = CheckoutHandler(customer, catalog, CheckoutEngine(catalog))

        # 180 - 18 = 162
        result = handler.handle(ScriptedPaymentPrompt([(1, "100"), (2, "62")]))

        assert result.order.total_paid == "$162.00"
        assert result.order.discount == "$18.00"
        assert [p.description for p in result.order.payments] == [
            "Credit Card ending in 3456",
            "Wallet (alice@example.com)",
        ]
        assert result.sold_out == ["Smartphone"]
        assert [i.balance for i in result.instruments] == ["$0.00", "$438.00"]

    def test_order_history(self):
        catalog, customer = _setup()
        engine = CheckoutEngine(catalog)
        add = AddToCartHandler(customer, catalog)
        checkout = CheckoutHandler(customer, catalog, engine)

        add.handle("C01", 1)
        checkout.handle(ScriptedPaymentPrompt([(1, "20")]))
        add.handle("C01", 2)
        checkout.handle(ScriptedPaymentPrompt([(2, "40")]))

        history = ShowOrdersHandler(customer).handle()
        assert [(o.id, o.total_paid) for o in history] == [(1, "$20.00"), (2, "$40.00")]
        assert history == ShowOrdersHandler(customer).handle()


class TestPaymentMethodHandlers:

    def test_list(self):
        _, customer = _setup()
        listed = ShowPaymentMethodsHandler(customer).handle()
        assert [(i.index, i.kind, i.balance) for i in listed] == [
            (1, "card", "$100.00"),
            (2, "wallet", "$500.00"),
        ]

    def test_add_card(self):
        _, customer = _setup()
        dto = AddPaymentMethodHandler(customer).handle("card", "9999888877776666", "25")
        assert dto.index == 3
        assert dto.description == "Credit Card ending in 6666"

    @pytest.mark.parametrize(
        "kind,identifier,balance",
        [
            ("cheque", "x", "1"),
            ("card", "1234", "1"),
            ("wallet", "not-an-email", "1"),
            ("wallet", "bob@example.com", "-5"),
        ],
    )
    def test_add_invalid(self, kind, identifier, balance):
        _, customer = _setup()
        with pytest.raises(InvalidInstrumentError):
            AddPaymentMethodHandler(customer).handle(kind, identifier, balance)
        assert len(customer.instruments) == 2

    def test_remove(self):
        _, customer = _setup()
        assert RemovePaymentMethodHandler(customer).handle(1) == "Credit Card ending in 3456"
        with pytest.raises(InvalidIndexError):
            RemovePaymentMethodHandler(customer).handle(2)

    def test_fund(self):
        _, customer = _setup()
        dto = FundPaymentMethodHandler(customer).handle(2, "12.50")
        assert dto.balance == "$512.50"

    @pytest.mark.parametrize("amount", ["0", "-3", "lots"])
    def test_fund_non_positive_rejected(self, amount):
        _, customer = _setup()
        with pytest.raises(InvalidAmountError):
            FundPaymentMethodHandler(customer).handle(1, amount)
