"""Interactive menu loop.

Every action runs inside the loop's error boundary: any ShopError is
reported and control returns to the menu.
"""

from __future__ import annotations

from typing import Callable

import click
import structlog

from shopsim.application.add_payment_method import AddPaymentMethodHandler
from shopsim.application.add_product import AddProductHandler
from shopsim.application.add_to_cart import AddToCartHandler
from shopsim.application.checkout import CheckoutHandler
from shopsim.application.fund_payment_method import FundPaymentMethodHandler
from shopsim.application.remove_from_cart import RemoveFromCartHandler
from shopsim.application.remove_payment_method import RemovePaymentMethodHandler
from shopsim.application.show_cart import ShowCartHandler
from shopsim.application.show_catalog import ShowCatalogHandler
from shopsim.application.show_orders import ShowOrdersHandler
from shopsim.application.show_payment_methods import ShowPaymentMethodsHandler
from shopsim.application.update_product import UpdateProductHandler
from shopsim.domain.exceptions import CheckoutCancelledError, ShopError
from shopsim.domain.service.payment_prompt import PaymentPrompt
from shopsim.infrastructure.bootstrap import Shop
from shopsim.infrastructure.cli import render
from shopsim.infrastructure.cli.prompts import ClickPaymentPrompt

logger = structlog.get_logger(__name__)

BANNER = "=" * 38


class Menu:

    def __init__(self, shop: Shop, prompt: PaymentPrompt | None = None) -> None:
        self._shop = shop
        self._prompt = prompt or ClickPaymentPrompt()
        customer, catalog = shop.customer, shop.catalog

        self._show_catalog = ShowCatalogHandler(catalog)
        self._add_to_cart = AddToCartHandler(customer, catalog)
        self._remove_from_cart = RemoveFromCartHandler(customer)
        self._show_cart = ShowCartHandler(customer, catalog, shop.engine.policy)
        self._checkout = CheckoutHandler(customer, catalog, shop.engine)
        self._show_orders = ShowOrdersHandler(customer)
        self._add_product = AddProductHandler(catalog, shop.session)
        self._update_product = UpdateProductHandler(catalog, shop.session)
        self._show_payments = ShowPaymentMethodsHandler(customer)
        self._add_payment = AddPaymentMethodHandler(customer)
        self._remove_payment = RemovePaymentMethodHandler(customer)
        self._fund_payment = FundPaymentMethodHandler(customer)

        self._actions: dict[int, tuple[str, Callable[[], None]]] = {
            1: ("View Products", self.view_products),
            2: ("Add to Cart", self.add_to_cart),
            3: ("Remove from Cart", self.remove_from_cart),
            4: ("View Cart", self.view_cart),
            5: ("Checkout", self.checkout),
            6: ("Admin Login", self.admin_login),
            7: ("Add Product (Admin Only)", self.add_product),
            8: ("Admin Logout", self.admin_logout),
            9: ("Order History", self.order_history),
            10: ("Manage Payment Methods", self.manage_payment_methods),
            11: ("Update Product (Admin Only)", self.update_product),
        }
        self._exit_choice = len(self._actions) + 1

    def run(self) -> None:
        click.echo(BANNER)
        click.echo(" Welcome to the Simple Online Shop!")
        click.echo(BANNER)

        while True:
            click.echo("\nMenu:")
            for number, (label, _) in self._actions.items():
                click.echo(f"{number}. {label}")
            click.echo(f"{self._exit_choice}. Exit")
            choice = click.prompt("Choose an option", type=int)

            if choice == self._exit_choice:
                break
            if choice not in self._actions:
                click.echo("Invalid choice.")
                continue

            _, action = self._actions[choice]
            try:
                action()
            except ShopError as exc:
                logger.info("Action failed", choice=choice, error=type(exc).__name__)
                click.echo(f"Error: {exc}")

        click.echo(BANNER)
        click.echo(" Thank you for shopping with us!")
        click.echo(BANNER)

    # --- Catalog & cart -------------------------------------------------------

    def view_products(self) -> None:
        render.show_products(self._show_catalog.handle())

    def add_to_cart(self) -> None:
        product_id = click.prompt("Enter Product ID to add")
        self._shop.catalog.require_product(product_id)
        quantity = click.prompt("Enter quantity", type=int)
        self._add_to_cart.handle(product_id, quantity)
        click.echo("Added to cart.")

    def remove_from_cart(self) -> None:
        product_id = click.prompt("Enter Product ID to remove from cart")
        if self._remove_from_cart.handle(product_id):
            click.echo("Removed from cart.")
        else:
            click.echo("That product is not in your cart.")

    def view_cart(self) -> None:
        render.show_cart(self._show_cart.handle())

    # --- Checkout -------------------------------------------------------------

    def checkout(self) -> None:
        render.show_totals(self._checkout.quote())
        click.echo("\nAvailable Payment Methods:")
        render.show_instruments(self._show_payments.handle())

        try:
            result = self._checkout.handle(self._prompt)
        except CheckoutCancelledError as exc:
            click.echo(f"Error: {exc}")
            if exc.payments and not self._shop.engine.policy.refund_on_abort:
                click.echo("Payments already made were not reversed:")
                for record in exc.payments:
                    click.echo(f"  {record.instrument_description}: {record.amount}")
            return

        click.echo("\nPayment Method Balances After Checkout:")
        render.show_instruments(result.instruments)
        for name in result.sold_out:
            click.echo(f"{name} is now SOLD OUT!")
        click.echo(f"Order #{result.order.id} placed! Thank you, {self._shop.customer.name}")

    def order_history(self) -> None:
        render.show_order_history(self._shop.customer.name, self._show_orders.handle())

    # --- Admin ----------------------------------------------------------------

    def admin_login(self) -> None:
        session = self._shop.session
        if session.is_logged_in:
            click.echo("Already logged in as admin.")
            return
        username = click.prompt("Admin username")
        password = click.prompt("Admin password", hide_input=True)
        if session.login(username, password):
            click.echo("Admin login successful.")
        else:
            click.echo("Invalid admin credentials.")

    def admin_logout(self) -> None:
        session = self._shop.session
        if session.is_logged_in:
            session.logout()
            click.echo("Admin logged out.")
        else:
            click.echo("Not logged in as admin.")

    def add_product(self) -> None:
        self._shop.session.require_admin()
        kind = click.prompt("Enter type (1=Electronics, 2=Clothing)", type=click.Choice(["1", "2"]))
        product_id = click.prompt("Enter Product ID")
        name = click.prompt("Enter Name")
        price = click.prompt("Enter Price")
        stock = click.prompt("Enter Stock Quantity", type=int)
        if kind == "1":
            category, attributes = "ELECTRONICS", {"brand": click.prompt("Enter Brand")}
        else:
            category, attributes = "CLOTHING", {"size": click.prompt("Enter Size")}

        product = self._add_product.handle(product_id, name, price, stock, category, attributes)
        click.echo(f"Product {product.id} '{product.name}' added at {product.price}.")

    def update_product(self) -> None:
        self._shop.session.require_admin()
        product_id = click.prompt("Enter Product ID")
        price = click.prompt("New price (blank to keep)", default="", show_default=False)
        stock = click.prompt("New stock (blank to keep)", default="", show_default=False)
        try:
            new_stock = int(stock) if stock.strip() else None
        except ValueError:
            click.echo("Error: stock must be a whole number.")
            return

        product = self._update_product.handle(
            product_id,
            new_price=price.strip() or None,
            new_stock=new_stock,
        )
        click.echo(render.product_line(product))

    # --- Payment methods ------------------------------------------------------

    def manage_payment_methods(self) -> None:
        click.echo("\nPayment Method Management:")
        click.echo("1. View Payment Methods and Balances")
        click.echo("2. Add Payment Method")
        click.echo("3. Remove Payment Method")
        click.echo("4. Add Funds to Payment Method")
        click.echo("5. Back")
        choice = click.prompt("Choose an option", type=int)

        if choice == 1:
            render.show_instruments(self._show_payments.handle())
        elif choice == 2:
            kind = click.prompt("Enter type (1=Credit Card, 2=Wallet)", type=click.Choice(["1", "2"]))
            if kind == "1":
                identifier = click.prompt("Enter 16-digit card number")
            else:
                identifier = click.prompt("Enter wallet email")
            balance = click.prompt("Enter available balance")
            dto = self._add_payment.handle("card" if kind == "1" else "wallet", identifier, balance)
            click.echo(f"{dto.description} added.")
        elif choice == 3:
            render.show_instruments(self._show_payments.handle())
            index = click.prompt("Enter index to remove", type=int)
            removed = self._remove_payment.handle(index)
            click.echo(f"{removed} removed.")
        elif choice == 4:
            render.show_instruments(self._show_payments.handle())
            index = click.prompt("Select payment method to add funds (index) or 0 to cancel", type=int)
            if index == 0:
                return
            amount = click.prompt("Enter amount to add")
            dto = self._fund_payment.handle(index, amount)
            click.echo(f"Added funds to {dto.description}. New balance: {dto.balance}")
        elif choice != 5:
            click.echo("Invalid choice.")
