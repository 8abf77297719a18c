"""Text rendering for DTOs.

The only module that turns shop data into display strings. Products are
rendered by dispatching on their category tag.
"""

from __future__ import annotations

from typing import Callable

import click

from shopsim.application.dto import (
    CartDTO,
    InstrumentDTO,
    OrderDTO,
    ProductDTO,
)


def _electronics(p: ProductDTO) -> str:
    return f"Electronics: {p.name} (Brand: {p.attributes.get('brand', '-')})"


def _clothing(p: ProductDTO) -> str:
    return f"Clothing: {p.name} (Size: {p.attributes.get('size', '-')})"


CATEGORY_RENDERERS: dict[str, Callable[[ProductDTO], str]] = {
    "ELECTRONICS": _electronics,
    "CLOTHING": _clothing,
}


def product_line(p: ProductDTO) -> str:
    render = CATEGORY_RENDERERS.get(p.category, lambda dto: dto.name)
    sold_out = " [SOLD OUT]" if p.sold_out else ""
    return f"ID: {p.id} | {render(p)} - {p.price} | Stock: {p.stock}{sold_out}"


def show_products(products: list[ProductDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return
    click.echo("Available Products:")
    for p in products:
        click.echo(product_line(p))


def show_cart(cart: CartDTO) -> None:
    if cart.is_empty:
        click.echo("Cart is empty.")
        return
    click.echo("Your Cart:")
    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*54}")
    for line in cart.lines:
        click.echo(
            f"  {line.product_id:<6} {line.product_name:<20} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*54}")
    show_totals(cart)


def show_totals(cart: CartDTO) -> None:
    click.echo(f"Subtotal: {cart.subtotal}")
    if cart.discount != "$0.00":
        click.echo(f"Discount: -{cart.discount}")
    click.echo(f"Total after discount: {cart.total}")


def show_instruments(instruments: list[InstrumentDTO]) -> None:
    if not instruments:
        click.echo("No payment methods registered.")
        return
    click.echo("Registered Payment Methods:")
    for i in instruments:
        click.echo(f"{i.index}. {i.description} | Balance: {i.balance}")


def show_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  placed {dto.placed_at}  | Total Paid: {dto.total_paid}")
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    if dto.discount != "$0.00":
        click.echo(f"  {'Discount':<27} {'-' + dto.discount:>20}")
    click.echo(f"  {'Total Paid':<27} {dto.total_paid:>20}")
    click.echo("  Payments:")
    for payment in dto.payments:
        click.echo(f"    {payment.description}: {payment.amount}")


def show_order_history(customer_name: str, orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders yet.")
        return
    click.echo(f"Order History for {customer_name}:")
    for dto in orders:
        show_order(dto)
