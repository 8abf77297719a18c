from decimal import Decimal, InvalidOperation

import click

from shopsim.application.show_catalog import ShowCatalogHandler
from shopsim.domain.exceptions import ShopError, ValidationError
from shopsim.domain.service.checkout_engine import CheckoutPolicy
from shopsim.infrastructure.bootstrap import Settings, build_shop, seeded_catalog
from shopsim.infrastructure.cli import render
from shopsim.infrastructure.cli.menu import Menu
from shopsim.infrastructure.logging_config import LOG_LEVELS, configure_logging


class DecimalParamType(click.ParamType):
    name = "decimal"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value))
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid decimal", param, ctx)


DECIMAL = DecimalParamType()


@click.group()
@click.option("--discount-threshold", type=DECIMAL, default="100", show_default=True,
              help="Subtotal above which the volume discount applies.")
@click.option("--discount-rate", type=DECIMAL, default="0.10", show_default=True,
              help="Volume discount as a fraction of the subtotal.")
@click.option("--refund-on-abort/--no-refund-on-abort", default=False, show_default=True,
              help="Credit back payments when a checkout is cancelled or fails.")
@click.option("--admin-user", envvar="SHOPSIM_ADMIN_USER", default="admin", show_default=True)
@click.option("--admin-password", envvar="SHOPSIM_ADMIN_PASSWORD", default="1234")
@click.option("--log-level", envvar="SHOPSIM_LOG_LEVEL", default="WARNING", show_default=True,
              type=click.Choice(LOG_LEVELS, case_sensitive=False))
@click.pass_context
def cli(
    ctx: click.Context,
    discount_threshold: Decimal,
    discount_rate: Decimal,
    refund_on_abort: bool,
    admin_user: str,
    admin_password: str,
    log_level: str,
) -> None:
    """shopsim: single-user retail checkout simulator."""
    configure_logging(log_level)
    try:
        policy = CheckoutPolicy(
            discount_threshold=discount_threshold,
            discount_rate=discount_rate,
            refund_on_abort=refund_on_abort,
        )
    except ValidationError as exc:
        raise click.BadParameter(str(exc))
    ctx.obj = Settings(policy=policy, admin_credentials={admin_user: admin_password})


@cli.command("shop")
@click.option("--customer", prompt="Enter your name", help="Customer name.")
@click.pass_obj
def shop(settings: Settings, customer: str) -> None:
    """Start an interactive shopping session."""
    try:
        session = build_shop(customer, settings)
    except ValidationError as exc:
        raise click.ClickException(f"Error initializing store: {exc}")
    except ShopError as exc:
        raise click.ClickException(str(exc))

    Menu(session).run()


@cli.command("catalog")
@click.pass_obj
def catalog(settings: Settings) -> None:
    """List the products the store opens with."""
    try:
        products = ShowCatalogHandler(seeded_catalog(settings)).handle()
    except ShopError as exc:
        raise click.ClickException(f"Error initializing store: {exc}")
    render.show_products(products)
