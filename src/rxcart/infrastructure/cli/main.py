import click

from rxcart.infrastructure.bootstrap import settings
from rxcart.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_set_quantity,
    cart_show,
)
from rxcart.infrastructure.cli.catalog_commands import catalog_list
from rxcart.infrastructure.cli.order_commands import order_checkout, order_list, order_show
from rxcart.utils.logging import add_context, configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """rxcart: pharmacy delivery carts and checkout."""
    cfg = settings()
    configure_logging(level=cfg.log_level, env=cfg.env)
    add_context(command=ctx.invoked_subcommand)


@cli.group()
def cart() -> None:
    """Manage a client's cart."""


@cli.group()
def order() -> None:
    """Check out and inspect orders."""


@cli.group()
def catalog() -> None:
    """Browse the catalog."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_set_quantity)
cart.add_command(cart_show)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_show)
catalog.add_command(catalog_list)
