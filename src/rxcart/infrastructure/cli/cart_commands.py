"""CLI commands for the Cart aggregate.

Commands address a cart by its owner: the client ID stands in for the
verified identity an authenticating gateway would attach.
"""

from __future__ import annotations

import click

from rxcart.application.add_cart_line import AddCartLineHandler
from rxcart.application.clear_cart import ClearCartHandler
from rxcart.application.get_or_create_cart import GetOrCreateCartHandler
from rxcart.application.remove_cart_line import RemoveCartLineHandler
from rxcart.application.set_cart_line_quantity import SetCartLineQuantityHandler
from rxcart.application.show_cart import ShowCartHandler
from rxcart.domain.exceptions import DomainException
from rxcart.infrastructure.bootstrap import catalog_repository, unit_of_work


def _cart_id_for(client_id: int) -> int:
    return GetOrCreateCartHandler(uow=unit_of_work()).handle(client_id).id


@click.command("show")
@click.option("--client", "client_id", required=True, type=int, help="Client ID.")
def cart_show(client_id: int) -> None:
    """Show the client's cart at current catalog prices."""
    handler = ShowCartHandler(uow=unit_of_work(), catalog=catalog_repository())

    try:
        dto = handler.handle(client_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart #{dto.id}  (client #{dto.client_id})")
    if not dto.items:
        click.echo("Cart is empty.")
        return

    click.echo(f"Establishment: #{dto.establishment_id}")
    click.echo()
    click.echo(f"  {'Entry':<8} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*44}")
    for item in dto.items:
        click.echo(
            f"  {item.catalog_entry_id:<8} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*44}")
    click.echo(f"  {'Cart Total':<14} {dto.total:>28}")


@click.command("add")
@click.option("--client", "client_id", required=True, type=int, help="Client ID.")
@click.option("--entry", "entry_id", required=True, type=int, help="Catalog entry ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(client_id: int, entry_id: int, quantity: int) -> None:
    """Add a catalog entry to the client's cart."""
    try:
        cart_id = _cart_id_for(client_id)
        handler = AddCartLineHandler(uow=unit_of_work(), catalog=catalog_repository())
        line = handler.handle(cart_id, entry_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Catalog entry #{entry_id} in cart: quantity {line.quantity}")


@click.command("remove")
@click.option("--client", "client_id", required=True, type=int, help="Client ID.")
@click.option("--entry", "entry_id", required=True, type=int, help="Catalog entry ID.")
def cart_remove(client_id: int, entry_id: int) -> None:
    """Remove a catalog entry from the client's cart."""
    try:
        cart_id = _cart_id_for(client_id)
        handler = RemoveCartLineHandler(uow=unit_of_work(), catalog=catalog_repository())
        removed = handler.handle(cart_id, entry_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not removed:
        raise click.ClickException(f"Catalog entry #{entry_id} is not in the cart")
    click.echo(f"Catalog entry #{entry_id} removed from cart.")


@click.command("set-quantity")
@click.option("--client", "client_id", required=True, type=int, help="Client ID.")
@click.option("--entry", "entry_id", required=True, type=int, help="Catalog entry ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_set_quantity(client_id: int, entry_id: int, quantity: int) -> None:
    """Change the quantity of a line in the client's cart."""
    try:
        cart_id = _cart_id_for(client_id)
        handler = SetCartLineQuantityHandler(uow=unit_of_work(), catalog=catalog_repository())
        affected, _ = handler.handle(cart_id, entry_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not affected:
        raise click.ClickException(f"Catalog entry #{entry_id} is not in the cart")
    click.echo(f"Catalog entry #{entry_id} quantity set to {quantity}.")


@click.command("clear")
@click.option("--client", "client_id", required=True, type=int, help="Client ID.")
def cart_clear(client_id: int) -> None:
    """Remove every line from the client's cart."""
    try:
        cart_id = _cart_id_for(client_id)
        removed = ClearCartHandler(uow=unit_of_work()).handle(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart cleared ({removed} line(s) removed).")
