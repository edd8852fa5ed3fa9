"""CLI commands for checkout and the Order aggregate."""

from __future__ import annotations

import click

from rxcart.application.checkout import CheckoutHandler
from rxcart.application.dto import CheckoutDetails, OrderDTO, order_to_dto
from rxcart.application.get_or_create_cart import GetOrCreateCartHandler
from rxcart.application.list_orders import (
    ListClientOrdersHandler,
    ListEstablishmentOrdersHandler,
)
from rxcart.application.show_order import ShowOrderHandler
from rxcart.domain.exceptions import DomainException
from rxcart.infrastructure.bootstrap import (
    catalog_repository,
    establishment_repository,
    unit_of_work,
)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Client: #{dto.client_id}   Establishment: #{dto.establishment_id}")
    click.echo(f"Address: #{dto.address_id}   Payment method: #{dto.payment_method_id}")
    click.echo(f"Created: {dto.created_at}")
    if dto.notes:
        click.echo(f"Notes:   {dto.notes}")
    click.echo()

    click.echo(f"  {'Entry':<8} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*44}")
    for item in dto.items:
        click.echo(
            f"  {item.catalog_entry_id:<8} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*44}")
    click.echo(f"  {'Subtotal':<14} {dto.subtotal:>28}")
    click.echo(f"  {'Delivery fee':<14} {dto.delivery_fee:>28}")
    click.echo(f"  {'Order Total':<14} {dto.total:>28}")


@click.command("checkout")
@click.option("--client", "client_id", required=True, type=int, help="Client ID.")
@click.option("--address", "address_id", required=True, type=int, help="Delivery address ID.")
@click.option("--payment", "payment_method_id", required=True, type=int, help="Payment method ID.")
@click.option("--notes", default=None, help="Free-text notes for the pharmacy.")
def order_checkout(
    client_id: int,
    address_id: int,
    payment_method_id: int,
    notes: str | None,
) -> None:
    """Place an order from the client's cart."""
    handler = CheckoutHandler(
        uow=unit_of_work(),
        catalog=catalog_repository(),
        delivery=establishment_repository(),
    )
    details = CheckoutDetails(
        address_id=address_id,
        payment_method_id=payment_method_id,
        notes=notes,
    )

    try:
        cart = GetOrCreateCartHandler(uow=unit_of_work()).handle(client_id)
        order = handler.handle(client_id, cart.id, details)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order.id} placed.")
    click.echo()
    _display_order(order_to_dto(order))


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--client", "client_id", type=int, default=None, help="List a client's orders.")
@click.option("--establishment", "establishment_id", type=int, default=None, help="List an establishment's orders.")
def order_list(client_id: int | None, establishment_id: int | None) -> None:
    """List orders by client or by establishment."""
    if (client_id is None) == (establishment_id is None):
        raise click.UsageError("Pass exactly one of --client or --establishment")

    try:
        if client_id is not None:
            dtos = ListClientOrdersHandler(uow=unit_of_work()).handle(client_id)
        else:
            dtos = ListEstablishmentOrdersHandler(uow=unit_of_work()).handle(establishment_id)  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Created':<22} {'Status':<18} {'Total':>14}")
    click.echo("-" * 63)
    for dto in dtos:
        click.echo(f"{dto.id:<6} {dto.created_at:<22} {dto.status:<18} {dto.total:>14}")
