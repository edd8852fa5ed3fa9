"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from rxcart.domain.exceptions import DomainException
from rxcart.infrastructure.bootstrap import catalog_repository


@click.command("list")
def catalog_list() -> None:
    """List all catalog entries."""
    try:
        entries = catalog_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No catalog entries found.")
        return

    click.echo(f"{'ID':<6} {'Est.':<6} {'Name':<30} {'Price':>14}")
    click.echo("-" * 59)
    for e in entries:
        click.echo(f"{e.id:<6} {e.establishment_id:<6} {e.name:<30} {str(e.price):>14}")
