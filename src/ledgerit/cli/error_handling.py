"""CLI error handling and persistence helpers."""

import click

from ledgerit.domain.errors import DomainError
from ledgerit.storage import StorageError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def save_or_exit(ctx: click.Context) -> None:
    """Persist the ledger after a successful change, or exit with failure."""
    store = ctx.obj["store"]
    try:
        store.save(ctx.obj["ledger"])
    except StorageError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
