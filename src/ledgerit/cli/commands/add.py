"""Add transaction command."""

import click
from ledgerit.cli.error_handling import handle_domain_error, save_or_exit
from ledgerit.domain.transaction import TransactionService
from ledgerit.utils.date_parser import parse_datetime


@click.command("add")
@click.option("--name", required=True, help="Transaction name (e.g. 'Groceries')")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD [HH:MM] or relative like 'today', 'yesterday')",
)
@click.option(
    "--posting",
    "postings",
    type=(str, str),
    multiple=True,
    required=True,
    metavar="ACCOUNT AMOUNT",
    help="Account and amount, e.g. --posting asset/bank '-50 EUR' (repeat for each account)",
)
@click.option("--notes", default="", help="Notes")
@click.option("--tag", "tags", multiple=True, help="Tag to attach (can be repeated)")
@click.pass_context
def add_transaction(
    ctx,
    name: str,
    date: str,
    postings: tuple[tuple[str, str], ...],
    notes: str,
    tags: tuple[str, ...],
):
    """Add a balanced transaction.

    Money entering asset accounts must equal money leaving them through
    flow accounts, per currency.

    Examples:
        ledgerit add --name "Groceries" --date 2024-01-15 \\
            --posting asset/bank "-50 EUR" --posting expense/food "-50 EUR"
        ledgerit add --name "Dinner" --date "2023-08-16 20:30" \\
            --posting asset/bank "-1200 SEK" --posting splitwise/alice "-1200 SEK"
    """
    ledger = ctx.obj["ledger"]
    service = TransactionService(ledger)

    try:
        txn_datetime = parse_datetime(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            name=name,
            datetime=txn_datetime,
            postings=postings,
            notes=notes,
            tags=tags,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_or_exit(ctx)
    click.echo(f"Created transaction {transaction_id}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
