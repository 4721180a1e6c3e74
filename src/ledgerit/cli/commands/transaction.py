"""Transaction management commands."""

import click
from ledgerit.cli.date_filters import date_range_options, period_flags_from, resolve_cli_date_range
from ledgerit.cli.error_handling import handle_domain_error, save_or_exit
from ledgerit.domain.entities import Transaction
from ledgerit.domain.transaction import TransactionService
from ledgerit.utils.date_parser import parse_datetime
from ledgerit.utils.id_resolver import resolve_transaction_id

SHORT_ID_LENGTH = 10


def _resolve_id_or_exit(ctx: click.Context, text: str) -> str:
    """Resolve a full or abbreviated transaction id, exiting on failure."""
    try:
        return resolve_transaction_id(ctx.obj["ledger"], text)
    except ValueError as e:
        handle_domain_error(ctx, e)


def _echo_transaction(transaction_id: str, txn: Transaction) -> None:
    click.echo(f"\nTransaction ID: {transaction_id}")
    click.echo(f"  Name: {txn.name}")
    click.echo(f"  Date: {txn.datetime}")
    if txn.notes:
        click.echo(f"  Notes: {txn.notes}")
    if txn.tags:
        click.echo(f"  Tags: {', '.join(sorted(txn.tags))}")
    click.echo("  Postings:")
    for account_name in txn.account_names():
        click.echo(f"    {account_name:40s} {str(txn.amounts[account_name]):>30s}")


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@date_range_options
@click.option("--account", help="Only show transactions posting to this account")
@click.option("--verbose", "-v", is_flag=True, help="Show every posting, notes, tags and the full id")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    account: str | None,
    verbose: bool,
    **periods: bool,
):
    """View transactions with optional filters, newest first.

    Use --verbose to show every posting of each transaction.
    """
    ledger = ctx.obj["ledger"]
    service = TransactionService(ledger)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )

    try:
        transactions = service.list_transactions(start=start, end=end, account_name=account)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn_id, txn in transactions:
            _echo_transaction(txn_id, txn)
            click.echo("-" * 100)
        return

    click.echo("-" * 100)
    click.echo(f"{'ID':<12} {'Date':<17} {'Name':<30} {'Accounts':<40}")
    click.echo("-" * 100)
    for txn_id, txn in transactions:
        accounts = ", ".join(txn.account_names())
        if account is not None:
            accounts = f"{account}: {txn.amounts[account]}"
        click.echo(
            f"{txn_id[:SHORT_ID_LENGTH]:<12} {str(txn.datetime):<17} "
            f"{txn.name[:30]:<30} {accounts[:40]:<40}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", metavar="TRANSACTION_ID")
@click.pass_context
def show_transaction(ctx, transaction_id: str) -> None:
    """Show one transaction.

    TRANSACTION_ID can be the full id or a unique prefix of it.
    """
    full_id = _resolve_id_or_exit(ctx, transaction_id)
    txn = TransactionService(ctx.obj["ledger"]).get_transaction(full_id)
    _echo_transaction(full_id, txn)


@transaction_group.command("delete")
@click.argument("transaction_id", metavar="TRANSACTION_ID")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction.

    TRANSACTION_ID can be the full id or a unique prefix of it.

    Examples:
        ledgerit transaction delete 3f9a2c
    """
    ledger = ctx.obj["ledger"]
    service = TransactionService(ledger)

    full_id = _resolve_id_or_exit(ctx, transaction_id)
    txn = service.get_transaction(full_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction '{txn.name}' ({full_id[:SHORT_ID_LENGTH]})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(full_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_or_exit(ctx)
    click.echo(f"Deleted transaction {full_id}")


@transaction_group.command("check")
@click.option(
    "--posting",
    "postings",
    type=(str, str),
    multiple=True,
    required=True,
    metavar="ACCOUNT AMOUNT",
    help="Account and amount (repeat for each account)",
)
@click.pass_context
def check_transaction(ctx, postings: tuple[tuple[str, str], ...]) -> None:
    """Check whether postings balance without recording anything.

    Exits with status 1 if the postings leave a remainder.

    Examples:
        ledgerit transaction check --posting asset/bank "-50 EUR" --posting expense/food "-50 EUR"
    """
    service = TransactionService(ctx.obj["ledger"])

    try:
        balance = service.check_balance(postings)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if balance.is_zero():
        click.echo("Transaction is balanced.")
        return

    click.echo(f"Transaction is not balanced (remainder: {balance})")
    ctx.exit(1)


@transaction_group.command("update")
@click.argument("transaction_id", metavar="TRANSACTION_ID")
@click.option("--name", help="Transaction name")
@click.option("--date", help="Transaction date (YYYY-MM-DD [HH:MM] or relative like 'today')")
@click.option("--notes", help="Notes (empty string to clear)")
@click.option(
    "--posting",
    "postings",
    type=(str, str),
    multiple=True,
    metavar="ACCOUNT AMOUNT",
    help="Replace all postings (repeat for each account)",
)
@click.option("--tag", "tags", multiple=True, help="Replace all tags (can be repeated)")
@click.option("--clear-tags", is_flag=True, help="Remove all tags")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    name: str | None,
    date: str | None,
    notes: str | None,
    postings: tuple[tuple[str, str], ...],
    tags: tuple[str, ...],
    clear_tags: bool,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Since a transaction's id is
    derived from its content, the updated transaction gets a new id.

    Examples:
        ledgerit transaction update 3f9a2c --notes "Split with Alice"
        ledgerit transaction update 3f9a2c --posting asset/bank "-60 EUR" --posting expense/food "-60 EUR"
    """
    ledger = ctx.obj["ledger"]
    service = TransactionService(ledger)

    full_id = _resolve_id_or_exit(ctx, transaction_id)
    original = service.get_transaction(full_id)

    txn_datetime = original.datetime
    if date is not None:
        try:
            txn_datetime = parse_datetime(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    new_tags = original.tags
    if clear_tags:
        new_tags = frozenset()
    elif tags:
        new_tags = frozenset(tags)

    try:
        if postings:
            replacement = Transaction.from_strings(
                name if name is not None else original.name,
                notes if notes is not None else original.notes,
                txn_datetime,
                postings,
                new_tags,
            )
        else:
            replacement = Transaction(
                name=name if name is not None else original.name,
                notes=notes if notes is not None else original.notes,
                datetime=txn_datetime,
                amounts=original.amounts,
                tags=new_tags,
            )
        new_id = service.replace_transaction(full_id, replacement)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_or_exit(ctx)
    click.echo(f"Updated transaction {full_id[:SHORT_ID_LENGTH]} (new ID: {new_id})")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
