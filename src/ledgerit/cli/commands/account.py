"""Account management commands."""

import click
from ledgerit.cli.date_filters import date_range_options, period_flags_from, resolve_cli_date_range
from ledgerit.cli.error_handling import handle_domain_error, save_or_exit
from ledgerit.domain.account import AccountService
from ledgerit.domain.entities import AccountType

ACCOUNT_TYPE_CHOICE = click.Choice([t.value for t in AccountType], case_sensitive=False)


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=ACCOUNT_TYPE_CHOICE,
    help="Account type (defaults to 'asset' for asset/... names, 'flow' otherwise)",
)
@click.option("--tag", "tags", multiple=True, help="Tag to attach (can be repeated)")
@click.pass_context
def create_account(ctx, name: str, account_type: str | None, tags: tuple[str, ...]):
    """Create a new account.

    Account names are slash-separated paths. Names under "asset/" hold
    money; everything else (expenses, income, debts to people) is a flow.

    Examples:
        ledgerit account create asset/bank/checking
        ledgerit account create expense/food/groceries
        ledgerit account create splitwise/alice --type asset --tag shared
    """
    ledger = ctx.obj["ledger"]
    service = AccountService(ledger)

    resolved_type = AccountType(account_type.lower()) if account_type else None

    try:
        account = service.create_account(name=name, account_type=resolved_type, tags=tags)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_or_exit(ctx)
    click.echo(f"Created account '{account.name}' ({account.account_type.value})")


@account_group.command("list")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, help="Only show accounts of this type")
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List all accounts."""
    ledger = ctx.obj["ledger"]
    service = AccountService(ledger)

    resolved_type = AccountType(account_type.lower()) if account_type else None
    accounts = service.list_accounts(resolved_type)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        tags = ", ".join(sorted(acc.tags))
        line = f"{acc.name:40s} | {acc.account_type.value:5s} | {len(acc.transaction_ids):4d} txn"
        if tags:
            line += f" | Tags: {tags}"
        click.echo(line)


@account_group.command("delete")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, name: str, yes: bool) -> None:
    """Delete an account.

    The account can only be deleted if no transactions post to it. Use
    'transaction delete' to remove them first.

    Examples:
        ledgerit account delete expense/unused
    """
    ledger = ctx.obj["ledger"]
    service = AccountService(ledger)

    account_obj = service.get_account(name)
    if account_obj is None:
        click.echo(f"Error: Account '{name}' not found", err=True)
        ctx.exit(1)

    if account_obj.has_transactions():
        count = len(account_obj.transaction_ids)
        click.echo(
            f"Error: Cannot delete account '{name}': it has "
            f"{count} transaction{'s' if count != 1 else ''}.",
            err=True,
        )
        click.echo("Please delete them first.", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete account '{name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(name)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_or_exit(ctx)
    click.echo(f"Deleted account '{name}'")


@account_group.command("balance")
@click.argument("name", metavar="ACCOUNT_NAME")
@date_range_options
@click.pass_context
def account_balance(
    ctx,
    name: str,
    start_date: str | None,
    end_date: str | None,
    **periods: bool,
) -> None:
    """Show the balance of one account.

    Both date bounds are inclusive. An end date without a time of day
    includes the whole day.

    Examples:
        ledgerit account balance asset/bank/checking
        ledgerit account balance splitwise/alice --end-date 2023-08-31
        ledgerit account balance expense/food --last-month
    """
    ledger = ctx.obj["ledger"]
    service = AccountService(ledger)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )

    try:
        balance = service.get_balance(name, start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"{name}: {balance}")


@account_group.command("balances")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, help="Only show accounts of this type")
@date_range_options
@click.option("--hide-zero", is_flag=True, help="Skip accounts whose balance is zero")
@click.pass_context
def account_balances(
    ctx,
    account_type: str | None,
    start_date: str | None,
    end_date: str | None,
    hide_zero: bool,
    **periods: bool,
) -> None:
    """Show balances for all accounts."""
    ledger = ctx.obj["ledger"]
    service = AccountService(ledger)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )

    resolved_type = AccountType(account_type.lower()) if account_type else None
    balances = service.get_balances(resolved_type, start, end)
    if hide_zero:
        balances = [(acc, balance) for acc, balance in balances if not balance.is_zero()]

    if not balances:
        click.echo("No accounts found.")
        return

    click.echo("\nBalances:")
    click.echo("-" * 80)
    for acc, balance in balances:
        click.echo(f"{acc.name:40s} {str(balance):>38s}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
