"""CSV import command."""

import click
from ledgerit.cli.error_handling import save_or_exit
from ledgerit.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_csv(ctx, csv_file: str):
    """Import transactions from an expense tracker CSV export.

    Missing accounts are created automatically. Rows that were already
    imported are skipped.
    """
    ledger = ctx.obj["ledger"]
    service = CSVImportService(ledger)

    try:
        result = service.import_csv(csv_file_path=csv_file)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    save_or_exit(ctx)
    click.echo(f"\nImport complete:")
    click.echo(f"  Imported: {result['imported']} transactions")
    click.echo(f"  Skipped: {result['skipped']} duplicates")
    if result["accounts_created"]:
        click.echo(f"  Accounts created: {len(result['accounts_created'])}")
        for account_name in result["accounts_created"]:
            click.echo(f"    {account_name}")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
