"""Main CLI entry point."""

import click

from ledgerit.logging_config import setup_logging, teardown_logging
from ledgerit.storage import StorageError, create_store
from ledgerit.storage.factories import LEDGER_PATH_ENV

# Import and register all commands at module level
from ledgerit.cli.commands import (
    account,
    add,
    import_cmd,
    transaction,
)


@click.group()
@click.option(
    "--ledger-path",
    type=click.Path(),
    help=f"Path to the ledger file (overrides {LEDGER_PATH_ENV} environment variable)",
    envvar=LEDGER_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
@click.pass_context
def cli(ctx, ledger_path: str | None, verbose: bool):
    """Ledgerit - double-entry bookkeeping in exact multi-currency amounts.

    Keep accounts and balanced transactions in a single ledger file
    (JSON, or SQLite for .db/.sqlite paths).
    """
    ctx.ensure_object(dict)

    handler = setup_logging(verbose)
    ctx.call_on_close(lambda: teardown_logging(handler))

    # Load the ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_store(ledger_path)
        try:
            ctx.obj["ledger"] = store.load()
        except StorageError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        ctx.obj["store"] = store


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
