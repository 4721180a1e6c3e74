"""Tests for the import command."""

from ledgerit.cli.main import cli
from ledgerit.domain.money import Amount


def test_import_successful(cli_runner, ledger_path, fixtures_dir, store):
    """Test importing an export into an empty ledger."""
    result = cli_runner.invoke(
        cli, ["--ledger-path", ledger_path, "import", str(fixtures_dir / "expense_export.csv")]
    )

    assert result.exit_code == 0
    assert "Import complete" in result.output
    assert "Imported: 4 transactions" in result.output
    assert "Accounts created: 6" in result.output
    assert "expense/Food/Groceries" in result.output

    ledger = store.load()
    assert len(ledger.transactions()) == 4
    assert ledger.get_account_balance("asset/ICA_Bank") == Amount.parse("19868 SEK")


def test_import_duplicate_detection(cli_runner, ledger_path, fixtures_dir, store):
    """Test importing the same file twice skips every row the second time."""
    args = ["--ledger-path", ledger_path, "import", str(fixtures_dir / "expense_export.csv")]
    assert cli_runner.invoke(cli, args).exit_code == 0

    result = cli_runner.invoke(cli, args)

    assert result.exit_code == 0
    assert "Imported: 0 transactions" in result.output
    assert "Skipped: 4 duplicates" in result.output
    assert len(store.load().transactions()) == 4


def test_import_reports_row_errors(cli_runner, ledger_path, tmp_path):
    csv_file = tmp_path / "export.csv"
    csv_file.write_text(
        '"Type","Date","Time","Title","Amount","Currency","Rate","Group","Category","Account","Notes","Labels","Status"\n'
        '"Gastos","2023-08-16 14:54:00","14:54","Coffee","-3","EUR","1","Food","Cafe","","","",""\n',
        encoding="utf-8",
    )

    result = cli_runner.invoke(cli, ["--ledger-path", ledger_path, "import", str(csv_file)])

    assert result.exit_code == 0
    assert "Errors: 1" in result.output
    assert "Row 2: Row has no account" in result.output


def test_import_invalid_file(cli_runner, ledger_path):
    """Test importing a file that does not exist."""
    result = cli_runner.invoke(cli, ["--ledger-path", ledger_path, "import", "nonexistent.csv"])

    assert result.exit_code != 0
