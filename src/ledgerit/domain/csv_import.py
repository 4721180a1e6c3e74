"""CSV import domain service.

Reads the transaction export of a mobile expense tracker. Each row after the
header holds, in order: type, date, time, title, amount, currency, exchange
rate, category group, category, account, notes, labels and status. Rows are
mapped onto ledger transactions as follows:

- expenses post the amount to ``asset/<account>`` and to
  ``expense/<group>/<category>``;
- income posts the amount to ``asset/<account>`` and to
  ``income/<group>/<category>``;
- anything else is a transfer, posting the amount to ``asset/<account>``
  and its negation to ``asset/transfer``.
"""

import csv
import logging
from pathlib import Path
from typing import Any

from ledgerit.domain.calendar import DateTime
from ledgerit.domain.entities import Account, AccountType, Transaction
from ledgerit.domain.errors import TransactionIdInUse, ValidationError
from ledgerit.domain.ledger import Ledger
from ledgerit.domain.money import Amount

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = (
    "type",
    "date",
    "time",
    "title",
    "amount",
    "currency",
    "exchange_rate",
    "category_group",
    "category",
    "account",
    "notes",
    "labels",
    "status",
)

EXPENSE_TYPES = {"gastos", "expense", "expenses"}
INCOME_TYPES = {"ingresos", "income"}
TRANSFER_ACCOUNT = "asset/transfer"


def parse_export_datetime(text: str) -> DateTime:
    """Parse the export's ``YYYY-MM-DD HH:MM[:SS]`` timestamp, dropping seconds."""
    text = text.strip()
    if text.count(":") == 2:
        text = text.rsplit(":", 1)[0]
    return DateTime.parse(text)


def row_to_transaction(row: dict[str, str]) -> Transaction:
    """Convert one export row into a balanced transaction.

    Raises:
        ParseError: If the date or amount cannot be parsed
        ValidationError: If the row lacks an account
    """
    if not row["account"].strip():
        raise ValidationError("Row has no account")
    amount = Amount.parse(f"{row['amount'].strip()} {row['currency'].strip()}")
    asset_account = f"asset/{row['account'].strip()}"
    kind = row["type"].strip().lower()

    if kind in EXPENSE_TYPES or kind in INCOME_TYPES:
        namespace = "expense" if kind in EXPENSE_TYPES else "income"
        category_account = f"{namespace}/{row['category_group'].strip()}/{row['category'].strip()}"
        postings = [(asset_account, amount), (category_account, amount)]
    else:
        postings = [(asset_account, amount), (TRANSFER_ACCOUNT, -amount)]

    return Transaction.from_amounts(
        name=row["title"].strip(),
        notes=row["notes"].strip(),
        datetime=parse_export_datetime(row["date"]),
        amounts=postings,
    )


class CSVImportService:
    """Service for importing CSV files."""

    def __init__(self, ledger: Ledger):
        """Initialize CSV import service.

        Args:
            ledger: Ledger instance
        """
        self.ledger = ledger

    def read_transactions(self, csv_file_path: str) -> tuple[list[Transaction], list[str]]:
        """Parse an export file without touching the ledger.

        Args:
            csv_file_path: Path to CSV file

        Returns:
            Tuple of (parsed transactions, error messages for skipped rows)

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValueError: If the file has no header row
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        transactions = []
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.reader(f, delimiter=delimiter)
            if next(reader, None) is None:
                raise ValueError("CSV file has no header row")

            # Start at 2 (header is row 1)
            for row_num, fields in enumerate(reader, start=2):
                if not any(field.strip() for field in fields):
                    continue
                if len(fields) < len(EXPORT_COLUMNS):
                    errors.append(
                        f"Row {row_num}: expected {len(EXPORT_COLUMNS)} columns, got {len(fields)}"
                    )
                    continue
                row = dict(zip(EXPORT_COLUMNS, fields))
                try:
                    transactions.append(row_to_transaction(row))
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")

        return transactions, errors

    def import_csv(self, csv_file_path: str) -> dict[str, Any]:
        """Import transactions from a CSV file.

        Accounts referenced by the file that do not exist yet are created
        first: names under "asset/" as ASSET accounts, the rest as FLOW.

        Args:
            csv_file_path: Path to CSV file

        Returns:
            Dict with import statistics:
            - imported: number of transactions imported
            - skipped: number of transactions skipped (duplicates)
            - accounts_created: names of accounts created by the import
            - errors: list of error messages

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValueError: If the file has no header row
        """
        transactions, errors = self.read_transactions(csv_file_path)

        account_names = sorted(
            {name for transaction in transactions for name in transaction.amounts}
        )
        accounts_created = []
        for account_name in account_names:
            if self.ledger.has_account(account_name):
                continue
            self.ledger.add_account(Account(account_name, AccountType.for_name(account_name)))
            accounts_created.append(account_name)

        imported = 0
        skipped = 0
        for index, transaction in enumerate(transactions, start=1):
            try:
                self.ledger.add_transaction(transaction)
                imported += 1
            except TransactionIdInUse:
                skipped += 1
            except ValueError as e:
                logger.warning("Rejected imported transaction '%s': %s", transaction.name, e)
                errors.append(f"Transaction {index} ('{transaction.name}'): {e}")

        logger.info(
            "Imported %d transaction(s) from %s (%d skipped, %d error(s))",
            imported,
            csv_file_path,
            skipped,
            len(errors),
        )
        return {
            "imported": imported,
            "skipped": skipped,
            "accounts_created": accounts_created,
            "errors": errors,
        }
