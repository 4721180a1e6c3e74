"""Shared pytest fixtures for ledgerit tests."""

from pathlib import Path
import pytest

from ledgerit.domain.account import AccountService
from ledgerit.domain.calendar import DateTime
from ledgerit.domain.entities import AccountType
from ledgerit.domain.ledger import Ledger
from ledgerit.domain.transaction import TransactionService


@pytest.fixture
def ledger():
    """Create an empty in-memory ledger."""
    return Ledger()


@pytest.fixture
def ledger_path(tmp_path):
    """Return the path of a not-yet-existing JSON ledger file."""
    return str(tmp_path / "ledger.json")


@pytest.fixture
def sqlite_path(tmp_path):
    """Return the path of a not-yet-existing SQLite ledger file."""
    return str(tmp_path / "ledger.db")


@pytest.fixture
def account_service(ledger):
    """Create an AccountService over the in-memory ledger."""
    return AccountService(ledger)


@pytest.fixture
def transaction_service(ledger):
    """Create a TransactionService over the in-memory ledger."""
    return TransactionService(ledger)


@pytest.fixture
def sample_accounts(account_service):
    """Create a small chart of accounts."""
    account_service.create_account("asset/bank")
    account_service.create_account("asset/cash")
    account_service.create_account("expense/food")
    account_service.create_account("income/salary")
    return ["asset/bank", "asset/cash", "expense/food", "income/salary"]


@pytest.fixture
def splitwise_ledger(ledger, account_service, transaction_service):
    """Ledger with money lent through a shared-expenses balance account."""
    account_service.create_account("bank/ICA_Bank", AccountType.ASSET)
    account_service.create_account("balance/splitwise", AccountType.ASSET)
    account_service.create_account("bank/BBVA", AccountType.ASSET)

    transaction_service.create_transaction(
        "cosas",
        DateTime.parse("2023-8-16"),
        [("bank/ICA_Bank", "2500 SEK"), ("balance/splitwise", "-2500 SEK")],
        notes="Nada",
    )
    transaction_service.create_transaction(
        "Devolucion",
        DateTime.parse("2023-8-23"),
        [("bank/ICA_Bank", "-1300 SEK"), ("balance/splitwise", "1300 SEK")],
        notes="Habia que",
    )
    transaction_service.create_transaction(
        "Otra",
        DateTime.parse("2023-9-03"),
        [("bank/BBVA", "-800 EUR"), ("balance/splitwise", "800 EUR")],
        notes="Habia que",
    )
    return ledger


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def store(ledger_path):
    """Create a JSON snapshot store at the temporary ledger path."""
    from ledgerit.storage.json_store import JsonSnapshotStore

    return JsonSnapshotStore(ledger_path)


@pytest.fixture
def saved_ledger_path(ledger, store, ledger_path, sample_accounts, transaction_service):
    """Save a ledger with sample accounts and two transactions, return its path."""
    transaction_service.create_transaction(
        "Groceries",
        DateTime.parse("2024-01-15 18:30"),
        [("asset/bank", "-50 EUR"), ("expense/food", "-50 EUR")],
        notes="weekly shop",
        tags=["food"],
    )
    transaction_service.create_transaction(
        "Salary",
        DateTime.parse("2024-01-25"),
        [("asset/bank", "3000 EUR"), ("income/salary", "3000 EUR")],
    )
    store.save(ledger)
    return ledger_path
