"""Domain layer for ledgerit application."""

from ledgerit.domain.ledger import Ledger
from ledgerit.domain.account import AccountService
from ledgerit.domain.transaction import TransactionService
from ledgerit.domain.csv_import import CSVImportService

__all__ = [
    "Ledger",
    "AccountService",
    "TransactionService",
    "CSVImportService",
]
