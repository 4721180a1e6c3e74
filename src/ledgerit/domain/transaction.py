"""Transaction domain service."""

import logging
from typing import Iterable, Optional

from ledgerit.domain.calendar import DateTime
from ledgerit.domain.entities import AccountName, Tag, Transaction, TransactionId
from ledgerit.domain.ledger import Ledger
from ledgerit.domain.money import Amount

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, ledger: Ledger):
        """Initialize transaction service.

        Args:
            ledger: Ledger instance
        """
        self.ledger = ledger

    def create_transaction(
        self,
        name: str,
        datetime: DateTime,
        postings: Iterable[tuple[AccountName, str]],
        notes: str = "",
        tags: Iterable[Tag] = (),
    ) -> TransactionId:
        """Create a transaction.

        Args:
            name: Transaction name
            datetime: When the transaction happened
            postings: (account name, amount literal) pairs, e.g.
                [("asset/bank", "-50 EUR"), ("expense/food", "-50 EUR")]
            notes: Optional notes
            tags: Optional tags

        Returns:
            Transaction ID

        Raises:
            ParseError: If an amount literal is malformed
            TransactionIdInUse: If an identical transaction already exists
            UnknownAccount: If a posting references a missing account
            UnbalancedTransaction: If the postings do not balance
        """
        transaction = Transaction.from_strings(name, notes, datetime, postings, tags)
        return self.ledger.add_transaction(transaction)

    def check_balance(
        self, postings: Iterable[tuple[AccountName, str]], datetime: Optional[DateTime] = None
    ) -> Amount:
        """Compute the signed balance of postings without storing anything.

        Args:
            postings: (account name, amount literal) pairs
            datetime: Optional date; only needed to build the transaction

        Returns:
            The remainder; zero means the postings balance

        Raises:
            ParseError: If an amount literal is malformed
            UnknownAccount: If a posting references a missing account
        """
        transaction = Transaction.from_strings(
            "", "", datetime or DateTime.of(1970, 1, 1), postings
        )
        return self.ledger.get_transaction_balance(transaction)

    def get_transaction(self, transaction_id: TransactionId) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction or None if not found
        """
        if not self.ledger.has_transaction(transaction_id):
            return None
        return self.ledger.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: TransactionId) -> Transaction:
        """Delete a transaction.

        Args:
            transaction_id: Transaction ID to delete

        Returns:
            The removed transaction

        Raises:
            UnknownTransaction: If transaction doesn't exist
        """
        return self.ledger.remove_transaction(transaction_id)

    def replace_transaction(
        self, transaction_id: TransactionId, replacement: Transaction
    ) -> TransactionId:
        """Replace a stored transaction with a new version.

        Stored transactions are immutable, so this removes the old one and
        adds the replacement, which gets a new id. If the replacement is
        rejected the original is put back and the error re-raised.

        Args:
            transaction_id: ID of the transaction to replace
            replacement: New transaction content

        Returns:
            ID of the replacement

        Raises:
            UnknownTransaction: If transaction doesn't exist
            UnknownAccount, UnbalancedTransaction, TransactionIdInUse:
                If the replacement is rejected
        """
        original = self.ledger.remove_transaction(transaction_id)
        replaced = False
        try:
            new_id = self.ledger.add_transaction(replacement)
            replaced = True
        finally:
            if not replaced:
                self.ledger.add_transaction(original)
        logger.info("Replaced transaction %s with %s", transaction_id, new_id)
        return new_id

    def list_transactions(
        self,
        start: Optional[DateTime] = None,
        end: Optional[DateTime] = None,
        account_name: Optional[AccountName] = None,
    ) -> list[tuple[TransactionId, Transaction]]:
        """List transactions newest first.

        Args:
            start: Optional inclusive lower bound
            end: Optional inclusive upper bound
            account_name: Optional account filter

        Returns:
            List of (id, transaction) pairs

        Raises:
            UnknownAccount: If account_name is given and does not exist
        """
        if account_name is not None:
            account = self.ledger.get_account(account_name)
            entries = [
                (txn_id, self.ledger.get_transaction(txn_id))
                for txn_id in account.transaction_ids
            ]
        else:
            entries = self.ledger.transactions()

        result = [
            (txn_id, txn)
            for txn_id, txn in entries
            if (start is None or txn.datetime >= start) and (end is None or txn.datetime <= end)
        ]
        result.sort(key=lambda entry: (entry[1].datetime, entry[0]), reverse=True)
        return result
