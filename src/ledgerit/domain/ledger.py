"""In-memory double-entry ledger.

The Ledger owns two tables, accounts by name and transactions by id, and is
the only place where they are kept consistent with each other. Every
mutation validates fully before touching either table, so a rejected call
leaves the ledger exactly as it was.

The ledger does no locking; callers sharing one instance between threads
must serialise access to the whole object.
"""

import logging
from typing import Iterator, Optional

from ledgerit.domain.calendar import DateTime
from ledgerit.domain.entities import (
    Account,
    AccountName,
    AccountType,
    Transaction,
    TransactionId,
)
from ledgerit.domain.errors import (
    AccountHasTransactions,
    AccountNameInUse,
    AccountNotAssociatedWithTransaction,
    TransactionIdInUse,
    UnbalancedTransaction,
    UnknownAccount,
    UnknownTransaction,
)
from ledgerit.domain.money import Amount

logger = logging.getLogger(__name__)


class Ledger:
    """Accounts plus the balanced transactions moving money between them."""

    def __init__(self):
        self._accounts: dict[AccountName, Account] = {}
        self._transactions: dict[TransactionId, Transaction] = {}

    @classmethod
    def from_snapshot(
        cls, accounts: list[Account], transactions: list[Transaction]
    ) -> "Ledger":
        """Rebuild a ledger from persisted accounts and transactions.

        Transactions are taken as stored (they were validated when first
        added); only referential integrity is re-checked while the account
        indices are rebuilt.

        Raises:
            AccountNameInUse: If two accounts share a name
            TransactionIdInUse: If two transactions have the same content
            UnknownAccount: If a transaction references a missing account
        """
        ledger = cls()
        for account in accounts:
            if account.name in ledger._accounts:
                raise AccountNameInUse(account.name)
            ledger._accounts[account.name] = account
        for transaction in transactions:
            transaction_id = transaction.generate_id()
            if transaction_id in ledger._transactions:
                raise TransactionIdInUse(transaction_id)
            ledger._transactions[transaction_id] = transaction
        ledger.rebuild_indices()
        return ledger

    # Account operations
    def add_account(self, account: Account) -> None:
        """Add a new account with an empty transaction index.

        Raises:
            AccountNameInUse: If an account with the same name exists
        """
        if account.name in self._accounts:
            raise AccountNameInUse(account.name)
        account.clear_transactions()
        self._accounts[account.name] = account
        logger.debug("Added %s account '%s'", account.account_type.value, account.name)

    def remove_account(self, account_name: AccountName) -> None:
        """Remove an account that no transaction references.

        Raises:
            UnknownAccount: If the account does not exist
            AccountHasTransactions: If transactions still reference it
        """
        account = self.get_account(account_name)
        if account.has_transactions():
            raise AccountHasTransactions(account_name, len(account.transaction_ids))
        del self._accounts[account_name]
        logger.debug("Removed account '%s'", account_name)

    def get_account(self, account_name: AccountName) -> Account:
        """Get account by name.

        Raises:
            UnknownAccount: If the account does not exist
        """
        account = self._accounts.get(account_name)
        if account is None:
            raise UnknownAccount(account_name)
        return account

    def has_account(self, account_name: AccountName) -> bool:
        return account_name in self._accounts

    def account_names(self) -> Iterator[AccountName]:
        return iter(list(self._accounts))

    def accounts(self) -> list[Account]:
        return list(self._accounts.values())

    # Transaction operations
    def add_transaction(self, transaction: Transaction) -> TransactionId:
        """Validate and store a transaction.

        Returns:
            The id derived from the transaction's content

        Raises:
            TransactionIdInUse: If an identical transaction is already stored
            UnknownAccount: If a referenced account does not exist
            UnbalancedTransaction: If the signed postings do not cancel out
        """
        transaction_id = transaction.generate_id()
        if transaction_id in self._transactions:
            raise TransactionIdInUse(transaction_id)

        # raises UnknownAccount before anything is written
        balance = self.get_transaction_balance(transaction)
        if not balance.is_zero():
            raise UnbalancedTransaction(balance)

        self._transactions[transaction_id] = transaction
        for account_name in transaction.amounts:
            self._accounts[account_name].add_transaction(transaction_id)
        logger.debug(
            "Added transaction %s '%s' touching %d account(s)",
            transaction_id,
            transaction.name,
            len(transaction.amounts),
        )
        return transaction_id

    def remove_transaction(self, transaction_id: TransactionId) -> Transaction:
        """Remove a stored transaction and return it.

        Raises:
            UnknownTransaction: If no transaction has this id
            AccountNotAssociatedWithTransaction: If an account index has lost
                track of the transaction; nothing is removed in that case
        """
        transaction = self.get_transaction(transaction_id)
        accounts = [self._accounts.get(name) for name in transaction.amounts]
        for account_name, account in zip(transaction.amounts, accounts):
            if account is None or not account.has_transaction(transaction_id):
                raise AccountNotAssociatedWithTransaction(account_name, transaction_id)

        for account in accounts:
            account.remove_transaction(transaction_id)
        del self._transactions[transaction_id]
        logger.debug("Removed transaction %s", transaction_id)
        return transaction

    def get_transaction(self, transaction_id: TransactionId) -> Transaction:
        """Get transaction by id.

        Raises:
            UnknownTransaction: If no transaction has this id
        """
        transaction = self._transactions.get(transaction_id)
        if transaction is None:
            raise UnknownTransaction(transaction_id)
        return transaction

    def has_transaction(self, transaction_id: TransactionId) -> bool:
        return transaction_id in self._transactions

    def transaction_ids(self) -> Iterator[TransactionId]:
        return iter(list(self._transactions))

    def transactions(self) -> list[tuple[TransactionId, Transaction]]:
        return list(self._transactions.items())

    # Queries
    def get_transaction_balance(self, transaction: Transaction) -> Amount:
        """Signed sum of a transaction's postings.

        Asset postings are added and Flow postings subtracted; a transaction
        may only be stored when this is zero.

        Raises:
            UnknownAccount: If a referenced account does not exist
        """
        total = Amount()
        for account_name, amount in transaction.amounts.items():
            account = self.get_account(account_name)
            if account.account_type is AccountType.ASSET:
                total = total + amount
            else:
                total = total - amount
        return total

    def get_account_balance(
        self,
        account_name: AccountName,
        start: Optional[DateTime] = None,
        end: Optional[DateTime] = None,
    ) -> Amount:
        """Sum of the amounts posted to an account within ``[start, end]``.

        Either bound may be None for an open interval.

        Raises:
            UnknownAccount: If the account does not exist
        """
        account = self.get_account(account_name)
        total = Amount()
        for transaction_id in account.transaction_ids:
            transaction = self._transactions[transaction_id]
            if start is not None and transaction.datetime < start:
                continue
            if end is not None and transaction.datetime > end:
                continue
            total = total + transaction.amounts[account_name]
        return total

    def rebuild_indices(self) -> None:
        """Recompute every account's transaction index from the table.

        Called after loading a snapshot, since indices are not persisted.

        Raises:
            UnknownAccount: If a stored transaction references a missing account
        """
        for transaction in self._transactions.values():
            for account_name in transaction.amounts:
                if account_name not in self._accounts:
                    raise UnknownAccount(account_name)

        for account in self._accounts.values():
            account.clear_transactions()
        for transaction_id, transaction in self._transactions.items():
            for account_name in transaction.amounts:
                self._accounts[account_name].add_transaction(transaction_id)
        logger.debug(
            "Rebuilt indices for %d account(s) from %d transaction(s)",
            len(self._accounts),
            len(self._transactions),
        )
