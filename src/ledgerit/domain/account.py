"""Account domain service."""

from typing import Iterable, Optional

from ledgerit.domain.calendar import DateTime
from ledgerit.domain.entities import Account, AccountType, Tag
from ledgerit.domain.ledger import Ledger
from ledgerit.domain.money import Amount


class AccountService:
    """Service for managing accounts."""

    def __init__(self, ledger: Ledger):
        """Initialize account service.

        Args:
            ledger: Ledger instance
        """
        self.ledger = ledger

    def create_account(
        self,
        name: str,
        account_type: Optional[AccountType] = None,
        tags: Iterable[Tag] = (),
    ) -> Account:
        """Create a new account.

        Args:
            name: Account name (e.g. "asset/bank/checking")
            account_type: Account type; if None it is derived from the name
                ("asset/..." accounts are ASSET, everything else FLOW)
            tags: Optional tags

        Returns:
            The new account

        Raises:
            AccountNameInUse: If account name already exists
            ValidationError: If the name is empty
        """
        if account_type is None:
            account_type = AccountType.for_name(name)
        account = Account(name=name, account_type=account_type, tags=frozenset(tags))
        self.ledger.add_account(account)
        return account

    def get_account(self, name: str) -> Optional[Account]:
        """Get account by name.

        Args:
            name: Account name

        Returns:
            Account or None if not found
        """
        if not self.ledger.has_account(name):
            return None
        return self.ledger.get_account(name)

    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[Account]:
        """List accounts sorted by name.

        Args:
            account_type: Optional filter by account type

        Returns:
            List of accounts
        """
        accounts = self.ledger.accounts()
        if account_type is not None:
            accounts = [acc for acc in accounts if acc.account_type is account_type]
        return sorted(accounts, key=lambda acc: acc.name)

    def delete_account(self, name: str) -> None:
        """Delete an account.

        Args:
            name: Account name

        Raises:
            UnknownAccount: If account not found
            AccountHasTransactions: If transactions still reference the account
        """
        self.ledger.remove_account(name)

    def get_balance(
        self,
        name: str,
        start: Optional[DateTime] = None,
        end: Optional[DateTime] = None,
    ) -> Amount:
        """Get the balance of one account.

        Args:
            name: Account name
            start: Optional inclusive lower bound
            end: Optional inclusive upper bound

        Raises:
            UnknownAccount: If account not found
        """
        return self.ledger.get_account_balance(name, start, end)

    def get_balances(
        self,
        account_type: Optional[AccountType] = None,
        start: Optional[DateTime] = None,
        end: Optional[DateTime] = None,
    ) -> list[tuple[Account, Amount]]:
        """Get balances for every account, sorted by account name.

        Args:
            account_type: Optional filter by account type
            start: Optional inclusive lower bound
            end: Optional inclusive upper bound
        """
        return [
            (acc, self.ledger.get_account_balance(acc.name, start, end))
            for acc in self.list_accounts(account_type)
        ]
