"""Domain model entities for ledgerit.

Accounts and transactions are plain data classes. The only mutable state is
the account's transaction-id index, which the Ledger owns and keeps in step
with its transaction table; it is never persisted.
"""

import hashlib
import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from ledgerit.domain.calendar import DateTime
from ledgerit.domain.errors import (
    AccountNotAssociatedWithTransaction,
    UnknownAccount,
    ValidationError,
)
from ledgerit.domain.money import Amount

AccountName = str
TransactionId = str
Tag = str

ASSET_NAMESPACE = "asset"


class AccountType(str, Enum):
    """How an account's postings count towards a transaction's balance."""

    ASSET = "asset"
    FLOW = "flow"

    @classmethod
    def for_name(cls, account_name: AccountName) -> "AccountType":
        """Classify by naming convention: ``asset/...`` is ASSET, anything else FLOW."""
        namespace = account_name.split("/", 1)[0]
        return cls.ASSET if namespace == ASSET_NAMESPACE else cls.FLOW


def _validate_account_name(name: AccountName) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Account name must be a non-empty string")
    if name != name.strip():
        raise ValidationError(f"Account name '{name}' has surrounding whitespace")


@dataclass
class Account:
    """Ledger account."""

    name: AccountName
    account_type: AccountType
    tags: frozenset[Tag] = frozenset()
    _transaction_ids: set[TransactionId] = field(
        default_factory=set, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        _validate_account_name(self.name)
        self.account_type = AccountType(self.account_type)
        self.tags = frozenset(self.tags)

    @property
    def transaction_ids(self) -> frozenset[TransactionId]:
        return frozenset(self._transaction_ids)

    def has_transactions(self) -> bool:
        return bool(self._transaction_ids)

    def has_transaction(self, transaction_id: TransactionId) -> bool:
        return transaction_id in self._transaction_ids

    def add_transaction(self, transaction_id: TransactionId) -> None:
        self._transaction_ids.add(transaction_id)

    def remove_transaction(self, transaction_id: TransactionId) -> None:
        """Drop ``transaction_id`` from the index.

        Raises:
            AccountNotAssociatedWithTransaction: If the id was not indexed
        """
        if transaction_id not in self._transaction_ids:
            raise AccountNotAssociatedWithTransaction(self.name, transaction_id)
        self._transaction_ids.remove(transaction_id)

    def clear_transactions(self) -> None:
        self._transaction_ids.clear()


@dataclass(frozen=True)
class Transaction:
    """Economic event moving amounts between accounts.

    ``amounts`` maps each affected account to the Amount posted to it.
    Transactions are immutable; their id is derived from their content.
    """

    name: str
    notes: str
    datetime: DateTime
    amounts: Mapping[AccountName, Amount]
    tags: frozenset[Tag] = frozenset()

    def __post_init__(self):
        if not isinstance(self.datetime, DateTime):
            raise ValidationError("Transaction datetime must be a DateTime")
        if not self.amounts:
            raise ValidationError("Transaction must post to at least one account")
        for account_name, amount in self.amounts.items():
            _validate_account_name(account_name)
            if not isinstance(amount, Amount):
                raise ValidationError(f"Amount for account '{account_name}' must be an Amount")
        object.__setattr__(self, "amounts", MappingProxyType(dict(self.amounts)))
        object.__setattr__(self, "tags", frozenset(self.tags))

    @classmethod
    def from_amounts(
        cls,
        name: str,
        notes: str,
        datetime: DateTime,
        amounts: Iterable[tuple[AccountName, Amount]],
        tags: Iterable[Tag] = (),
    ) -> "Transaction":
        """Build a transaction from ``(account name, Amount)`` pairs.

        Raises:
            ValidationError: If an account appears more than once
        """
        amounts_map: dict[AccountName, Amount] = {}
        for account_name, amount in amounts:
            if account_name in amounts_map:
                raise ValidationError(f"Account '{account_name}' appears twice in transaction")
            amounts_map[account_name] = amount
        return cls(name=name, notes=notes, datetime=datetime, amounts=amounts_map, tags=frozenset(tags))

    @classmethod
    def from_strings(
        cls,
        name: str,
        notes: str,
        datetime: DateTime,
        amounts: Iterable[tuple[AccountName, str]],
        tags: Iterable[Tag] = (),
    ) -> "Transaction":
        """Build a transaction from ``(account name, amount literal)`` pairs.

        Example:
            Transaction.from_strings(
                "Groceries", "", DateTime.parse("2023-07-13 14:54"),
                [("asset/bank", "-132 SEK"), ("expense/food", "-132 SEK")],
            )

        Raises:
            ParseError: If an amount literal is malformed
            ValidationError: If an account appears more than once
        """
        parsed = [(account_name, Amount.parse(text)) for account_name, text in amounts]
        return cls.from_amounts(name, notes, datetime, parsed, tags)

    def account_names(self) -> list[AccountName]:
        return sorted(self.amounts)

    def get_amount(self, account_name: AccountName) -> Amount:
        try:
            return self.amounts[account_name]
        except KeyError:
            raise UnknownAccount(account_name) from None

    def identity_payload(self) -> dict:
        """Canonical content used to derive the transaction id."""
        return {
            "name": self.name,
            "notes": self.notes,
            "tags": sorted(self.tags),
            "datetime": str(self.datetime),
            "amounts": [
                [
                    account_name,
                    [
                        [currency, number.value, number.n_decimals]
                        for currency, number in self.amounts[account_name].items()
                    ],
                ]
                for account_name in self.account_names()
            ],
        }

    def generate_id(self) -> TransactionId:
        """Return the SHA-256 hex digest of this transaction's content."""
        payload = json.dumps(
            self.identity_payload(), sort_keys=True, separators=(",", ":"), ensure_ascii=False
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def __hash__(self) -> int:
        return hash(self.generate_id())
