"""Conversion between a Ledger and its plain-data snapshot.

Only accounts (without their transaction index) and transactions are
stored. Numbers are kept as ``value``/``n_decimals`` pairs so amounts
round-trip exactly, and each transaction carries its id so a snapshot whose
content no longer matches its ids is rejected on load.
"""

import json
from typing import Any

from ledgerit.domain.calendar import DateTime
from ledgerit.domain.entities import Account, AccountType, Transaction
from ledgerit.domain.ledger import Ledger
from ledgerit.domain.money import Amount, Number
from ledgerit.storage.base import StorageError

SNAPSHOT_VERSION = 1


def amount_to_data(amount: Amount) -> dict[str, dict[str, int]]:
    return {
        currency: {"value": number.value, "n_decimals": number.n_decimals}
        for currency, number in amount.items()
    }


def amount_from_data(data: dict[str, dict[str, int]]) -> Amount:
    return Amount(
        {
            currency: Number(int(number["value"]), int(number["n_decimals"]))
            for currency, number in data.items()
        }
    )


def ledger_to_data(ledger: Ledger) -> dict[str, Any]:
    """Build the snapshot dict for ``ledger``, sorted for stable output."""
    accounts = sorted(ledger.accounts(), key=lambda acc: acc.name)
    transactions = sorted(ledger.transactions(), key=lambda entry: (entry[1].datetime, entry[0]))
    return {
        "version": SNAPSHOT_VERSION,
        "accounts": [
            {
                "name": acc.name,
                "account_type": acc.account_type.value,
                "tags": sorted(acc.tags),
            }
            for acc in accounts
        ],
        "transactions": [
            {
                "id": txn_id,
                "name": txn.name,
                "notes": txn.notes,
                "tags": sorted(txn.tags),
                "datetime": str(txn.datetime),
                "amounts": {
                    account_name: amount_to_data(txn.amounts[account_name])
                    for account_name in txn.account_names()
                },
            }
            for txn_id, txn in transactions
        ],
    }


def ledger_from_data(data: dict[str, Any]) -> Ledger:
    """Rebuild a ledger from a snapshot dict.

    Raises:
        StorageError: If the snapshot is malformed or inconsistent
    """
    try:
        if data.get("version") != SNAPSHOT_VERSION:
            raise StorageError(f"Unsupported snapshot version: {data.get('version')!r}")

        accounts = [
            Account(
                name=item["name"],
                account_type=AccountType(item["account_type"]),
                tags=frozenset(item.get("tags", [])),
            )
            for item in data["accounts"]
        ]

        transactions = []
        for item in data["transactions"]:
            transaction = Transaction(
                name=item["name"],
                notes=item["notes"],
                datetime=DateTime.parse(item["datetime"]),
                amounts={
                    account_name: amount_from_data(amount)
                    for account_name, amount in item["amounts"].items()
                },
                tags=frozenset(item.get("tags", [])),
            )
            stored_id = item.get("id")
            if stored_id is not None and stored_id != transaction.generate_id():
                raise StorageError(
                    f"Transaction '{transaction.name}' does not match its stored id {stored_id}"
                )
            transactions.append(transaction)

        return Ledger.from_snapshot(accounts, transactions)
    except (KeyError, TypeError, AttributeError, OverflowError, ValueError) as e:
        raise StorageError(f"Malformed ledger snapshot: {e}") from e


def serialize(ledger: Ledger) -> bytes:
    """Serialize a ledger to UTF-8 JSON bytes."""
    return json.dumps(ledger_to_data(ledger), indent=2, ensure_ascii=False).encode("utf-8")


def deserialize(blob: bytes) -> Ledger:
    """Deserialize a ledger produced by :func:`serialize`.

    Raises:
        StorageError: If the blob is not a valid snapshot
    """
    try:
        data = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StorageError(f"Malformed ledger snapshot: {e}") from e
    if not isinstance(data, dict):
        raise StorageError("Malformed ledger snapshot: expected a JSON object")
    return ledger_from_data(data)
