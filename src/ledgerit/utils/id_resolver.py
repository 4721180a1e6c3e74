"""Utility for resolving abbreviated transaction ids."""

from ledgerit.domain.entities import TransactionId
from ledgerit.domain.errors import UnknownTransaction, ValidationError
from ledgerit.domain.ledger import Ledger

MIN_PREFIX_LENGTH = 4


def resolve_transaction_id(ledger: Ledger, text: str) -> TransactionId:
    """Resolve a full transaction id or a unique prefix of one.

    Args:
        ledger: Ledger to search
        text: Full id or prefix of at least four characters

    Returns:
        Full transaction id

    Raises:
        UnknownTransaction: If no transaction matches
        ValidationError: If the prefix is too short or matches several ids
    """
    text = text.strip().lower()
    if ledger.has_transaction(text):
        return text

    if len(text) < MIN_PREFIX_LENGTH:
        raise ValidationError(
            f"Transaction id prefix '{text}' is too short (use at least {MIN_PREFIX_LENGTH} characters)"
        )

    matches = [txn_id for txn_id in ledger.transaction_ids() if txn_id.startswith(text)]
    if not matches:
        raise UnknownTransaction(text)
    if len(matches) > 1:
        raise ValidationError(f"Transaction id prefix '{text}' is ambiguous ({len(matches)} matches)")
    return matches[0]
