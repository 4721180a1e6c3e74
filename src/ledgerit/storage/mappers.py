"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from ledgerit.domain import entities as domain
from ledgerit.domain.calendar import Date, DateTime, Time
from ledgerit.domain.money import Amount, Number
from ledgerit.storage.models import (
    Account as ORMAccount,
    AccountTag as ORMAccountTag,
    Posting as ORMPosting,
    PostingAmount as ORMPostingAmount,
    Transaction as ORMTransaction,
    TransactionTag as ORMTransactionTag,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        tags=frozenset(t.tag for t in orm_account.tags),
    )


def account_to_orm(account: domain.Account) -> ORMAccount:
    """Convert domain Account entity to SQLAlchemy Account model."""
    return ORMAccount(
        name=account.name,
        account_type=account.account_type.value,
        tags=[ORMAccountTag(tag=tag) for tag in sorted(account.tags)],
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    time = None
    if orm_transaction.hour is not None:
        time = Time(orm_transaction.hour, orm_transaction.minute or 0)
    return domain.Transaction(
        name=orm_transaction.name,
        notes=orm_transaction.notes or "",
        datetime=DateTime(Date.from_date(orm_transaction.date), time),
        amounts={
            posting.account_name: Amount(
                {a.currency: Number(a.value, a.n_decimals) for a in posting.amounts}
            )
            for posting in orm_transaction.postings
        },
        tags=frozenset(t.tag for t in orm_transaction.tags),
    )


def transaction_to_orm(
    transaction_id: domain.TransactionId, transaction: domain.Transaction
) -> ORMTransaction:
    """Convert domain Transaction entity to SQLAlchemy Transaction model."""
    time = transaction.datetime.time
    return ORMTransaction(
        id=transaction_id,
        name=transaction.name,
        notes=transaction.notes,
        date=transaction.datetime.date.to_date(),
        hour=time.hour if time is not None else None,
        minute=time.minute if time is not None else None,
        tags=[ORMTransactionTag(tag=tag) for tag in sorted(transaction.tags)],
        postings=[
            ORMPosting(
                account_name=account_name,
                amounts=[
                    ORMPostingAmount(
                        currency=currency, value=number.value, n_decimals=number.n_decimals
                    )
                    for currency, number in transaction.amounts[account_name].items()
                ],
            )
            for account_name in transaction.account_names()
        ],
    )
