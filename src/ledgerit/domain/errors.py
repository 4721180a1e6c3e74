"""Shared domain error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class IntegrityError(DomainError):
    """Internal index and table disagree."""


class ParseError(ValidationError):
    """Malformed number, amount, date or time literal."""


class AccountNameInUse(ConflictError):
    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f"Account with name '{account_name}' already exists")


class TransactionIdInUse(ConflictError):
    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} already exists")


class UnknownAccount(NotFoundError):
    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f"Account '{account_name}' not found")


class UnknownTransaction(NotFoundError):
    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


class AccountHasTransactions(DependencyError):
    def __init__(self, account_name: str, transaction_count: int):
        self.account_name = account_name
        self.transaction_count = transaction_count
        super().__init__(
            f"Cannot delete account '{account_name}': it has "
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}. "
            "Please delete them first."
        )


class AccountNotAssociatedWithTransaction(IntegrityError):
    def __init__(self, account_name: str, transaction_id: str):
        self.account_name = account_name
        self.transaction_id = transaction_id
        super().__init__(
            f"Transaction {transaction_id} is not indexed under account '{account_name}'"
        )


class UnbalancedTransaction(ValidationError):
    """Raised when the signed sum of a transaction's postings is not zero.

    ``balance`` holds the offending remainder so callers can show it.
    """

    def __init__(self, balance):
        self.balance = balance
        super().__init__(f"Transaction is not balanced (remainder: {balance})")
