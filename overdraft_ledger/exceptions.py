"""
Ledger error taxonomy.

Every failure the engine, the resolver, or the store can report
has its own type. Callers map these to HTTP status codes; nothing
is signalled through partially updated state.
"""


class LedgerError(Exception):
    """Base exception for all ledger failures."""

    pass


class InvalidAmountError(LedgerError):
    """Amount is not positive, or would push a balance past MAX_PENNIES."""

    def __init__(self, amount: int, reason: str = "must be positive"):
        self.amount = amount
        super().__init__(f"Amount {reason}, got {amount}")


class InvalidTransactionOffsetError(LedgerError):
    """num_transactions_ago is below 1."""

    def __init__(self, num_transactions_ago: int):
        self.num_transactions_ago = num_transactions_ago
        super().__init__(
            f"num_transactions_ago must be at least 1, "
            f"got {num_transactions_ago}"
        )


class AccountFrozenError(LedgerError):
    """Account is frozen and cannot withdraw or dispute."""

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"Account {customer_id} is frozen")


class AlreadyInOverdraftError(LedgerError):
    """Withdrawal requested while the account already owes an overdraft."""

    def __init__(self, customer_id: str, overdraft_balance: int):
        self.customer_id = customer_id
        self.overdraft_balance = overdraft_balance
        super().__init__(
            f"Account {customer_id} is already in overdraft "
            f"(overdraft_balance={overdraft_balance})"
        )


class TransactionNotFoundError(LedgerError):
    """The reversal target is older than the customer's history."""

    def __init__(self, customer_id: str, num_transactions_ago: int, available: int):
        self.customer_id = customer_id
        self.num_transactions_ago = num_transactions_ago
        self.available = available
        super().__init__(
            f"Account {customer_id} has {available} transaction(s), "
            f"cannot reverse transaction {num_transactions_ago} ago"
        )


class AccountNotFoundError(LedgerError):
    """No account exists for the customer id."""

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"Account {customer_id} not found")


class DuplicateAccountError(LedgerError):
    """An account with this customer id already exists."""

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"Account {customer_id} already exists")


class StorageError(LedgerError):
    """The ledger store failed. Wraps the underlying database error."""

    pass
