"""
Dispute resolver — reverses a past transaction.

A dispute names a transaction by how far back it is in the
customer's history (1 = most recent). The resolver does not roll
the account back to a snapshot. It books the opposite operation
against today's balances:

    Deposit  -> Withdraw of the same amount
    Withdraw -> Deposit of the same amount

The original history entry is left untouched and the reversal
shows up as a new entry. There is no limit on reversing the same
transaction twice, or on reversing a reversal; how many disputes
a customer may file is capped by the caller through `frozen`.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable

from overdraft_ledger.exceptions import (
    AccountFrozenError,
    InvalidTransactionOffsetError,
    TransactionNotFoundError,
)
from overdraft_ledger.models.enums import TransactionAction
from overdraft_ledger.schemas.account import Account
from overdraft_ledger.schemas.transaction import (
    EngineResult,
    TransactionLogEntry,
)
from overdraft_ledger.services.account_engine import (
    INTEREST_RATE,
    apply_deposit,
    apply_withdrawal,
    validate_amount,
)


def find_transaction(
    customer_id: str,
    transaction_log: Iterable[TransactionLogEntry],
    num_transactions_ago: int,
) -> TransactionLogEntry:
    """
    Locate the entry num_transactions_ago back from the newest.

    Only the customer's own entries count. The log is sorted by
    timestamp; sorted() is stable, so entries sharing a timestamp
    keep the order the store returned them in.
    """
    if num_transactions_ago < 1:
        raise InvalidTransactionOffsetError(num_transactions_ago)

    history = sorted(
        (e for e in transaction_log if e.customer_id == customer_id),
        key=lambda e: e.timestamp,
    )
    if len(history) < num_transactions_ago:
        raise TransactionNotFoundError(
            customer_id, num_transactions_ago, len(history)
        )
    return history[-num_transactions_ago]


def reverse(
    account: Account,
    transaction_log: Iterable[TransactionLogEntry],
    num_transactions_ago: int,
    frozen: bool = False,
    timestamp: datetime | None = None,
    interest_rate: Decimal = INTEREST_RATE,
) -> EngineResult:
    """
    Reverse a past transaction against the current account.

    Returns the new account, with num_fraud_reversals incremented,
    and the compensating log entries to append.

    Raises InvalidTransactionOffsetError, TransactionNotFoundError,
    or AccountFrozenError.
    """
    if frozen:
        raise AccountFrozenError(account.customer_id)
    target = find_transaction(
        account.customer_id, transaction_log, num_transactions_ago
    )
    validate_amount(target.amount)

    when = timestamp if timestamp is not None else datetime.utcnow()

    # No "already in overdraft" gate for reversals
    if target.action.compensating() is TransactionAction.WITHDRAW:
        result = apply_withdrawal(account, target.amount, when, interest_rate)
    else:
        result = apply_deposit(account, target.amount, when)

    return EngineResult(
        account=result.account.with_changes(
            num_fraud_reversals=result.account.num_fraud_reversals + 1
        ),
        transaction_logs=result.transaction_logs,
        overdraft_logs=result.overdraft_logs,
    )
