"""
Account transaction engine — deposits and withdrawals.

The rules for how the main balance, the overdraft balance, and
the transaction history move together:

1. A deposit pays off any overdraft first; only the excess
   becomes main balance.
2. A withdrawal drains the main balance to zero before any
   overdraft is incurred.
3. Interest is charged once, on the shortfall a withdrawal
   creates, never on overdraft carried over from before.
4. Every operation appends exactly one transaction history entry.

The functions here are pure. They take an Account value and
return an EngineResult; they never read or write the database.
Invalid requests raise before anything is computed.
"""

from datetime import datetime
from decimal import Decimal, ROUND_DOWN

from overdraft_ledger.exceptions import (
    AccountFrozenError,
    AlreadyInOverdraftError,
    InvalidAmountError,
)
from overdraft_ledger.models.enums import TransactionAction
from overdraft_ledger.schemas.account import MAX_PENNIES, Account
from overdraft_ledger.schemas.transaction import (
    EngineResult,
    OverdraftRepaymentLogEntry,
    TransactionLogEntry,
)


# Charged once on the newly incurred shortfall, e.g. 1000 -> 1020
INTEREST_RATE = Decimal("1.02")


def apply_overdraft_interest(
    shortfall: int, interest_rate: Decimal = INTEREST_RATE
) -> int:
    """
    Apply the overdraft interest multiplier to a shortfall in pennies.

    The multiplication is done in Decimal and the result truncated
    to whole pennies. Truncation, not rounding: 1001 * 1.02 is
    1021.02 and is charged as 1021.
    """
    charged = Decimal(shortfall) * Decimal(interest_rate)
    return int(charged.to_integral_value(rounding=ROUND_DOWN))


def validate_amount(amount: int) -> None:
    """Raise InvalidAmountError unless amount is a positive number of pennies."""
    if amount <= 0:
        raise InvalidAmountError(amount)
    if amount > MAX_PENNIES:
        raise InvalidAmountError(amount, f"must be at most {MAX_PENNIES}")


def _check_balance_limit(balance: int, amount: int) -> int:
    if balance > MAX_PENNIES:
        raise InvalidAmountError(
            amount, f"would take a balance past {MAX_PENNIES}"
        )
    return balance


def _now(timestamp: datetime | None) -> datetime:
    return timestamp if timestamp is not None else datetime.utcnow()


def apply_deposit(
    account: Account, amount: int, timestamp: datetime
) -> EngineResult:
    """Deposit without input validation. Callers validate first."""
    overdraft_logs = []

    if not account.in_overdraft:
        new_account = account.with_changes(
            main_balance=_check_balance_limit(
                account.main_balance + amount, amount
            )
        )
    else:
        repayment = min(amount, account.overdraft_balance)
        new_overdraft = account.overdraft_balance - repayment
        new_account = account.with_changes(
            main_balance=amount - repayment,
            overdraft_balance=new_overdraft,
        )
        overdraft_logs.append(OverdraftRepaymentLogEntry(
            customer_id=account.customer_id,
            timestamp=timestamp,
            deposit_amount=amount,
            old_overdraft_balance=account.overdraft_balance,
            new_overdraft_balance=new_overdraft,
        ))

    return EngineResult(
        account=new_account,
        transaction_logs=[TransactionLogEntry(
            customer_id=account.customer_id,
            timestamp=timestamp,
            action=TransactionAction.DEPOSIT,
            amount=amount,
        )],
        overdraft_logs=overdraft_logs,
    )


def apply_withdrawal(
    account: Account,
    amount: int,
    timestamp: datetime,
    interest_rate: Decimal = INTEREST_RATE,
) -> EngineResult:
    """
    Withdraw without the eligibility gates.

    Any overdraft already owed is kept and the newly charged
    shortfall is added on top. For an eligible account the
    carried overdraft is zero, so this is the plain rule.
    """
    if amount <= account.main_balance:
        new_account = account.with_changes(
            main_balance=account.main_balance - amount
        )
    else:
        shortfall = amount - account.main_balance
        new_account = account.with_changes(
            main_balance=0,
            overdraft_balance=_check_balance_limit(
                account.overdraft_balance
                + apply_overdraft_interest(shortfall, interest_rate),
                amount,
            ),
        )

    return EngineResult(
        account=new_account,
        transaction_logs=[TransactionLogEntry(
            customer_id=account.customer_id,
            timestamp=timestamp,
            action=TransactionAction.WITHDRAW,
            amount=amount,
        )],
    )


def deposit(
    account: Account,
    amount: int,
    timestamp: datetime | None = None,
) -> EngineResult:
    """
    Deposit pennies into an account.

    If the account is in overdraft, the deposit repays it first
    and an overdraft repayment entry is produced. Deposits cannot
    fail for balance reasons.

    Raises InvalidAmountError if amount is not positive.
    """
    validate_amount(amount)
    return apply_deposit(account, amount, _now(timestamp))


def withdraw(
    account: Account,
    amount: int,
    frozen: bool = False,
    timestamp: datetime | None = None,
    interest_rate: Decimal = INTEREST_RATE,
) -> EngineResult:
    """
    Withdraw pennies from an account.

    A withdrawal larger than the main balance empties it and
    opens an overdraft of the shortfall times interest_rate.

    Raises InvalidAmountError, AccountFrozenError, or
    AlreadyInOverdraftError. Whether the account is frozen is
    decided by the caller and passed in.
    """
    validate_amount(amount)
    if frozen:
        raise AccountFrozenError(account.customer_id)
    if account.in_overdraft:
        raise AlreadyInOverdraftError(
            account.customer_id, account.overdraft_balance
        )
    return apply_withdrawal(account, amount, _now(timestamp), interest_rate)
