"""
Ledger store — durable storage for accounts and their logs.

This is the only code that touches the customers, transaction
history, and overdraft log tables. It enforces:
1. Log tables are append-only (there is no update or delete)
2. Accounts loaded for update are row-locked until the caller
   commits or rolls back, so two operations on the same customer
   cannot interleave their read-modify-write
3. Database failures surface as StorageError

The store only flushes. The caller owns the transaction boundary.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from overdraft_ledger.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    StorageError,
)
from overdraft_ledger.models.customer import Customer
from overdraft_ledger.models.overdraft_log import OverdraftLog
from overdraft_ledger.models.transaction_history import TransactionHistory
from overdraft_ledger.schemas.account import Account
from overdraft_ledger.schemas.transaction import (
    OverdraftRepaymentLogEntry,
    TransactionLogEntry,
)

logger = logging.getLogger(__name__)


def _to_account(customer: Customer) -> Account:
    return Account(
        customer_id=customer.customer_id,
        main_balance=customer.balance,
        overdraft_balance=customer.overdraft_balance,
        num_fraud_reversals=customer.num_fraud_reversals,
    )


class LedgerStore:
    """
    SQLAlchemy implementation of the ledger's storage contract.

    Takes a session as a constructor argument, like every
    service in this package, so one request's reads and writes
    share one transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def _flush(self, operation: str) -> None:
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Ledger store flush failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise StorageError(f"{operation} failed: {e}") from e

    def _get_customer(self, customer_id: str, for_update: bool = False) -> Customer:
        stmt = select(Customer).where(Customer.customer_id == customer_id)
        if for_update:
            stmt = stmt.with_for_update()
        try:
            customer = self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"load_account failed: {e}") from e

        if not customer:
            raise AccountNotFoundError(customer_id)
        return customer

    def create_account(
        self,
        customer_id: str,
        first_name: str,
        last_name: str,
        main_balance: int = 0,
        overdraft_balance: int = 0,
    ) -> Account:
        """
        Create a customer with initial balances and no reversals.

        Raises DuplicateAccountError if the id is taken.
        """
        account = Account(
            customer_id=customer_id,
            main_balance=main_balance,
            overdraft_balance=overdraft_balance,
        )

        try:
            existing = self.db.get(Customer, customer_id)
        except SQLAlchemyError as e:
            raise StorageError(f"create_account failed: {e}") from e
        if existing:
            raise DuplicateAccountError(customer_id)

        self.db.add(Customer(
            customer_id=account.customer_id,
            first_name=first_name,
            last_name=last_name,
            balance=account.main_balance,
            overdraft_balance=account.overdraft_balance,
            num_fraud_reversals=account.num_fraud_reversals,
        ))
        try:
            self.db.flush()
        except IntegrityError as e:
            raise DuplicateAccountError(customer_id) from e
        except SQLAlchemyError as e:
            raise StorageError(f"create_account failed: {e}") from e
        return account

    def get_customer(self, customer_id: str) -> Customer:
        """Get the customer row, including names and timestamps."""
        return self._get_customer(customer_id)

    def load_account(self, customer_id: str, for_update: bool = False) -> Account:
        """
        Load an account's current balances.

        With for_update=True the row is locked until the
        session's transaction ends.
        """
        return _to_account(self._get_customer(customer_id, for_update))

    def save_account(self, account: Account) -> None:
        """Write an account's balances and reversal count."""
        customer = self._get_customer(account.customer_id)
        customer.balance = account.main_balance
        customer.overdraft_balance = account.overdraft_balance
        customer.num_fraud_reversals = account.num_fraud_reversals
        self._flush("save_account")

    def append_transaction_log(self, entry: TransactionLogEntry) -> None:
        self.db.add(TransactionHistory(
            customer_id=entry.customer_id,
            timestamp=entry.timestamp,
            action=entry.action,
            amount=entry.amount,
        ))
        self._flush("append_transaction_log")

    def append_overdraft_log(self, entry: OverdraftRepaymentLogEntry) -> None:
        self.db.add(OverdraftLog(
            customer_id=entry.customer_id,
            timestamp=entry.timestamp,
            deposit_amount=entry.deposit_amount,
            old_overdraft_balance=entry.old_overdraft_balance,
            new_overdraft_balance=entry.new_overdraft_balance,
        ))
        self._flush("append_overdraft_log")

    def query_transaction_log(self, customer_id: str) -> list[TransactionLogEntry]:
        """Return a customer's transaction history, oldest first."""
        try:
            rows = self.db.execute(
                select(TransactionHistory)
                .where(TransactionHistory.customer_id == customer_id)
                .order_by(TransactionHistory.timestamp, TransactionHistory.id)
            ).scalars().all()
        except SQLAlchemyError as e:
            raise StorageError(f"query_transaction_log failed: {e}") from e
        return [TransactionLogEntry.model_validate(row) for row in rows]

    def query_overdraft_log(
        self, customer_id: str
    ) -> list[OverdraftRepaymentLogEntry]:
        """Return a customer's overdraft repayments, oldest first."""
        try:
            rows = self.db.execute(
                select(OverdraftLog)
                .where(OverdraftLog.customer_id == customer_id)
                .order_by(OverdraftLog.timestamp, OverdraftLog.id)
            ).scalars().all()
        except SQLAlchemyError as e:
            raise StorageError(f"query_overdraft_log failed: {e}") from e
        return [OverdraftRepaymentLogEntry.model_validate(row) for row in rows]
