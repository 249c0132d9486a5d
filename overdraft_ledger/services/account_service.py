"""
Account service — deposits, withdrawals, and disputes.

Each operation:
1. Loads the account with its row locked
2. Decides whether the customer is frozen
3. Computes the new state through the pure engine or resolver
4. Saves the account and appends every log entry the engine produced

Nothing is written unless the engine succeeds. The caller
controls the commit, so a storage failure halfway through
step 4 is rolled back with the rest of the request.
"""

import logging

from sqlalchemy.orm import Session

from overdraft_ledger.config import get_settings
from overdraft_ledger.exceptions import LedgerError
from overdraft_ledger.models.customer import Customer
from overdraft_ledger.schemas.account import Account, CustomerCreate
from overdraft_ledger.schemas.transaction import (
    EngineResult,
    OverdraftRepaymentLogEntry,
    TransactionLogEntry,
)
from overdraft_ledger.services import account_engine, dispute_resolver
from overdraft_ledger.services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(self, db: Session):
        self.db = db
        self.store = LedgerStore(db)
        self.settings = get_settings()

    def is_frozen(self, account: Account) -> bool:
        """An account is frozen once it reaches the fraud reversal limit."""
        return account.num_fraud_reversals >= self.settings.MAX_FRAUD_REVERSALS

    def _persist(self, result: EngineResult) -> Account:
        """Save the new account and append its log entries."""
        self.store.save_account(result.account)
        for entry in result.transaction_logs:
            self.store.append_transaction_log(entry)
        for entry in result.overdraft_logs:
            self.store.append_overdraft_log(entry)
        return result.account

    def _log_rejected(self, action: str, customer_id: str, error: LedgerError) -> None:
        logger.warning(
            "Operation rejected",
            extra={
                "customer_id": customer_id,
                "action": action,
                "reason": type(error).__name__,
                "detail": str(error),
            },
        )

    def create_customer(self, request: CustomerCreate) -> Customer:
        """Open a customer account with its initial balances."""
        self.store.create_account(
            customer_id=request.customer_id,
            first_name=request.first_name,
            last_name=request.last_name,
            main_balance=request.main_balance,
            overdraft_balance=request.overdraft_balance,
        )
        logger.info(
            "Customer created",
            extra={"customer_id": request.customer_id, "action": "create"},
        )
        return self.store.get_customer(request.customer_id)

    def get_customer(self, customer_id: str) -> Customer:
        return self.store.get_customer(customer_id)

    def get_account(self, customer_id: str) -> Account:
        return self.store.load_account(customer_id)

    def deposit(self, customer_id: str, amount: int) -> Account:
        """
        Deposit pennies, repaying any overdraft first.

        Deposits are accepted on frozen accounts.
        """
        account = self.store.load_account(customer_id, for_update=True)
        try:
            result = account_engine.deposit(account, amount)
        except LedgerError as e:
            self._log_rejected("deposit", customer_id, e)
            raise

        new_account = self._persist(result)
        logger.info(
            "Deposit completed",
            extra={
                "customer_id": customer_id,
                "action": "deposit",
                "amount": amount,
                "overdraft_repaid": bool(result.overdraft_logs),
            },
        )
        return new_account

    def withdraw(self, customer_id: str, amount: int) -> Account:
        """
        Withdraw pennies, opening an overdraft if the balance runs out.

        Frozen accounts and accounts already in overdraft are refused.
        """
        account = self.store.load_account(customer_id, for_update=True)
        try:
            result = account_engine.withdraw(
                account,
                amount,
                frozen=self.is_frozen(account),
                interest_rate=self.settings.INTEREST_RATE,
            )
        except LedgerError as e:
            self._log_rejected("withdraw", customer_id, e)
            raise

        new_account = self._persist(result)
        logger.info(
            "Withdraw completed",
            extra={
                "customer_id": customer_id,
                "action": "withdraw",
                "amount": amount,
                "overdraft_balance": new_account.overdraft_balance,
            },
        )
        return new_account

    def dispute(self, customer_id: str, num_transactions_ago: int = 1) -> Account:
        """
        Reverse the transaction num_transactions_ago back (1 = newest).

        The reversal is booked against current balances and counts
        towards the customer's fraud reversal limit.
        """
        account = self.store.load_account(customer_id, for_update=True)
        history = self.store.query_transaction_log(customer_id)
        try:
            result = dispute_resolver.reverse(
                account,
                history,
                num_transactions_ago,
                frozen=self.is_frozen(account),
                interest_rate=self.settings.INTEREST_RATE,
            )
        except LedgerError as e:
            self._log_rejected("dispute", customer_id, e)
            raise

        new_account = self._persist(result)
        reversal = result.transaction_logs[0]
        logger.info(
            "Dispute completed",
            extra={
                "customer_id": customer_id,
                "action": "dispute",
                "amount": reversal.amount,
                "compensating_action": reversal.action.value,
                "num_fraud_reversals": new_account.num_fraud_reversals,
            },
        )
        return new_account

    def get_transaction_log(self, customer_id: str) -> list[TransactionLogEntry]:
        """Transaction history, oldest first. The customer must exist."""
        self.store.load_account(customer_id)
        return self.store.query_transaction_log(customer_id)

    def get_overdraft_log(
        self, customer_id: str
    ) -> list[OverdraftRepaymentLogEntry]:
        self.store.load_account(customer_id)
        return self.store.query_overdraft_log(customer_id)
