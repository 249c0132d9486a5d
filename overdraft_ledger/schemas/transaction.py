"""
Pydantic schemas for ledger log entries and transaction requests.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from overdraft_ledger.models.enums import TransactionAction
from overdraft_ledger.schemas.account import MAX_PENNIES, Account


# --- Log Entries ---

class TransactionLogEntry(BaseModel):
    """One immutable line of a customer's transaction history."""
    customer_id: str
    timestamp: datetime
    action: TransactionAction
    amount: int = Field(gt=0)

    model_config = {"frozen": True, "from_attributes": True}


class OverdraftRepaymentLogEntry(BaseModel):
    """Written when a deposit pays down some or all of an overdraft."""
    customer_id: str
    timestamp: datetime
    deposit_amount: int = Field(gt=0)
    old_overdraft_balance: int = Field(ge=0)
    new_overdraft_balance: int = Field(ge=0)

    model_config = {"frozen": True, "from_attributes": True}


class EngineResult(BaseModel):
    """
    Everything an operation produced.

    The caller persists account and appends every entry,
    all in one database transaction.
    """
    account: Account
    transaction_logs: list[TransactionLogEntry] = Field(default_factory=list)
    overdraft_logs: list[OverdraftRepaymentLogEntry] = Field(
        default_factory=list
    )

    model_config = {"frozen": True}


# --- Request Schemas ---

class DepositRequest(BaseModel):
    amount: int = Field(gt=0, le=MAX_PENNIES, description="Amount in pennies")


class WithdrawRequest(BaseModel):
    amount: int = Field(gt=0, le=MAX_PENNIES, description="Amount in pennies")


class DisputeRequest(BaseModel):
    num_transactions_ago: int = Field(
        default=1, ge=1, description="1 reverses the most recent transaction"
    )
