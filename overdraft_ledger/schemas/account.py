"""
Pydantic schemas for customer accounts.

Account is the immutable value the ledger engine computes on.
The request/response models define the HTTP contract.
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


# Largest value a BIGINT balance or amount column can hold
MAX_PENNIES = 2**63 - 1


# --- Engine Value ---

class Account(BaseModel):
    """
    A customer's balances at one point in time, in pennies.

    An account is either in credit or in overdraft, never both:
    at most one of main_balance and overdraft_balance is positive.
    Instances are frozen; the engine returns a new Account rather
    than changing the one it was given.
    """
    customer_id: str = Field(min_length=1, max_length=50)
    main_balance: int = Field(default=0, ge=0, le=MAX_PENNIES)
    overdraft_balance: int = Field(default=0, ge=0, le=MAX_PENNIES)
    num_fraud_reversals: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def credit_or_overdraft_not_both(self) -> "Account":
        if self.main_balance > 0 and self.overdraft_balance > 0:
            raise ValueError(
                "account cannot have both a main balance and an overdraft "
                f"balance (main_balance={self.main_balance}, "
                f"overdraft_balance={self.overdraft_balance})"
            )
        return self

    @property
    def in_overdraft(self) -> bool:
        return self.overdraft_balance > 0

    def with_changes(self, **changes) -> "Account":
        """Return a validated copy with the given fields replaced."""
        return Account.model_validate({**self.model_dump(), **changes})


# --- Customer Schemas ---

class CustomerCreate(BaseModel):
    """Request to open a customer account."""
    customer_id: str = Field(min_length=1, max_length=50)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    main_balance: int = Field(default=0, ge=0, le=MAX_PENNIES)
    overdraft_balance: int = Field(default=0, ge=0, le=MAX_PENNIES)

    @model_validator(mode="after")
    def credit_or_overdraft_not_both(self) -> "CustomerCreate":
        if self.main_balance > 0 and self.overdraft_balance > 0:
            raise ValueError(
                "cannot open an account with both a main balance "
                "and an overdraft balance"
            )
        return self


class CustomerResponse(BaseModel):
    customer_id: str
    first_name: str
    last_name: str
    balance: int
    overdraft_balance: int
    num_fraud_reversals: int
    created_at: datetime

    model_config = {"from_attributes": True}


class AccountResponse(BaseModel):
    """Balances after an operation, plus whether the account is frozen."""
    customer_id: str
    main_balance: int
    overdraft_balance: int
    num_fraud_reversals: int
    is_frozen: bool
