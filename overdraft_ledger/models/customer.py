"""
Customer model.

One row per account holder. The row carries the two balances
the ledger engine works on, both in pennies, plus the count of
disputes the customer has filed.
"""

from datetime import datetime

from sqlalchemy import BigInteger, String, Integer, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from overdraft_ledger.models.base import Base


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_customers_balance"),
        CheckConstraint(
            "overdraft_balance >= 0", name="ck_customers_overdraft_balance"
        ),
        CheckConstraint(
            "num_fraud_reversals >= 0", name="ck_customers_num_fraud_reversals"
        ),
        # In credit or in overdraft, never both
        CheckConstraint(
            "balance = 0 OR overdraft_balance = 0",
            name="ck_customers_credit_or_overdraft",
        ),
    )

    customer_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    overdraft_balance: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0
    )
    num_fraud_reversals: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<Customer {self.customer_id} balance={self.balance} "
            f"overdraft={self.overdraft_balance}>"
        )
