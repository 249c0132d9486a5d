"""
Overdraft repayment log model.

A row is written whenever a deposit lands on an account that
owes an overdraft, recording how much of the debt it paid off.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from overdraft_ledger.models.base import Base


class OverdraftLog(Base):
    __tablename__ = "overdraft_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[str] = mapped_column(
        ForeignKey("customers.customer_id"), nullable=False, index=True
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    deposit_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    old_overdraft_balance: Mapped[int] = mapped_column(BigInteger, nullable=False)
    new_overdraft_balance: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<OverdraftLog {self.customer_id} deposit={self.deposit_amount} "
            f"{self.old_overdraft_balance}->{self.new_overdraft_balance}>"
        )
