"""
Transaction history model.

The append-only record of every deposit and withdrawal,
including the compensating entries written by disputes.
Rows are never updated or deleted; a dispute adds a new
row instead of editing the one it reverses.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from overdraft_ledger.models.base import Base
from overdraft_ledger.models.enums import TransactionAction


class TransactionHistory(Base):
    """
    One deposit or withdrawal.

    Chronological order is (timestamp, id): two entries written
    within the same clock tick keep their insertion order.
    """

    __tablename__ = "transaction_history"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[str] = mapped_column(
        ForeignKey("customers.customer_id"), nullable=False, index=True
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )
    action: Mapped[TransactionAction] = mapped_column(
        SAEnum(
            TransactionAction,
            name="transaction_action_enum",
            values_callable=lambda actions: [a.value for a in actions],
            create_constraint=True,
        ),
        nullable=False,
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<TransactionHistory {self.customer_id} "
            f"{self.action.value} {self.amount}>"
        )
