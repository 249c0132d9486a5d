"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from overdraft_ledger.models.base import Base
from overdraft_ledger.models.enums import TransactionAction
from overdraft_ledger.models.customer import Customer
from overdraft_ledger.models.transaction_history import TransactionHistory
from overdraft_ledger.models.overdraft_log import OverdraftLog

__all__ = [
    "Base",
    "TransactionAction",
    "Customer",
    "TransactionHistory",
    "OverdraftLog",
]
