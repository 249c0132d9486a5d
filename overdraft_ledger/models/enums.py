"""
Shared enumerations for database models.

The values are the strings written to the transaction history
table, so they double as the on-disk format of a log entry's
action column.
"""

import enum


class TransactionAction(str, enum.Enum):
    """What a transaction history entry did to the account."""
    DEPOSIT = "Deposit"
    WITHDRAW = "Withdraw"

    def compensating(self) -> "TransactionAction":
        """The action that undoes this one."""
        if self is TransactionAction.DEPOSIT:
            return TransactionAction.WITHDRAW
        return TransactionAction.DEPOSIT
