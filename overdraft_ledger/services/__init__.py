"""Business logic services."""

from overdraft_ledger.services.ledger_store import LedgerStore
from overdraft_ledger.services.account_service import AccountService

__all__ = ["LedgerStore", "AccountService"]
