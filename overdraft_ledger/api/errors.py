"""
Mapping from ledger errors to HTTP responses.
"""

from fastapi import HTTPException

from overdraft_ledger.exceptions import (
    AccountFrozenError,
    AccountNotFoundError,
    AlreadyInOverdraftError,
    DuplicateAccountError,
    InvalidAmountError,
    InvalidTransactionOffsetError,
    LedgerError,
    StorageError,
    TransactionNotFoundError,
)


STATUS_CODES: dict[type[LedgerError], int] = {
    InvalidAmountError: 400,
    InvalidTransactionOffsetError: 400,
    AccountFrozenError: 403,
    AccountNotFoundError: 404,
    TransactionNotFoundError: 404,
    AlreadyInOverdraftError: 409,
    DuplicateAccountError: 409,
    StorageError: 503,
}


def to_http_exception(error: LedgerError) -> HTTPException:
    """Build the HTTPException for a ledger error. Unknown types are 400."""
    status_code = STATUS_CODES.get(type(error), 400)
    return HTTPException(status_code=status_code, detail=str(error))
