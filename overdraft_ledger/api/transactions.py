"""
Transaction API endpoints.

Each write endpoint is one database transaction: the new
balances and every log entry are committed together, or the
whole request is rolled back.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from overdraft_ledger.api.errors import to_http_exception
from overdraft_ledger.exceptions import LedgerError
from overdraft_ledger.models.base import get_db
from overdraft_ledger.schemas.account import Account, AccountResponse
from overdraft_ledger.services.account_service import AccountService
from overdraft_ledger.schemas.transaction import (
    DepositRequest,
    DisputeRequest,
    OverdraftRepaymentLogEntry,
    TransactionLogEntry,
    WithdrawRequest,
)

router = APIRouter(prefix="/customers/{customer_id}", tags=["Transactions"])


def account_response(service: AccountService, account: Account) -> AccountResponse:
    return AccountResponse(
        customer_id=account.customer_id,
        main_balance=account.main_balance,
        overdraft_balance=account.overdraft_balance,
        num_fraud_reversals=account.num_fraud_reversals,
        is_frozen=service.is_frozen(account),
    )


@router.post("/deposit", response_model=AccountResponse, status_code=201)
def deposit(
    customer_id: str,
    request: DepositRequest,
    db: Session = Depends(get_db),
):
    """Deposit money into an account, repaying any overdraft first."""
    service = AccountService(db)
    try:
        account = service.deposit(customer_id, request.amount)
        db.commit()
        return account_response(service, account)
    except LedgerError as e:
        db.rollback()
        raise to_http_exception(e)


@router.post("/withdraw", response_model=AccountResponse, status_code=201)
def withdraw(
    customer_id: str,
    request: WithdrawRequest,
    db: Session = Depends(get_db),
):
    """Withdraw money from an account."""
    service = AccountService(db)
    try:
        account = service.withdraw(customer_id, request.amount)
        db.commit()
        return account_response(service, account)
    except LedgerError as e:
        db.rollback()
        raise to_http_exception(e)


@router.post("/dispute", response_model=AccountResponse, status_code=201)
def dispute(
    customer_id: str,
    request: DisputeRequest,
    db: Session = Depends(get_db),
):
    """
    Dispute a past transaction.

    Books the opposite transaction against the current balances
    and increments the customer's fraud reversal count.
    """
    service = AccountService(db)
    try:
        account = service.dispute(customer_id, request.num_transactions_ago)
        db.commit()
        return account_response(service, account)
    except LedgerError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("/transactions", response_model=list[TransactionLogEntry])
def get_transactions(
    customer_id: str,
    db: Session = Depends(get_db),
):
    """Get the customer's transaction history, oldest first."""
    service = AccountService(db)
    try:
        return service.get_transaction_log(customer_id)
    except LedgerError as e:
        raise to_http_exception(e)


@router.get("/overdraft-logs", response_model=list[OverdraftRepaymentLogEntry])
def get_overdraft_logs(
    customer_id: str,
    db: Session = Depends(get_db),
):
    """Get the customer's overdraft repayments, oldest first."""
    service = AccountService(db)
    try:
        return service.get_overdraft_log(customer_id)
    except LedgerError as e:
        raise to_http_exception(e)
