"""
Customer API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from overdraft_ledger.api.errors import to_http_exception
from overdraft_ledger.api.transactions import account_response
from overdraft_ledger.exceptions import LedgerError
from overdraft_ledger.models.base import get_db
from overdraft_ledger.services.account_service import AccountService
from overdraft_ledger.schemas.account import (
    AccountResponse,
    CustomerCreate,
    CustomerResponse,
)

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.post("", response_model=CustomerResponse, status_code=201)
def create_customer(
    request: CustomerCreate,
    db: Session = Depends(get_db),
):
    """
    Open a customer account.

    Balances are in pennies. An account may start in credit
    or in overdraft, but not both.
    """
    service = AccountService(db)
    try:
        customer = service.create_customer(request)
        db.commit()
        return customer
    except LedgerError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: str,
    db: Session = Depends(get_db),
):
    """Get customer details and balances."""
    service = AccountService(db)
    try:
        return service.get_customer(customer_id)
    except LedgerError as e:
        raise to_http_exception(e)


@router.get("/{customer_id}/account", response_model=AccountResponse)
def get_account(
    customer_id: str,
    db: Session = Depends(get_db),
):
    """Get balances, reversal count, and whether the account is frozen."""
    service = AccountService(db)
    try:
        return account_response(service, service.get_account(customer_id))
    except LedgerError as e:
        raise to_http_exception(e)
