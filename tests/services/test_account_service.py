"""
Tests for the AccountService: load, compute, persist.
"""

from unittest.mock import patch

import pytest

from overdraft_ledger.exceptions import (
    AccountFrozenError,
    AccountNotFoundError,
    AlreadyInOverdraftError,
    DuplicateAccountError,
    InvalidAmountError,
    StorageError,
    TransactionNotFoundError,
)
from overdraft_ledger.models.enums import TransactionAction
from overdraft_ledger.schemas.account import CustomerCreate
from overdraft_ledger.services.account_service import AccountService


CUSTOMER_ID = "123456789"


def setup_customer(db_session, main=0, overdraft=0, customer_id=CUSTOMER_ID):
    """Helper: create a customer with the given balances."""
    service = AccountService(db_session)
    service.create_customer(CustomerCreate(
        customer_id=customer_id,
        first_name="Foo",
        last_name="Bar",
        main_balance=main,
        overdraft_balance=overdraft,
    ))
    db_session.commit()
    return service


class TestCreateCustomer:

    def test_create_customer(self, db_session):
        service = setup_customer(db_session, main=15000)

        customer = service.get_customer(CUSTOMER_ID)
        assert customer.balance == 15000
        assert customer.overdraft_balance == 0
        assert customer.num_fraud_reversals == 0

    def test_duplicate_customer_rejected(self, db_session):
        setup_customer(db_session)
        with pytest.raises(DuplicateAccountError):
            setup_customer(db_session)

    def test_unknown_customer(self, db_session):
        service = AccountService(db_session)
        with pytest.raises(AccountNotFoundError):
            service.get_account("nobody")


# --- Deposit Tests ---

class TestDeposit:

    def test_simple_deposit(self, db_session):
        service = setup_customer(db_session, main=15000)

        service.deposit(CUSTOMER_ID, 5000)
        db_session.commit()

        assert service.get_account(CUSTOMER_ID).main_balance == 20000
        log = service.get_transaction_log(CUSTOMER_ID)
        assert len(log) == 1
        assert log[0].action == TransactionAction.DEPOSIT
        assert log[0].amount == 5000
        assert service.get_overdraft_log(CUSTOMER_ID) == []

    def test_deposit_clears_overdraft_with_excess(self, db_session):
        service = setup_customer(db_session, overdraft=10000)

        account = service.deposit(CUSTOMER_ID, 15000)
        db_session.commit()

        assert account.overdraft_balance == 0
        assert account.main_balance == 5000

        repayments = service.get_overdraft_log(CUSTOMER_ID)
        assert len(repayments) == 1
        assert repayments[0].deposit_amount == 15000
        assert repayments[0].old_overdraft_balance == 10000
        assert repayments[0].new_overdraft_balance == 0
        assert len(service.get_transaction_log(CUSTOMER_ID)) == 1

    def test_deposit_overdraft_not_cleared(self, db_session):
        service = setup_customer(db_session, overdraft=15000)

        service.deposit(CUSTOMER_ID, 5000)
        db_session.commit()

        account = service.get_account(CUSTOMER_ID)
        assert account.overdraft_balance == 10000
        assert account.main_balance == 0

        repayment = service.get_overdraft_log(CUSTOMER_ID)[0]
        assert repayment.deposit_amount == 5000
        assert repayment.old_overdraft_balance == 15000
        assert repayment.new_overdraft_balance == 10000

    def test_invalid_amount_writes_nothing(self, db_session):
        service = setup_customer(db_session, main=15000)

        with pytest.raises(InvalidAmountError):
            service.deposit(CUSTOMER_ID, 0)
        db_session.rollback()

        assert service.get_account(CUSTOMER_ID).main_balance == 15000
        assert service.get_transaction_log(CUSTOMER_ID) == []

    def test_deposit_to_unknown_customer(self, db_session):
        service = AccountService(db_session)
        with pytest.raises(AccountNotFoundError):
            service.deposit("nobody", 100)

    def test_deposit_allowed_when_frozen(self, db_session):
        service = setup_customer(db_session, main=100)
        service.deposit(CUSTOMER_ID, 100)
        service.dispute(CUSTOMER_ID)
        service.deposit(CUSTOMER_ID, 100)
        service.dispute(CUSTOMER_ID)
        db_session.commit()
        assert service.is_frozen(service.get_account(CUSTOMER_ID))

        account = service.deposit(CUSTOMER_ID, 100)
        assert account.main_balance == 200


# --- Withdraw Tests ---

class TestWithdraw:

    def test_simple_withdraw(self, db_session):
        service = setup_customer(db_session, main=15000)

        service.withdraw(CUSTOMER_ID, 5000)
        db_session.commit()

        assert service.get_account(CUSTOMER_ID).main_balance == 10000
        log = service.get_transaction_log(CUSTOMER_ID)
        assert len(log) == 1
        assert log[0].action == TransactionAction.WITHDRAW
        assert log[0].amount == 5000

    def test_withdraw_triggers_overdraft(self, db_session):
        service = setup_customer(db_session, main=10000)

        service.withdraw(CUSTOMER_ID, 11000)
        db_session.commit()

        account = service.get_account(CUSTOMER_ID)
        assert account.main_balance == 0
        assert account.overdraft_balance == 1020
        assert service.get_transaction_log(CUSTOMER_ID)[0].amount == 11000

    def test_withdraw_in_overdraft_rejected(self, db_session):
        service = setup_customer(db_session, overdraft=1020)

        with pytest.raises(AlreadyInOverdraftError):
            service.withdraw(CUSTOMER_ID, 100)
        db_session.rollback()

        assert service.get_account(CUSTOMER_ID).overdraft_balance == 1020
        assert service.get_transaction_log(CUSTOMER_ID) == []

    def test_withdraw_from_frozen_account_rejected(self, db_session):
        service = setup_customer(db_session, main=15000)
        for _ in range(2):
            service.withdraw(CUSTOMER_ID, 1000)
            service.dispute(CUSTOMER_ID)
        db_session.commit()

        with pytest.raises(AccountFrozenError):
            service.withdraw(CUSTOMER_ID, 100)


# --- Dispute Tests ---

class TestDispute:

    def test_reversal_of_simple_deposit(self, db_session):
        service = setup_customer(db_session, main=15000)
        service.deposit(CUSTOMER_ID, 5000)
        db_session.commit()

        service.dispute(CUSTOMER_ID, 1)
        db_session.commit()

        account = service.get_account(CUSTOMER_ID)
        assert account.main_balance == 15000
        assert account.num_fraud_reversals == 1

        log = service.get_transaction_log(CUSTOMER_ID)
        assert len(log) == 2
        assert log[0].action == TransactionAction.DEPOSIT
        assert log[1].action == TransactionAction.WITHDRAW
        assert log[1].amount == 5000

    def test_reversal_of_simple_withdraw(self, db_session):
        service = setup_customer(db_session, main=15000)
        service.withdraw(CUSTOMER_ID, 5000)
        db_session.commit()

        service.dispute(CUSTOMER_ID, 1)
        db_session.commit()

        account = service.get_account(CUSTOMER_ID)
        assert account.main_balance == 15000
        assert account.num_fraud_reversals == 1

        log = service.get_transaction_log(CUSTOMER_ID)
        assert [e.action for e in log] == [
            TransactionAction.WITHDRAW,
            TransactionAction.DEPOSIT,
        ]

    def test_reversal_of_deposit_while_in_overdraft(self, db_session):
        service = setup_customer(db_session, overdraft=15000)
        service.deposit(CUSTOMER_ID, 5000)
        db_session.commit()

        account = service.dispute(CUSTOMER_ID)
        db_session.commit()

        # 10000 still owed plus 5000 * 1.02 for the reversed deposit
        assert account.main_balance == 0
        assert account.overdraft_balance == 15100

    def test_dispute_with_no_history(self, db_session):
        service = setup_customer(db_session, main=100)

        with pytest.raises(TransactionNotFoundError):
            service.dispute(CUSTOMER_ID)
        db_session.rollback()

        assert service.get_account(CUSTOMER_ID).num_fraud_reversals == 0

    def test_dispute_blocked_at_reversal_limit(self, db_session):
        service = setup_customer(db_session, main=15000)
        for _ in range(2):
            service.deposit(CUSTOMER_ID, 100)
            service.dispute(CUSTOMER_ID)
        db_session.commit()

        service.deposit(CUSTOMER_ID, 100)
        with pytest.raises(AccountFrozenError):
            service.dispute(CUSTOMER_ID)

    def test_storage_failure_propagates(self, db_session):
        service = setup_customer(db_session, main=15000)
        service.deposit(CUSTOMER_ID, 5000)
        db_session.commit()

        with patch.object(
            service.store, "append_transaction_log",
            side_effect=StorageError("append_transaction_log failed"),
        ):
            with pytest.raises(StorageError):
                service.dispute(CUSTOMER_ID)
        db_session.rollback()

        account = service.get_account(CUSTOMER_ID)
        assert account.main_balance == 20000
        assert account.num_fraud_reversals == 0
