"""
Deposit workflow tests

Tests cover:
1. Request validation (minimum amount, proof, method specifics)
2. Approval crediting exactly once
3. Rejection without balance effect
4. Terminal state handling
5. Concurrent approval of one deposit
6. Rollback when the store fails mid-approval
"""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.db.models import WalletTransaction
from app.infrastructure.database import atomic
from app.infrastructure.database.repositories import SqlWalletRepository
from app.modules.common import (
    AlreadyFinalizedError,
    DepositNotFoundError,
    InvalidAmountError,
    LedgerError,
    MissingProofError,
    StoreUnavailableError,
)
from app.modules.currency import CurrencyConverter
from app.modules.deposits import DepositStatus, DepositWorkflow, PaymentMethod, ReviewAction
from app.modules.wallets import TransactionType, WalletService

PROOF = "data:image/png;base64,iVBORw0KGgo="


async def _pending_deposit(session, user_id: str, amount: str = "10", method: str = "qr"):
    workflow = DepositWorkflow.with_session(session)
    deposit = await workflow.create_deposit_request(
        user_id=user_id,
        amount=amount,
        method=method,
        proof_image=PROOF,
    )
    await session.commit()
    return deposit


async def _transaction_count(session, user_id: str) -> int:
    stmt = select(func.count()).select_from(WalletTransaction).where(WalletTransaction.user_id == user_id)
    return await session.scalar(stmt)


class TestCreateDepositRequest:
    async def test_new_deposit_is_pending_and_balance_untouched(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "25.50")

        assert deposit.status is DepositStatus.PENDING
        assert deposit.amount == Decimal("25.50")
        assert deposit.proof_image == PROOF
        assert await WalletService.with_session(session).get_balance(customer.id) == Decimal("0")
        assert await _transaction_count(session, customer.id) == 0

    async def test_qr_deposit_gets_inr_quote(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "1")

        assert deposit.payment_method is PaymentMethod.QR
        assert deposit.amount_inr == 84
        assert deposit.currency is None

    async def test_qr_deposit_keeps_supplied_inr(self, session, customer):
        workflow = DepositWorkflow.with_session(session)

        deposit = await workflow.create_deposit_request(
            user_id=customer.id, amount="2", method="qr", proof_image=PROOF, amount_inr=170
        )

        assert deposit.amount_inr == 170

    async def test_crypto_deposit_defaults_currency(self, session, customer):
        workflow = DepositWorkflow.with_session(session)

        deposit = await workflow.create_deposit_request(
            user_id=customer.id, amount="5", method=PaymentMethod.CRYPTO, proof_image=PROOF
        )
        btc = await workflow.create_deposit_request(
            user_id=customer.id, amount="5", method="crypto", proof_image=PROOF, currency="btc", amount_inr=400
        )

        assert deposit.currency == "USDT"
        assert deposit.amount_inr is None
        assert btc.currency == "BTC"
        assert btc.amount_inr is None

    @pytest.mark.parametrize("amount", ["0.99", "0", "-5", "1.005"])
    async def test_rejects_invalid_amount(self, session, customer, amount):
        workflow = DepositWorkflow.with_session(session)

        with pytest.raises(InvalidAmountError):
            await workflow.create_deposit_request(
                user_id=customer.id, amount=amount, method="qr", proof_image=PROOF
            )

    @pytest.mark.parametrize("proof", [None, "", "   "])
    async def test_rejects_missing_proof(self, session, customer, proof):
        workflow = DepositWorkflow.with_session(session)

        with pytest.raises(MissingProofError):
            await workflow.create_deposit_request(
                user_id=customer.id, amount="10", method="qr", proof_image=proof
            )

    async def test_rejects_unknown_method(self, session, customer):
        workflow = DepositWorkflow.with_session(session)

        with pytest.raises(ValueError):
            await workflow.create_deposit_request(
                user_id=customer.id, amount="10", method="paypal", proof_image=PROOF
            )

    async def test_minimum_amount_is_accepted(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "1.00")

        assert deposit.amount == Decimal("1.00")


class TestApproveDeposit:
    async def test_approval_credits_once_and_logs(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "10")
        workflow = DepositWorkflow.with_session(session)

        async with atomic(session):
            approval = await workflow.approve_deposit(deposit.id)

        assert approval.deposit.status is DepositStatus.COMPLETED
        assert approval.balance == Decimal("10.00")
        assert approval.transaction.type is TransactionType.DEPOSIT
        assert approval.transaction.amount == Decimal("10.00")
        assert approval.transaction.reference_id == deposit.id
        assert approval.transaction.description == "Deposit of $10.00 via QR/UPI"

        wallets = WalletService.with_session(session)
        assert await wallets.get_balance(customer.id) == Decimal("10.00")
        transactions = await wallets.list_transactions(customer.id)
        assert [t.amount for t in transactions] == [Decimal("10.00")]

    async def test_second_approval_is_refused(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "10")
        workflow = DepositWorkflow.with_session(session)
        async with atomic(session):
            await workflow.approve_deposit(deposit.id)

        with pytest.raises(AlreadyFinalizedError):
            async with atomic(session):
                await workflow.approve_deposit(deposit.id)

        assert await WalletService.with_session(session).get_balance(customer.id) == Decimal("10.00")
        assert await _transaction_count(session, customer.id) == 1

    async def test_approving_rejected_deposit_is_refused(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "10")
        workflow = DepositWorkflow.with_session(session)
        async with atomic(session):
            await workflow.reject_deposit(deposit.id)

        with pytest.raises(AlreadyFinalizedError):
            async with atomic(session):
                await workflow.approve_deposit(deposit.id)

        assert await WalletService.with_session(session).get_balance(customer.id) == Decimal("0")
        assert (await workflow.get_deposit(deposit.id)).status is DepositStatus.REJECTED

    async def test_unknown_deposit(self, session):
        workflow = DepositWorkflow.with_session(session)

        with pytest.raises(DepositNotFoundError):
            await workflow.approve_deposit("missing")
        with pytest.raises(DepositNotFoundError):
            await workflow.reject_deposit("missing")

    async def test_crypto_description(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "3.25", "crypto")
        async with atomic(session):
            approval = await DepositWorkflow.with_session(session).approve_deposit(deposit.id)

        assert approval.transaction.description == "Deposit of $3.25 via Cryptocurrency"

    async def test_concurrent_approvals_credit_once(self, session_factory, customer):
        async with session_factory() as setup:
            deposit = await _pending_deposit(setup, customer.id, "10")

        async def approve():
            async with session_factory() as db:
                async with atomic(db):
                    return await DepositWorkflow.with_session(db).approve_deposit(deposit.id)

        results = await asyncio.gather(approve(), approve(), return_exceptions=True)

        successes = [r for r in results if not isinstance(r, BaseException)]
        failures = [r for r in results if isinstance(r, BaseException)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], (AlreadyFinalizedError, StoreUnavailableError))

        async with session_factory() as check:
            assert await WalletService.with_session(check).get_balance(customer.id) == Decimal("10.00")
            assert await _transaction_count(check, customer.id) == 1


class TestStoreFailure:
    async def test_failed_log_write_rolls_back_approval(self, session, customer, monkeypatch):
        deposit = await _pending_deposit(session, customer.id, "10")

        async def fail_insert(self, **kwargs):
            raise OperationalError("INSERT INTO wallet_transactions", {}, Exception("disk I/O error"))

        monkeypatch.setattr(SqlWalletRepository, "add_transaction", fail_insert)
        workflow = DepositWorkflow.with_session(session)

        with pytest.raises(StoreUnavailableError) as excinfo:
            async with atomic(session):
                await workflow.approve_deposit(deposit.id)

        assert isinstance(excinfo.value.__cause__, OperationalError)
        assert (await workflow.get_deposit(deposit.id)).status is DepositStatus.PENDING
        assert await WalletService.with_session(session).get_balance(customer.id) == Decimal("0.00")
        assert await _transaction_count(session, customer.id) == 0

    async def test_approval_succeeds_after_store_recovers(self, session, customer, monkeypatch):
        deposit = await _pending_deposit(session, customer.id, "10")

        async def fail_insert(self, **kwargs):
            raise OperationalError("INSERT INTO wallet_transactions", {}, Exception("database is locked"))

        monkeypatch.setattr(SqlWalletRepository, "add_transaction", fail_insert)
        workflow = DepositWorkflow.with_session(session)
        with pytest.raises(StoreUnavailableError):
            async with atomic(session):
                await workflow.approve_deposit(deposit.id)

        monkeypatch.undo()
        async with atomic(session):
            approval = await workflow.approve_deposit(deposit.id)

        assert approval.balance == Decimal("10.00")
        assert await _transaction_count(session, customer.id) == 1


class TestRejectDeposit:
    async def test_rejection_leaves_balance(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "10")
        workflow = DepositWorkflow.with_session(session)

        async with atomic(session):
            rejected = await workflow.reject_deposit(deposit.id)

        assert rejected.status is DepositStatus.REJECTED
        assert await WalletService.with_session(session).get_balance(customer.id) == Decimal("0")
        assert await _transaction_count(session, customer.id) == 0

    async def test_rejecting_terminal_deposit_is_refused(self, session, customer):
        deposit = await _pending_deposit(session, customer.id, "10")
        workflow = DepositWorkflow.with_session(session)
        async with atomic(session):
            await workflow.approve_deposit(deposit.id)

        with pytest.raises(AlreadyFinalizedError):
            async with atomic(session):
                await workflow.reject_deposit(deposit.id)

        assert (await workflow.get_deposit(deposit.id)).status is DepositStatus.COMPLETED
        assert await WalletService.with_session(session).get_balance(customer.id) == Decimal("10.00")


class TestReviewAndListing:
    async def test_review_dispatches_action(self, session, customer):
        first = await _pending_deposit(session, customer.id, "4")
        second = await _pending_deposit(session, customer.id, "6")
        workflow = DepositWorkflow.with_session(session)

        async with atomic(session):
            approved = await workflow.review_deposit(first.id, ReviewAction.APPROVE)
            rejected = await workflow.review_deposit(second.id, "reject")

        assert approved.status is DepositStatus.COMPLETED
        assert rejected.status is DepositStatus.REJECTED
        assert await WalletService.with_session(session).get_balance(customer.id) == Decimal("4.00")

    async def test_admin_listing_defaults_to_pending(self, session, customer):
        first = await _pending_deposit(session, customer.id, "4")
        await _pending_deposit(session, customer.id, "6")
        workflow = DepositWorkflow.with_session(session)
        async with atomic(session):
            await workflow.reject_deposit(first.id)

        pending = await workflow.list_deposits()
        everything = await workflow.list_deposits(status="all")
        mine = await workflow.list_user_deposits(customer.id)

        assert [d.amount for d in pending] == [Decimal("6.00")]
        assert len(everything) == 2
        assert len(mine) == 2

    async def test_quote_uses_stored_rate(self, session, customer):
        async with atomic(session):
            await CurrencyConverter.with_session(session).set_rate("90")

        deposit = await _pending_deposit(session, customer.id, "2")

        assert deposit.amount_inr == 180


def test_ledger_errors_share_base():
    assert issubclass(AlreadyFinalizedError, LedgerError)
    assert AlreadyFinalizedError.status_code == 409
    assert StoreUnavailableError.code == "store_unavailable"
