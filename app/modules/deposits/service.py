"""Deposit workflow: request, approve, reject.

A deposit is created ``pending`` and moves exactly once to ``completed`` or
``rejected``. Approval is the only path that credits a wallet, and it does so
only after the conditional ``pending -> completed`` update matched, so a
deposit can never be credited twice. The status change, the balance
increment and the ledger entry share the caller's session and are committed
together (see ``app.infrastructure.database.atomic``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.models import Deposit as DepositModel
from app.infrastructure.database.repositories.deposit_repository import SqlDepositRepository
from app.modules.common import (
    AlreadyFinalizedError,
    DepositNotFoundError,
    InvalidAmountError,
    MissingProofError,
    to_amount,
)
from app.modules.currency import CurrencyConverter
from app.modules.wallets import TransactionType, WalletService

from .models import Deposit, DepositApproval, DepositStatus, PaymentMethod, ReviewAction
from .repository import DepositRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepositWorkflow:
    repository: DepositRepository
    wallets: WalletService
    converter: CurrencyConverter
    min_deposit: Decimal = Decimal("1")
    crypto_currency: str = "USDT"

    @classmethod
    def with_session(cls, session: AsyncSession) -> "DepositWorkflow":
        settings = get_settings()
        return cls(
            repository=SqlDepositRepository(session),
            wallets=WalletService.with_session(session),
            converter=CurrencyConverter.with_session(session),
            min_deposit=settings.wallet.min_deposit,
            crypto_currency=settings.wallet.crypto_currency,
        )

    async def create_deposit_request(
        self,
        *,
        user_id: str,
        amount: Decimal | int | float | str,
        method: PaymentMethod | str,
        proof_image: Optional[str],
        amount_inr: Optional[int] = None,
        currency: Optional[str] = None,
    ) -> Deposit:
        method = PaymentMethod(method)
        amount = to_amount(amount)
        if amount < self.min_deposit:
            raise InvalidAmountError(f"Minimum deposit amount is ${self.min_deposit}")
        if proof_image is None or not proof_image.strip():
            raise MissingProofError()

        if method is PaymentMethod.QR:
            if amount_inr is None:
                amount_inr = await self.converter.convert(amount)
            elif isinstance(amount_inr, bool) or not isinstance(amount_inr, int) or amount_inr <= 0:
                raise InvalidAmountError("INR amount must be a positive whole number")
            currency = None
        else:
            amount_inr = None
            currency = (currency or self.crypto_currency).strip().upper()

        await self.wallets.get_or_create_wallet(user_id)
        model = await self.repository.create(
            user_id=user_id,
            amount=amount,
            amount_inr=amount_inr,
            payment_method=method.value,
            currency=currency,
            status=DepositStatus.PENDING.value,
            proof_image=proof_image,
        )
        logger.info("Deposit %s of $%s via %s requested by user %s", model.id, amount, method.value, user_id)
        return self._to_domain(model)

    async def approve_deposit(self, deposit_id: str) -> DepositApproval:
        await self.get_deposit(deposit_id)

        model = await self.repository.transition_status(
            deposit_id,
            from_status=DepositStatus.PENDING.value,
            to_status=DepositStatus.COMPLETED.value,
        )
        if model is None:
            logger.warning("Approval refused for deposit %s: already finalized", deposit_id)
            raise AlreadyFinalizedError(f"Deposit {deposit_id} is already finalized")

        deposit = self._to_domain(model)
        balance = await self.wallets.adjust_balance(deposit.user_id, deposit.amount)
        transaction = await self.wallets.record_transaction(
            user_id=deposit.user_id,
            type=TransactionType.DEPOSIT,
            amount=deposit.amount,
            description=f"Deposit of ${deposit.amount:.2f} via {deposit.payment_method.label}",
            reference_id=deposit.id,
        )
        logger.info(
            "Deposit %s approved: credited $%s to user %s, balance now %s",
            deposit.id,
            deposit.amount,
            deposit.user_id,
            balance,
        )
        return DepositApproval(deposit=deposit, balance=balance, transaction=transaction)

    async def reject_deposit(self, deposit_id: str) -> Deposit:
        await self.get_deposit(deposit_id)

        model = await self.repository.transition_status(
            deposit_id,
            from_status=DepositStatus.PENDING.value,
            to_status=DepositStatus.REJECTED.value,
        )
        if model is None:
            logger.warning("Rejection refused for deposit %s: already finalized", deposit_id)
            raise AlreadyFinalizedError(f"Deposit {deposit_id} is already finalized")

        logger.info("Deposit %s rejected", deposit_id)
        return self._to_domain(model)

    async def review_deposit(self, deposit_id: str, action: ReviewAction | str) -> Deposit:
        if ReviewAction(action) is ReviewAction.APPROVE:
            approval = await self.approve_deposit(deposit_id)
            return approval.deposit
        return await self.reject_deposit(deposit_id)

    async def get_deposit(self, deposit_id: str) -> Deposit:
        model = await self.repository.get_deposit(deposit_id)
        if model is None:
            raise DepositNotFoundError(f"Deposit {deposit_id} not found")
        return self._to_domain(model)

    async def list_user_deposits(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
        status: str | None = None,
    ) -> list[Deposit]:
        rows = await self.repository.list_deposits(user_id, limit, offset, status)
        return [self._to_domain(row) for row in rows]

    async def list_deposits(
        self,
        status: str | None = DepositStatus.PENDING.value,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Deposit]:
        rows = await self.repository.list_deposits_all(status=status, limit=limit, offset=offset)
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(model: DepositModel) -> Deposit:
        return Deposit(
            id=model.id,
            user_id=model.user_id,
            amount=Decimal(model.amount),
            amount_inr=model.amount_inr,
            payment_method=PaymentMethod(model.payment_method),
            currency=model.currency,
            status=DepositStatus(model.status),
            proof_image=model.proof_image,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
