"""Wallet domain service.

The wallet row is only ever changed through :meth:`WalletService.adjust_balance`,
a single ``balance = balance + delta`` statement guarded against going
negative. Every adjustment is paired with an appended transaction by the
caller so the balance stays equal to the signed sum of the ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.models import Wallet as WalletModel, WalletTransaction as WalletTransactionModel
from app.infrastructure.database.repositories.wallet_repository import SqlWalletRepository
from app.modules.common import InsufficientBalanceError, InvalidAmountError, to_amount

from .models import BalanceCheck, Reconciliation, TransactionRecord, TransactionType, WalletSnapshot
from .repository import WalletRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WalletService:
    repository: WalletRepository
    currency: str = "USD"

    @classmethod
    def with_session(cls, session: AsyncSession) -> "WalletService":
        return cls(SqlWalletRepository(session), currency=get_settings().wallet.currency)

    async def get_or_create_wallet(self, user_id: str) -> WalletSnapshot:
        wallet = await self.repository.get_wallet(user_id)
        if wallet is None:
            await self.repository.create_wallet_if_missing(user_id, self.currency)
            wallet = await self.repository.get_wallet(user_id)
            logger.debug("Wallet provisioned for user %s", user_id)
        return self._to_snapshot(wallet)

    async def get_balance(self, user_id: str) -> Decimal:
        snapshot = await self.get_or_create_wallet(user_id)
        return snapshot.balance

    async def has_sufficient_balance(self, user_id: str, amount: Decimal) -> BalanceCheck:
        balance = await self.get_balance(user_id)
        return BalanceCheck(has_balance=balance >= to_amount(amount), balance=balance)

    async def adjust_balance(self, user_id: str, delta: Decimal) -> Decimal:
        delta = to_amount(delta)
        if delta == 0:
            raise InvalidAmountError("Balance adjustment must be non-zero")

        await self.get_or_create_wallet(user_id)
        new_balance = await self.repository.update_balance(user_id, delta)
        if new_balance is None:
            logger.warning("Debit of %s refused for user %s: insufficient balance", -delta, user_id)
            raise InsufficientBalanceError()
        return Decimal(new_balance)

    async def record_transaction(
        self,
        *,
        user_id: str,
        type: TransactionType,
        amount: Decimal,
        description: str,
        reference_id: Optional[str] = None,
    ) -> TransactionRecord:
        amount = to_amount(amount)
        if type is TransactionType.DEPOSIT and amount <= 0:
            raise InvalidAmountError("Deposit transactions must be positive")
        if type is TransactionType.PURCHASE and amount >= 0:
            raise InvalidAmountError("Purchase transactions must be negative")

        row = await self.repository.add_transaction(
            user_id=user_id,
            type=type.value,
            amount=amount,
            description=description,
            reference_id=reference_id,
        )
        return self._to_transaction(row)

    async def find_transaction(self, type: TransactionType, reference_id: str) -> TransactionRecord | None:
        row = await self.repository.get_transaction_by_reference(type.value, reference_id)
        return self._to_transaction(row) if row else None

    async def list_transactions(self, user_id: str, limit: int = 20, offset: int = 0) -> list[TransactionRecord]:
        rows = await self.repository.list_transactions(user_id, limit, offset)
        return [self._to_transaction(row) for row in rows]

    async def list_all_transactions(
        self,
        type: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[TransactionRecord]:
        rows = await self.repository.list_all_transactions(type=type, limit=limit, offset=offset)
        return [self._to_transaction(row) for row in rows]

    async def reconcile(self, user_id: str) -> Reconciliation:
        balance = await self.get_balance(user_id)
        total = await self.repository.sum_transactions(user_id)
        report = Reconciliation(user_id=user_id, balance=balance, ledger_total=Decimal(total))
        if not report.consistent:
            logger.error(
                "Wallet %s out of balance: balance=%s ledger=%s", user_id, report.balance, report.ledger_total
            )
        return report

    @staticmethod
    def _to_snapshot(model: WalletModel) -> WalletSnapshot:
        return WalletSnapshot(
            user_id=model.user_id,
            balance=Decimal(model.balance),
            currency=model.currency,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_transaction(model: WalletTransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            user_id=model.user_id,
            type=TransactionType(model.type),
            amount=Decimal(model.amount),
            description=model.description,
            reference_id=model.reference_id,
            created_at=model.created_at,
        )
