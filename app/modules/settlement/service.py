"""Purchase settlement: paying an order from the wallet balance."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.common import AlreadyFinalizedError, InsufficientBalanceError, InvalidAmountError, to_amount
from app.modules.wallets import TransactionRecord, TransactionType, WalletService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SettlementResult:
    order_id: str
    balance: Decimal
    transaction: TransactionRecord


@dataclass(slots=True)
class SettlementService:
    wallets: WalletService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "SettlementService":
        return cls(WalletService.with_session(session))

    async def settle_purchase(
        self,
        user_id: str,
        amount: Decimal | int | float | str,
        order_id: str,
    ) -> SettlementResult:
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidAmountError("Purchase amount must be positive")

        if await self.wallets.find_transaction(TransactionType.PURCHASE, order_id) is not None:
            raise AlreadyFinalizedError(f"Order {order_id} is already paid")

        wallet = await self.wallets.get_or_create_wallet(user_id)
        if wallet.balance < amount:
            logger.warning(
                "Purchase for order %s refused: balance %s below %s", order_id, wallet.balance, amount
            )
            raise InsufficientBalanceError(
                f"Insufficient balance: ${wallet.balance:.2f} available, ${amount:.2f} required"
            )

        # adjust_balance re-checks balance >= amount inside the UPDATE
        balance = await self.wallets.adjust_balance(user_id, -amount)
        transaction = await self.wallets.record_transaction(
            user_id=user_id,
            type=TransactionType.PURCHASE,
            amount=-amount,
            description=f"Purchase of services for ${amount:.2f} (order {order_id})",
            reference_id=order_id,
        )
        logger.info("Order %s settled from wallet of user %s, balance now %s", order_id, user_id, balance)
        return SettlementResult(order_id=order_id, balance=balance, transaction=transaction)
