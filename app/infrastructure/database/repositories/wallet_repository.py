"""SQLAlchemy implementation for wallet domain"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from sqlalchemy import desc, func, insert, select, type_coerce, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import MONEY, Wallet, WalletTransaction


class SqlWalletRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, user_id: str) -> Wallet | None:
        stmt = (
            select(Wallet)
            .where(Wallet.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create_wallet_if_missing(self, user_id: str, currency: str) -> None:
        values = {"user_id": user_id, "balance": Decimal("0"), "currency": currency}
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql.insert(Wallet).values(**values).on_conflict_do_nothing(
                index_elements=[Wallet.user_id]
            )
        elif dialect == "sqlite":
            stmt = sqlite.insert(Wallet).values(**values).on_conflict_do_nothing(
                index_elements=[Wallet.user_id]
            )
        else:
            try:
                async with self.session.begin_nested():
                    await self.session.execute(insert(Wallet).values(**values))
            except IntegrityError:
                pass  # created concurrently
            return
        await self.session.execute(stmt)

    async def update_balance(self, user_id: str, delta: Decimal) -> Decimal | None:
        """Apply ``delta`` in one statement; ``None`` if the result would be negative.

        Both sides are integer cents in the store, so the guard is exact.
        """
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id)
            .where(Wallet.balance + delta >= 0)
            .values(balance=Wallet.balance + delta)
            .returning(Wallet.balance)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_transaction(
        self,
        *,
        user_id: str,
        type: str,
        amount: Decimal,
        description: str,
        reference_id: str | None,
    ) -> WalletTransaction:
        tx = WalletTransaction(
            user_id=user_id,
            type=type,
            amount=amount,
            description=description,
            reference_id=reference_id,
        )
        self.session.add(tx)
        await self.session.flush()
        await self.session.refresh(tx)
        return tx

    async def get_transaction_by_reference(self, type: str, reference_id: str) -> WalletTransaction | None:
        stmt = select(WalletTransaction).where(
            WalletTransaction.type == type,
            WalletTransaction.reference_id == reference_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_transactions(self, user_id: str, limit: int, offset: int) -> Sequence[WalletTransaction]:
        stmt = (
            select(WalletTransaction)
            .where(WalletTransaction.user_id == user_id)
            .order_by(desc(WalletTransaction.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_all_transactions(
        self,
        *,
        type: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[WalletTransaction]:
        stmt = select(WalletTransaction)
        if type and type != "all":
            stmt = stmt.where(WalletTransaction.type == type)
        stmt = stmt.order_by(desc(WalletTransaction.created_at)).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def sum_transactions(self, user_id: str) -> Decimal:
        total = type_coerce(func.coalesce(func.sum(WalletTransaction.amount), 0), MONEY)
        stmt = select(total).where(WalletTransaction.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()
