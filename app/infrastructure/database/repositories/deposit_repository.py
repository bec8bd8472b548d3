"""SQLAlchemy implementation for deposit repository"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Deposit


class SqlDepositRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        user_id: str,
        amount: Decimal,
        amount_inr: int | None,
        payment_method: str,
        currency: str | None,
        status: str,
        proof_image: str,
    ) -> Deposit:
        deposit = Deposit(
            user_id=user_id,
            amount=amount,
            amount_inr=amount_inr,
            payment_method=payment_method,
            currency=currency,
            status=status,
            proof_image=proof_image,
        )
        self.session.add(deposit)
        await self.session.flush()
        await self.session.refresh(deposit)
        return deposit

    async def get_deposit(self, deposit_id: str) -> Deposit | None:
        stmt = (
            select(Deposit)
            .where(Deposit.id == deposit_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def transition_status(self, deposit_id: str, *, from_status: str, to_status: str) -> Deposit | None:
        """Move a deposit between states in one conditional statement.

        Returns ``None`` when the deposit is no longer in ``from_status``;
        of two concurrent callers only one sees the row.
        """
        stmt = (
            update(Deposit)
            .where(Deposit.id == deposit_id, Deposit.status == from_status)
            .values(status=to_status)
            .returning(Deposit.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            return None
        return await self.get_deposit(deposit_id)

    async def list_deposits(
        self,
        user_id: str,
        limit: int,
        offset: int,
        status: str | None = None,
    ) -> Sequence[Deposit]:
        stmt = select(Deposit).where(Deposit.user_id == user_id)
        if status and status != "all":
            stmt = stmt.where(Deposit.status == status)
        stmt = stmt.order_by(desc(Deposit.created_at)).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_deposits_all(
        self,
        *,
        status: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[Deposit]:
        stmt = select(Deposit)
        if status and status != "all":
            stmt = stmt.where(Deposit.status == status)
        stmt = stmt.order_by(desc(Deposit.created_at)).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()
