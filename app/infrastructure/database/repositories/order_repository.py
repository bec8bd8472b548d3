"""SQLAlchemy implementation for order repository"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Order


class SqlOrderRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        user_id: str | None,
        platform: str,
        service: str,
        link: str | None,
        quantity: int,
        total: Decimal,
        status: str,
        payment_method: str,
        name: str,
        email: str,
        message: str | None,
        screenshot: str | None,
    ) -> Order:
        order = Order(
            user_id=user_id,
            platform=platform,
            service=service,
            link=link,
            quantity=quantity,
            total=total,
            status=status,
            payment_method=payment_method,
            name=name,
            email=email,
            message=message,
            screenshot=screenshot,
        )
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)
        return order

    async def get_order(self, order_id: str) -> Order | None:
        stmt = select(Order).where(Order.id == order_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def update_status(self, order_id: str, *, status: str) -> Order | None:
        stmt = (
            update(Order)
            .where(Order.id == order_id)
            .values(status=status)
            .returning(Order.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            return None
        return await self.get_order(order_id)

    async def list_by_user(self, user_id: str, limit: int, offset: int) -> Sequence[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(desc(Order.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_by_email(self, email: str) -> Sequence[Order]:
        stmt = (
            select(Order)
            .where(func.lower(Order.email) == email.lower())
            .order_by(desc(Order.created_at))
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_orders_all(
        self,
        *,
        status: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[Order]:
        stmt = select(Order)
        if status and status != "all":
            stmt = stmt.where(Order.status == status)
        stmt = stmt.order_by(desc(Order.created_at)).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()
