"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Account as AccountModel


class SqlAccountRepository:
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.username == username)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.email == email)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_accounts(self) -> Sequence[AccountModel]:
        stmt = select(AccountModel).order_by(AccountModel.created_at.desc())
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        role: str,
        name: str | None,
        email: str | None,
        is_active: bool,
    ) -> AccountModel:
        model = AccountModel(
            username=username,
            password_hash=password_hash,
            role=role,
            name=name,
            email=email,
            is_active=is_active,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return model

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(last_login_at=timestamp)
        )
        await self._session.execute(stmt)
