"""Domain services for account management."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Account as AccountModel
from app.infrastructure.database.repositories.account_repository import SqlAccountRepository

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError
from .models import Account, AccountCreateInput, AccountRole
from .passwords import hash_password, verify_password
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        return cls(SqlAccountRepository(session))

    async def get_by_id(self, account_id: str) -> Account | None:
        return self._to_domain(await self._repository.get_by_id(account_id))

    async def require(self, account_id: str) -> Account:
        account = await self.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account not found: {account_id}")
        return account

    async def get_by_username(self, username: str) -> Account | None:
        return self._to_domain(await self._repository.get_by_username(username))

    async def list_accounts(self) -> list[Account]:
        rows = await self._repository.list_accounts()
        return [self._to_domain(row) for row in rows]

    async def authenticate(self, username: str, password: str) -> Account | None:
        account = await self.get_by_username(username)
        if account is None or not account.is_active:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def create_account(self, payload: AccountCreateInput) -> Account:
        if payload.role not in {role.value for role in AccountRole}:
            raise ValueError(f"Unknown role: {payload.role}")

        existing = await self._repository.get_by_username(payload.username)
        if existing is not None:
            raise AccountAlreadyExistsError(f"Username already taken: {payload.username}")
        if payload.email and await self._repository.get_by_email(payload.email) is not None:
            raise AccountAlreadyExistsError(f"Email already registered: {payload.email}")

        model = await self._repository.create_account(
            username=payload.username,
            password_hash=hash_password(payload.password),
            role=payload.role,
            name=payload.name,
            email=payload.email,
            is_active=payload.is_active,
        )
        logger.info("Account %s created with role %s", model.id, model.role)
        return self._to_domain(model)

    async def set_last_login(self, account_id: str) -> None:
        await self._repository.set_last_login(account_id, datetime.now(timezone.utc))

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            username=model.username,
            role=model.role or AccountRole.CUSTOMER.value,
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            name=model.name,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login_at=model.last_login_at,
        )
