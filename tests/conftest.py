"""Shared fixtures: a fresh sqlite database per test and an API client bound to it."""

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.security import create_access_token
from app.db import models  # noqa: F401
from app.infrastructure.database import Base, atomic
from app.interfaces.http.deps import get_db_session
from app.main import create_app
from app.modules.accounts import AccountCreateInput, AccountRole, AccountService
from app.modules.wallets import TransactionType, WalletService


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


async def _create_account(session, username: str, role: str = AccountRole.CUSTOMER.value):
    service = AccountService.with_session(session)
    account = await service.create_account(
        AccountCreateInput(
            username=username,
            password="secret123",
            role=role,
            email=f"{username}@example.com",
        )
    )
    await session.commit()
    return account


@pytest.fixture
async def customer(session):
    return await _create_account(session, "alice")


@pytest.fixture
async def admin(session):
    return await _create_account(session, "root", AccountRole.SUPER_ADMIN.value)


@pytest.fixture
def fund_wallet(session):
    """Credit a wallet the way an approved deposit would, keeping the ledger consistent."""

    async def _fund(user_id: str, amount: str, reference_id: str = "seed-deposit") -> Decimal:
        wallets = WalletService.with_session(session)
        balance = await wallets.adjust_balance(user_id, Decimal(amount))
        await wallets.record_transaction(
            user_id=user_id,
            type=TransactionType.DEPOSIT,
            amount=Decimal(amount),
            description=f"Seed deposit of ${amount}",
            reference_id=reference_id,
        )
        await session.commit()
        return balance

    return _fund


@pytest.fixture
async def client(session_factory):
    app = create_app()

    async def _override_session():
        async with session_factory() as db:
            async with atomic(db):
                yield db

    app.dependency_overrides[get_db_session] = _override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http


@pytest.fixture
def headers_for():
    def _headers(account) -> dict[str, str]:
        token = create_access_token(account.id, account.username, account.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers
