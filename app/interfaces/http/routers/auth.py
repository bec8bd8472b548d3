"""Authentication endpoints for customers and staff."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token
from app.infrastructure.database import atomic
from app.interfaces.http.deps import get_account_service, get_db_session
from app.modules.accounts import (
    Account,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountRole,
    AccountService,
)
from app.modules.wallets import WalletService
from app.schemas import AccountLoginResponse, LoginRequest, RegisterRequest

router = APIRouter()


def _login_response(account: Account) -> AccountLoginResponse:
    access_token = create_access_token(account.id, account.username, account.role)
    return AccountLoginResponse(
        access_token=access_token,
        account_id=account.id,
        username=account.username,
        role=account.role,
        is_super_admin=account.is_super_admin(),
    )


@router.post(
    "/register",
    response_model=AccountLoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer account",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    account_service: AccountService = Depends(get_account_service),
):
    try:
        async with atomic(db):
            account = await account_service.create_account(
                AccountCreateInput(
                    username=payload.username,
                    password=payload.password,
                    role=AccountRole.CUSTOMER.value,
                    name=payload.name,
                    email=payload.email,
                )
            )
            await WalletService.with_session(db).get_or_create_wallet(account.id)
    except AccountAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return _login_response(account)


@router.post("/login", response_model=AccountLoginResponse, summary="Customer login")
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    account_service: AccountService = Depends(get_account_service),
):
    account = await account_service.authenticate(payload.username, payload.password)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    async with atomic(db):
        await account_service.set_last_login(account.id)
    return _login_response(account)


@router.post("/admin/login", response_model=AccountLoginResponse, summary="Staff login")
async def admin_login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    account_service: AccountService = Depends(get_account_service),
):
    account = await account_service.authenticate(payload.username, payload.password)
    if account is None or not account.is_admin():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid admin credentials")

    async with atomic(db):
        await account_service.set_last_login(account.id)
    return _login_response(account)
