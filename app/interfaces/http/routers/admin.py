"""Administrative endpoints: deposit review, wallets, orders and settings."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin, get_super_admin
from app.infrastructure.database import atomic
from app.interfaces.http.deps import get_db_session
from app.modules.accounts import (
    Account as AccountDomain,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountService,
)
from app.modules.currency import CurrencyConverter
from app.modules.deposits import DepositApproval, DepositWorkflow
from app.modules.orders import OrderService
from app.modules.wallets import WalletService
from app.schemas import (
    AccountCreate,
    AccountResponse,
    DepositApprovalResponse,
    DepositListResponse,
    DepositResponse,
    DepositReviewRequest,
    ExchangeRateResponse,
    ExchangeRateUpdate,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
    ReconciliationResponse,
    TransactionListResponse,
    TransactionResponse,
    WalletSnapshotResponse,
)

router = APIRouter()


@router.get("/me", response_model=AccountResponse)
async def current_admin(admin: AccountDomain = Depends(get_current_admin)):
    return AccountResponse.model_validate(admin)


@router.get("/deposits", response_model=DepositListResponse)
async def admin_list_deposits(
    status_filter: Optional[str] = "pending",
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> DepositListResponse:
    workflow = DepositWorkflow.with_session(db)
    deposits = await workflow.list_deposits(status=status_filter, limit=limit, offset=offset)
    return DepositListResponse(deposits=[DepositResponse.model_validate(item) for item in deposits])


@router.get("/deposits/{deposit_id}", response_model=DepositResponse)
async def admin_get_deposit(
    deposit_id: str,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> DepositResponse:
    deposit = await DepositWorkflow.with_session(db).get_deposit(deposit_id)
    return DepositResponse.model_validate(deposit)


@router.post("/deposits/{deposit_id}/approve", response_model=DepositApprovalResponse)
async def admin_approve_deposit(
    deposit_id: str,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> DepositApprovalResponse:
    workflow = DepositWorkflow.with_session(db)
    async with atomic(db):
        approval = await workflow.approve_deposit(deposit_id)
    return _approval_to_response(approval)


@router.post("/deposits/{deposit_id}/reject", response_model=DepositResponse)
async def admin_reject_deposit(
    deposit_id: str,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> DepositResponse:
    workflow = DepositWorkflow.with_session(db)
    async with atomic(db):
        deposit = await workflow.reject_deposit(deposit_id)
    return DepositResponse.model_validate(deposit)


@router.post("/deposits/{deposit_id}/review", response_model=DepositResponse)
async def admin_review_deposit(
    deposit_id: str,
    payload: DepositReviewRequest,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> DepositResponse:
    workflow = DepositWorkflow.with_session(db)
    async with atomic(db):
        deposit = await workflow.review_deposit(deposit_id, payload.action)
    return DepositResponse.model_validate(deposit)


@router.get("/wallet/balance", response_model=WalletSnapshotResponse)
async def admin_wallet_balance(
    user_id: str,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> WalletSnapshotResponse:
    await AccountService.with_session(db).require(user_id)
    async with atomic(db):
        snapshot = await WalletService.with_session(db).get_or_create_wallet(user_id)
    return WalletSnapshotResponse.model_validate(snapshot)


@router.get("/wallet/transactions", response_model=TransactionListResponse)
async def admin_wallet_transactions(
    user_id: str,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> TransactionListResponse:
    records = await WalletService.with_session(db).list_transactions(user_id, limit, offset)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(record) for record in records]
    )


@router.get("/wallet/reconcile", response_model=ReconciliationResponse)
async def admin_wallet_reconcile(
    user_id: str,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> ReconciliationResponse:
    await AccountService.with_session(db).require(user_id)
    report = await WalletService.with_session(db).reconcile(user_id)
    return ReconciliationResponse(
        user_id=report.user_id,
        balance=report.balance,
        ledger_total=report.ledger_total,
        consistent=report.consistent,
    )


@router.get("/transactions", response_model=TransactionListResponse)
async def admin_list_transactions(
    type_filter: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> TransactionListResponse:
    records = await WalletService.with_session(db).list_all_transactions(type=type_filter, limit=limit, offset=offset)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(record) for record in records]
    )


@router.get("/orders", response_model=OrderListResponse)
async def admin_list_orders(
    status_filter: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> OrderListResponse:
    orders = await OrderService.with_session(db).list_orders(status=status_filter, limit=limit, offset=offset)
    return OrderListResponse(orders=[OrderResponse.model_validate(order) for order in orders])


@router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def admin_update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    service = OrderService.with_session(db)
    async with atomic(db):
        order = await service.update_status(order_id, payload.status)
    return OrderResponse.model_validate(order)


@router.get("/settings/usd-inr-rate", response_model=ExchangeRateResponse)
async def admin_get_rate(
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> ExchangeRateResponse:
    return ExchangeRateResponse(rate=await CurrencyConverter.with_session(db).get_rate())


@router.put("/settings/usd-inr-rate", response_model=ExchangeRateResponse)
async def admin_set_rate(
    payload: ExchangeRateUpdate,
    _: AccountDomain = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db_session),
) -> ExchangeRateResponse:
    converter = CurrencyConverter.with_session(db)
    async with atomic(db):
        rate = await converter.set_rate(payload.rate)
    return ExchangeRateResponse(rate=rate)


@router.get("/accounts", response_model=List[AccountResponse])
async def list_accounts(
    _: AccountDomain = Depends(get_super_admin),
    db: AsyncSession = Depends(get_db_session),
):
    accounts = await AccountService.with_session(db).list_accounts()
    return [AccountResponse.model_validate(account) for account in accounts]


@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(
    payload: AccountCreate,
    _: AccountDomain = Depends(get_super_admin),
    db: AsyncSession = Depends(get_db_session),
):
    account_service = AccountService.with_session(db)
    try:
        async with atomic(db):
            account = await account_service.create_account(
                AccountCreateInput(
                    username=payload.username,
                    password=payload.password,
                    role=payload.role,
                    name=payload.name,
                    email=payload.email,
                )
            )
    except AccountAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return AccountResponse.model_validate(account)


def _approval_to_response(approval: DepositApproval) -> DepositApprovalResponse:
    return DepositApprovalResponse(
        deposit=DepositResponse.model_validate(approval.deposit),
        balance=approval.balance,
        transaction=TransactionResponse.model_validate(approval.transaction),
    )
