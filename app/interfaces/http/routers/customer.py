"""Customer-facing endpoints: wallet, deposits and wallet-paid orders."""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_customer
from app.infrastructure.database import atomic
from app.interfaces.http.deps import get_db_session
from app.modules.accounts import Account as AccountDomain
from app.modules.currency import CurrencyConverter
from app.modules.deposits import DepositWorkflow
from app.modules.orders import OrderCreateInput, OrderService
from app.modules.wallets import WalletService
from app.schemas import (
    AccountResponse,
    ConversionResponse,
    CustomerOrderRequest,
    DepositCreateRequest,
    DepositListResponse,
    DepositResponse,
    OrderListResponse,
    OrderResponse,
    PlacedOrderResponse,
    TransactionListResponse,
    TransactionResponse,
    WalletSnapshotResponse,
)

router = APIRouter()


@router.get("/me", response_model=AccountResponse, summary="Current customer profile")
async def customer_profile(account: AccountDomain = Depends(get_current_customer)) -> AccountResponse:
    return AccountResponse.model_validate(account)


@router.get("/wallet", response_model=WalletSnapshotResponse, summary="Wallet balance")
async def get_wallet_snapshot(
    account: AccountDomain = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db_session),
) -> WalletSnapshotResponse:
    async with atomic(db):
        snapshot = await WalletService.with_session(db).get_or_create_wallet(account.id)
    return WalletSnapshotResponse.model_validate(snapshot)


@router.get("/wallet/transactions", response_model=TransactionListResponse, summary="Wallet history")
async def list_wallet_transactions(
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    account: AccountDomain = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db_session),
) -> TransactionListResponse:
    records = await WalletService.with_session(db).list_transactions(account.id, limit, offset)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(record) for record in records]
    )


@router.post(
    "/deposits",
    response_model=DepositResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a deposit request for review",
)
async def create_deposit(
    payload: DepositCreateRequest,
    account: AccountDomain = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db_session),
) -> DepositResponse:
    workflow = DepositWorkflow.with_session(db)
    async with atomic(db):
        deposit = await workflow.create_deposit_request(
            user_id=account.id,
            amount=payload.amount,
            method=payload.payment_method,
            proof_image=payload.proof_image,
            amount_inr=payload.amount_inr,
            currency=payload.currency,
        )
    return DepositResponse.model_validate(deposit)


@router.get("/deposits", response_model=DepositListResponse, summary="Own deposit requests")
async def list_deposits(
    status_filter: Optional[str] = None,
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    account: AccountDomain = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db_session),
) -> DepositListResponse:
    workflow = DepositWorkflow.with_session(db)
    deposits = await workflow.list_user_deposits(account.id, limit, offset, status_filter)
    return DepositListResponse(deposits=[DepositResponse.model_validate(item) for item in deposits])


@router.get("/currency/convert", response_model=ConversionResponse, summary="Quote a USD amount in INR")
async def convert_currency(
    amount_usd: Decimal,
    _: AccountDomain = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db_session),
) -> ConversionResponse:
    converter = CurrencyConverter.with_session(db)
    amount_inr = await converter.convert(amount_usd)
    return ConversionResponse(amount_usd=amount_usd, amount_inr=amount_inr, rate=await converter.get_rate())


@router.post(
    "/orders",
    response_model=PlacedOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order, paid from the wallet by default",
)
async def place_order(
    payload: CustomerOrderRequest,
    account: AccountDomain = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db_session),
) -> PlacedOrderResponse:
    email = payload.email or account.email
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required")

    service = OrderService.with_session(db)
    async with atomic(db):
        placed = await service.place_order(
            OrderCreateInput(
                platform=payload.platform,
                service=payload.service,
                quantity=payload.quantity,
                total=payload.total,
                name=payload.name or account.name or account.username,
                email=email,
                user_id=account.id,
                link=payload.link,
                message=payload.message,
                screenshot=payload.screenshot,
            ),
            pay_with_wallet=payload.pay_with_wallet,
        )
    return PlacedOrderResponse(order=OrderResponse.model_validate(placed.order), balance=placed.balance)


@router.get("/orders", response_model=OrderListResponse, summary="Own orders")
async def list_orders(
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    account: AccountDomain = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db_session),
) -> OrderListResponse:
    orders = await OrderService.with_session(db).list_user_orders(account.id, limit, offset)
    return OrderListResponse(orders=[OrderResponse.model_validate(order) for order in orders])
