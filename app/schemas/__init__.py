"""Pydantic schemas used across the project."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.deposits import DepositStatus, PaymentMethod, ReviewAction
from app.modules.orders import OrderPaymentMethod, OrderStatus
from app.modules.wallets import TransactionType


class TokenData(BaseModel):
    account_id: str
    username: str
    role: str


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=100)


class AccountLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account_id: str
    username: str
    role: str
    is_super_admin: bool = False


class AccountCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)
    name: Optional[str] = None
    email: Optional[str] = None
    role: str = "admin"


class AccountResponse(BaseModel):
    id: str
    username: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str


class WalletSnapshotResponse(BaseModel):
    user_id: str
    balance: Decimal
    currency: str
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransactionResponse(BaseModel):
    id: str
    user_id: str
    type: TransactionType
    amount: Decimal
    description: str
    reference_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse] = Field(default_factory=list)


class ReconciliationResponse(BaseModel):
    user_id: str
    balance: Decimal
    ledger_total: Decimal
    consistent: bool


class DepositCreateRequest(BaseModel):
    amount: Decimal = Field(..., description="Deposit amount in USD")
    payment_method: PaymentMethod
    amount_inr: Optional[int] = Field(None, description="Rupees actually paid for QR/UPI deposits")
    currency: Optional[str] = Field(None, max_length=16, description="Crypto asset code, e.g. USDT")
    proof_image: Optional[str] = Field(None, description="Payment screenshot reference")


class DepositResponse(BaseModel):
    id: str
    user_id: str
    amount: Decimal
    amount_inr: Optional[int] = None
    payment_method: PaymentMethod
    currency: Optional[str] = None
    status: DepositStatus
    proof_image: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class DepositListResponse(BaseModel):
    deposits: list[DepositResponse] = Field(default_factory=list)


class DepositReviewRequest(BaseModel):
    action: ReviewAction


class DepositApprovalResponse(BaseModel):
    deposit: DepositResponse
    balance: Decimal
    transaction: TransactionResponse


class ConversionResponse(BaseModel):
    amount_usd: Decimal
    amount_inr: int
    rate: Decimal


class ExchangeRateResponse(BaseModel):
    rate: Decimal


class ExchangeRateUpdate(BaseModel):
    rate: Decimal = Field(..., gt=0)


class OrderCreateRequest(BaseModel):
    platform: str = Field(..., min_length=1, max_length=50)
    service: str = Field(..., min_length=1, max_length=100)
    link: Optional[str] = None
    quantity: int = Field(..., ge=1)
    total: Decimal
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=100)
    message: Optional[str] = None
    screenshot: Optional[str] = None


class CustomerOrderRequest(OrderCreateRequest):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    pay_with_wallet: bool = True


class OrderResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    platform: str
    service: str
    link: Optional[str] = None
    quantity: int
    total: Decimal
    status: OrderStatus
    payment_method: OrderPaymentMethod
    name: str
    email: str
    message: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrderListResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class PlacedOrderResponse(BaseModel):
    order: OrderResponse
    balance: Optional[Decimal] = None
