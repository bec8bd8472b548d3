"""Domain models for service orders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderPaymentMethod(str, Enum):
    WALLET = "wallet"
    EXTERNAL = "external"


@dataclass(slots=True)
class Order:
    id: str
    user_id: Optional[str]
    platform: str
    service: str
    link: Optional[str]
    quantity: int
    total: Decimal
    status: OrderStatus
    payment_method: OrderPaymentMethod
    name: str
    email: str
    message: Optional[str]
    screenshot: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime]


@dataclass(slots=True)
class OrderCreateInput:
    platform: str
    service: str
    quantity: int
    total: Decimal
    name: str
    email: str
    user_id: Optional[str] = None
    link: Optional[str] = None
    message: Optional[str] = None
    screenshot: Optional[str] = None


@dataclass(slots=True)
class PlacedOrder:
    order: Order
    balance: Optional[Decimal] = None
