"""Domain models for wallet deposits."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from app.modules.wallets.models import TransactionRecord


class DepositStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not DepositStatus.PENDING


class PaymentMethod(str, Enum):
    QR = "qr"
    CRYPTO = "crypto"

    @property
    def label(self) -> str:
        return "QR/UPI" if self is PaymentMethod.QR else "Cryptocurrency"


class ReviewAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


@dataclass(slots=True)
class Deposit:
    id: str
    user_id: str
    amount: Decimal
    amount_inr: Optional[int]
    payment_method: PaymentMethod
    currency: Optional[str]
    status: DepositStatus
    proof_image: str
    created_at: datetime
    updated_at: Optional[datetime]


@dataclass(slots=True)
class DepositApproval:
    deposit: Deposit
    balance: Decimal
    transaction: TransactionRecord
