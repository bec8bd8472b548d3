"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    PURCHASE = "purchase"


@dataclass(slots=True)
class WalletSnapshot:
    user_id: str
    balance: Decimal
    currency: str
    updated_at: Optional[datetime]


@dataclass(slots=True)
class TransactionRecord:
    id: str
    user_id: str
    type: TransactionType
    amount: Decimal
    description: str
    reference_id: Optional[str]
    created_at: datetime


@dataclass(slots=True)
class BalanceCheck:
    has_balance: bool
    balance: Decimal


@dataclass(slots=True)
class Reconciliation:
    user_id: str
    balance: Decimal
    ledger_total: Decimal

    @property
    def consistent(self) -> bool:
        return self.balance == self.ledger_total
