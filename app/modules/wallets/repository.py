"""Repository protocol for wallet operations."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from app.db.models import Wallet as WalletModel, WalletTransaction as WalletTransactionModel


class WalletRepository(Protocol):
    async def get_wallet(self, user_id: str) -> WalletModel | None:
        ...

    async def create_wallet_if_missing(self, user_id: str, currency: str) -> None:
        ...

    async def update_balance(self, user_id: str, delta: Decimal) -> Decimal | None:
        ...

    async def add_transaction(
        self,
        *,
        user_id: str,
        type: str,
        amount: Decimal,
        description: str,
        reference_id: str | None,
    ) -> WalletTransactionModel:
        ...

    async def get_transaction_by_reference(self, type: str, reference_id: str) -> WalletTransactionModel | None:
        ...

    async def list_transactions(self, user_id: str, limit: int, offset: int) -> Sequence[WalletTransactionModel]:
        ...

    async def list_all_transactions(
        self,
        *,
        type: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[WalletTransactionModel]:
        ...

    async def sum_transactions(self, user_id: str) -> Decimal:
        ...
