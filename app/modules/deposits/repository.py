"""Repository interface for deposits."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from app.db.models import Deposit as DepositModel


class DepositRepository(Protocol):
    async def create(
        self,
        *,
        user_id: str,
        amount: Decimal,
        amount_inr: int | None,
        payment_method: str,
        currency: str | None,
        status: str,
        proof_image: str,
    ) -> DepositModel:
        ...

    async def get_deposit(self, deposit_id: str) -> DepositModel | None:
        ...

    async def transition_status(self, deposit_id: str, *, from_status: str, to_status: str) -> DepositModel | None:
        ...

    async def list_deposits(
        self,
        user_id: str,
        limit: int,
        offset: int,
        status: str | None = None,
    ) -> Sequence[DepositModel]:
        ...

    async def list_deposits_all(self, *, status: str | None, limit: int, offset: int) -> Sequence[DepositModel]:
        ...
