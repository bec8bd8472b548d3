"""Repository interface for orders."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from app.db.models import Order as OrderModel


class OrderRepository(Protocol):
    async def create(
        self,
        *,
        user_id: str | None,
        platform: str,
        service: str,
        link: str | None,
        quantity: int,
        total: Decimal,
        status: str,
        payment_method: str,
        name: str,
        email: str,
        message: str | None,
        screenshot: str | None,
    ) -> OrderModel:
        ...

    async def get_order(self, order_id: str) -> OrderModel | None:
        ...

    async def update_status(self, order_id: str, *, status: str) -> OrderModel | None:
        ...

    async def list_by_user(self, user_id: str, limit: int, offset: int) -> Sequence[OrderModel]:
        ...

    async def list_by_email(self, email: str) -> Sequence[OrderModel]:
        ...

    async def list_orders_all(self, *, status: str | None, limit: int, offset: int) -> Sequence[OrderModel]:
        ...
