"""Order domain service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Order as OrderModel
from app.infrastructure.database.repositories.order_repository import SqlOrderRepository
from app.modules.common import InvalidAmountError, MissingProofError, OrderNotFoundError, to_amount
from app.modules.settlement import SettlementService

from .models import Order, OrderCreateInput, OrderPaymentMethod, OrderStatus, PlacedOrder
from .repository import OrderRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OrderService:
    repository: OrderRepository
    settlement: SettlementService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "OrderService":
        return cls(SqlOrderRepository(session), SettlementService.with_session(session))

    async def place_order(self, payload: OrderCreateInput, *, pay_with_wallet: bool = False) -> PlacedOrder:
        """Create an order, settling it from the wallet when requested.

        Wallet orders and their debit live in the caller's unit of work: a
        refused settlement propagates and the order row is rolled back with it.
        """
        total = to_amount(payload.total)
        if total <= 0:
            raise InvalidAmountError("Order total must be positive")
        if payload.quantity < 1:
            raise InvalidAmountError("Order quantity must be at least 1")

        if pay_with_wallet:
            if payload.user_id is None:
                raise ValueError("Wallet payment requires a signed-in user")
            payment_method = OrderPaymentMethod.WALLET
        else:
            if not payload.screenshot or not payload.screenshot.strip():
                raise MissingProofError("Payment screenshot is required")
            payment_method = OrderPaymentMethod.EXTERNAL

        model = await self.repository.create(
            user_id=payload.user_id,
            platform=payload.platform,
            service=payload.service,
            link=payload.link,
            quantity=payload.quantity,
            total=total,
            status=OrderStatus.PENDING.value,
            payment_method=payment_method.value,
            name=payload.name,
            email=payload.email,
            message=payload.message,
            screenshot=payload.screenshot,
        )
        order = self._to_domain(model)

        balance = None
        if pay_with_wallet:
            result = await self.settlement.settle_purchase(payload.user_id, total, order.id)
            balance = result.balance

        logger.info("Order %s placed (%s, $%s)", order.id, payment_method.value, total)
        return PlacedOrder(order=order, balance=balance)

    async def get_order(self, order_id: str) -> Order:
        model = await self.repository.get_order(order_id)
        if model is None:
            raise OrderNotFoundError(f"Order {order_id} not found")
        return self._to_domain(model)

    async def list_user_orders(self, user_id: str, limit: int = 20, offset: int = 0) -> list[Order]:
        rows = await self.repository.list_by_user(user_id, limit, offset)
        return [self._to_domain(row) for row in rows]

    async def list_orders_by_email(self, email: str) -> list[Order]:
        rows = await self.repository.list_by_email(email.strip())
        return [self._to_domain(row) for row in rows]

    async def list_orders(self, status: str | None = None, limit: int = 50, offset: int = 0) -> list[Order]:
        rows = await self.repository.list_orders_all(status=status, limit=limit, offset=offset)
        return [self._to_domain(row) for row in rows]

    async def update_status(self, order_id: str, status: OrderStatus | str) -> Order:
        status = OrderStatus(status)
        model = await self.repository.update_status(order_id, status=status.value)
        if model is None:
            raise OrderNotFoundError(f"Order {order_id} not found")
        logger.info("Order %s moved to %s", order_id, status.value)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: OrderModel) -> Order:
        return Order(
            id=model.id,
            user_id=model.user_id,
            platform=model.platform,
            service=model.service,
            link=model.link,
            quantity=model.quantity,
            total=Decimal(model.total),
            status=OrderStatus(model.status),
            payment_method=OrderPaymentMethod(model.payment_method),
            name=model.name,
            email=model.email,
            message=model.message,
            screenshot=model.screenshot,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
