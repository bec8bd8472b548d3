"""
Order service tests

Tests cover:
1. Guest orders paid externally
2. Wallet-paid orders and their rollback on refusal
3. Lookup by id, email and status updates
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.db.models import Order as OrderModel
from app.infrastructure.database import atomic
from app.modules.common import InsufficientBalanceError, InvalidAmountError, MissingProofError, OrderNotFoundError
from app.modules.orders import OrderCreateInput, OrderPaymentMethod, OrderService, OrderStatus
from app.modules.wallets import TransactionType, WalletService


def _order_input(**overrides) -> OrderCreateInput:
    values = dict(
        platform="instagram",
        service="followers",
        quantity=1000,
        total=Decimal("7.50"),
        name="Alice",
        email="Alice@Example.com",
        screenshot="upi-receipt.png",
    )
    values.update(overrides)
    return OrderCreateInput(**values)


class TestGuestOrders:
    async def test_external_order_is_pending(self, session):
        service = OrderService.with_session(session)

        async with atomic(session):
            placed = await service.place_order(_order_input())

        assert placed.balance is None
        assert placed.order.status is OrderStatus.PENDING
        assert placed.order.payment_method is OrderPaymentMethod.EXTERNAL
        assert placed.order.total == Decimal("7.50")
        assert placed.order.user_id is None

    async def test_external_order_requires_screenshot(self, session):
        with pytest.raises(MissingProofError):
            await OrderService.with_session(session).place_order(_order_input(screenshot=None))

    @pytest.mark.parametrize("overrides", [{"total": Decimal("0")}, {"total": Decimal("-1")}, {"quantity": 0}])
    async def test_invalid_order_values(self, session, overrides):
        with pytest.raises(InvalidAmountError):
            await OrderService.with_session(session).place_order(_order_input(**overrides))

    async def test_lookup_by_email_ignores_case(self, session):
        service = OrderService.with_session(session)
        async with atomic(session):
            await service.place_order(_order_input())
            await service.place_order(_order_input(email="bob@example.com"))

        orders = await service.list_orders_by_email("  alice@example.COM ")

        assert len(orders) == 1
        assert orders[0].email == "Alice@Example.com"

    async def test_status_update(self, session):
        service = OrderService.with_session(session)
        async with atomic(session):
            placed = await service.place_order(_order_input())

        async with atomic(session):
            updated = await service.update_status(placed.order.id, "completed")

        assert updated.status is OrderStatus.COMPLETED
        assert (await service.get_order(placed.order.id)).status is OrderStatus.COMPLETED
        assert [o.id for o in await service.list_orders(status="completed")] == [placed.order.id]
        assert await service.list_orders(status="pending") == []

    async def test_unknown_order(self, session):
        service = OrderService.with_session(session)

        with pytest.raises(OrderNotFoundError):
            await service.get_order("missing")
        with pytest.raises(OrderNotFoundError):
            await service.update_status("missing", OrderStatus.CANCELLED)

    async def test_unknown_status(self, session):
        with pytest.raises(ValueError):
            await OrderService.with_session(session).update_status("missing", "shipped")


class TestWalletOrders:
    async def test_wallet_order_debits_balance(self, session, customer, fund_wallet):
        await fund_wallet(customer.id, "10.00")
        service = OrderService.with_session(session)

        async with atomic(session):
            placed = await service.place_order(
                _order_input(user_id=customer.id, screenshot=None), pay_with_wallet=True
            )

        assert placed.balance == Decimal("2.50")
        assert placed.order.payment_method is OrderPaymentMethod.WALLET
        purchase = await WalletService.with_session(session).find_transaction(
            TransactionType.PURCHASE, placed.order.id
        )
        assert purchase is not None
        assert purchase.amount == Decimal("-7.50")
        assert [o.id for o in await service.list_user_orders(customer.id)] == [placed.order.id]

    async def test_refused_wallet_order_is_rolled_back(self, session, customer, fund_wallet):
        await fund_wallet(customer.id, "5.00")
        service = OrderService.with_session(session)

        with pytest.raises(InsufficientBalanceError):
            async with atomic(session):
                await service.place_order(_order_input(user_id=customer.id), pay_with_wallet=True)

        assert await session.scalar(select(func.count()).select_from(OrderModel)) == 0
        assert await WalletService.with_session(session).get_balance(customer.id) == Decimal("5.00")

    async def test_wallet_order_needs_user(self, session):
        with pytest.raises(ValueError):
            await OrderService.with_session(session).place_order(_order_input(), pay_with_wallet=True)
