"""Public order endpoints for guests paying outside the wallet."""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import atomic
from app.interfaces.http.deps import get_db_session
from app.modules.orders import OrderCreateInput, OrderService
from app.schemas import OrderCreateRequest, OrderListResponse, OrderResponse

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Place a guest order")
async def create_order(payload: OrderCreateRequest, db: AsyncSession = Depends(get_db_session)) -> OrderResponse:
    service = OrderService.with_session(db)
    async with atomic(db):
        placed = await service.place_order(
            OrderCreateInput(
                platform=payload.platform,
                service=payload.service,
                quantity=payload.quantity,
                total=payload.total,
                name=payload.name,
                email=payload.email,
                link=payload.link,
                message=payload.message,
                screenshot=payload.screenshot,
            )
        )
    return OrderResponse.model_validate(placed.order)


@router.get("", response_model=OrderListResponse, summary="Look up orders by email")
async def list_orders_by_email(
    email: str = Query(..., min_length=3),
    db: AsyncSession = Depends(get_db_session),
) -> OrderListResponse:
    orders = await OrderService.with_session(db).list_orders_by_email(email)
    return OrderListResponse(orders=[OrderResponse.model_validate(order) for order in orders])


@router.get("/{order_id}", response_model=OrderResponse, summary="Order status")
async def get_order(order_id: str, db: AsyncSession = Depends(get_db_session)) -> OrderResponse:
    order = await OrderService.with_session(db).get_order(order_id)
    return OrderResponse.model_validate(order)
