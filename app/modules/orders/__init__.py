"""Order domain exports"""

from .models import Order, OrderCreateInput, OrderPaymentMethod, OrderStatus, PlacedOrder
from .service import OrderService

__all__ = [
    "Order",
    "OrderCreateInput",
    "OrderPaymentMethod",
    "OrderStatus",
    "PlacedOrder",
    "OrderService",
]
