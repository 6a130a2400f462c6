"""SQLAlchemy models for the customer orders API."""

from app.models.customer import Customer
from app.models.order import Order, OrderStatus

__all__ = [
    "Customer",
    "Order",
    "OrderStatus",
]
