"""Order schemas for API responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.models.order import OrderStatus


class CustomerSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str


class OrderView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: int
    user_id: int
    status: OrderStatus
    num_of_item: int
    created_at: datetime
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    returned_at: datetime | None = None


class OrderWithCustomer(OrderView):
    customer: CustomerSummary | None = None


class OrderPaginationInfo(BaseModel):
    current_page: int
    total_pages: int
    total_orders: int
    per_page: int
    has_next_page: bool
    has_prev_page: bool


class OrderPage(BaseModel):
    orders: list[OrderWithCustomer]
    pagination: OrderPaginationInfo


# ── Analytics ─────────────────────────────────────
class StatusCount(BaseModel):
    status: OrderStatus
    count: int


class RecentOrder(BaseModel):
    order_id: int
    status: OrderStatus
    created_at: datetime
    customer_name: str | None = None


class OrderAnalytics(BaseModel):
    total_orders: int
    status_breakdown: list[StatusCount]
    recent_orders: list[RecentOrder]
