"""Customer schemas for API responses."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.order import OrderView


def full_name(first_name: str | None, last_name: str | None) -> str:
    """Display name shared by every customer projection."""
    return f"{first_name or ''} {last_name or ''}".strip()


# ── Customer ──────────────────────────────────────
class CustomerView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    order_count: int = Field(..., ge=0)


class PaginationInfo(BaseModel):
    current_page: int
    total_pages: int
    total_customers: int
    per_page: int
    has_next_page: bool
    has_prev_page: bool


class AppliedFilters(BaseModel):
    exact_order_count: int | None = None
    min_orders: int | None = None
    max_orders: int | None = None
    has_orders: bool | None = None


class CustomerFilters(BaseModel):
    applied: AppliedFilters
    available: dict[str, str]


class CustomerPage(BaseModel):
    customers: list[CustomerView]
    pagination: PaginationInfo
    filters: CustomerFilters


# ── Customer detail ───────────────────────────────
class CustomerDetail(BaseModel):
    customer: CustomerView
    orders: list[OrderView]
