from app.schemas.common import ApiResponse
from app.schemas.order import (
    CustomerSummary, OrderView, OrderWithCustomer, OrderPaginationInfo, OrderPage,
    StatusCount, RecentOrder, OrderAnalytics,
)
from app.schemas.customer import (
    CustomerView, PaginationInfo, AppliedFilters, CustomerFilters, CustomerPage,
    CustomerDetail, full_name,
)

__all__ = [
    "ApiResponse",
    "CustomerSummary", "OrderView", "OrderWithCustomer", "OrderPaginationInfo", "OrderPage",
    "StatusCount", "RecentOrder", "OrderAnalytics",
    "CustomerView", "PaginationInfo", "AppliedFilters", "CustomerFilters", "CustomerPage",
    "CustomerDetail", "full_name",
]
