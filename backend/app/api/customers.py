"""Customer listing endpoints."""

import logging

from fastapi import APIRouter, Depends, Path, Query

from app.core.deps import get_customer_engine
from app.db.base import INT_MAX
from app.schemas.common import ApiResponse
from app.schemas.customer import CustomerDetail, CustomerPage
from app.services.customer_query import CustomerListQuery, CustomerQueryEngine, CustomerSort
from app.services.filters import build_order_count_filters
from app.services.pagination import PageRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=ApiResponse[CustomerPage])
async def list_customers(
    # Raw strings: malformed pagination falls back to defaults instead of a 422
    page: str | None = Query(None, description="1-based page number"),
    limit: str | None = Query(None, description="Customers per page"),
    order_count: int | None = Query(None, alias="orderCount", ge=0, le=INT_MAX, description="Exact number of orders"),
    min_orders: int | None = Query(None, alias="minOrders", ge=0, le=INT_MAX, description="Minimum number of orders"),
    max_orders: int | None = Query(None, alias="maxOrders", ge=0, le=INT_MAX, description="Maximum number of orders"),
    has_orders: bool | None = Query(None, alias="hasOrders", description="Customers with/without orders"),
    sort: CustomerSort = Query(CustomerSort.ORDER_COUNT),
    search: str | None = None,
    engine: CustomerQueryEngine = Depends(get_customer_engine),
):
    """List customers with their order count, filtered on that count and paginated."""
    if search:
        logger.debug("Ignoring search=%r: text search is not supported", search)

    query = CustomerListQuery(
        page=PageRequest.from_params(page, limit),
        filters=build_order_count_filters(order_count, min_orders, max_orders, has_orders),
        sort=sort,
    )
    return ApiResponse(data=await engine.list_customers(query))


@router.get("/{customer_id}", response_model=ApiResponse[CustomerDetail])
async def get_customer(
    customer_id: int = Path(..., ge=-INT_MAX - 1, le=INT_MAX),
    engine: CustomerQueryEngine = Depends(get_customer_engine),
):
    """Get a single customer with all of their orders."""
    return ApiResponse(data=await engine.get_customer(customer_id))
