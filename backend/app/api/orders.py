"""Order listing and analytics endpoints."""

from fastapi import APIRouter, Depends, Path, Query

from app.core.deps import get_order_service
from app.db.base import INT_MAX
from app.models.order import OrderStatus
from app.schemas.common import ApiResponse
from app.schemas.order import OrderAnalytics, OrderPage
from app.services.order_query import OrderQueryService
from app.services.pagination import PageRequest

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=ApiResponse[OrderPage])
async def list_orders(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    status: OrderStatus | None = None,
    service: OrderQueryService = Depends(get_order_service),
):
    """List orders newest first with their customer, optionally by status."""
    return ApiResponse(data=await service.list_orders(PageRequest.from_params(page, limit), status))


@router.get("/analytics", response_model=ApiResponse[OrderAnalytics])
async def get_order_analytics(service: OrderQueryService = Depends(get_order_service)):
    """Order totals, per-status breakdown and the most recent orders."""
    return ApiResponse(data=await service.order_analytics())


@router.get("/customer/{customer_id}", response_model=ApiResponse[OrderPage])
async def list_customer_orders(
    customer_id: int = Path(..., ge=-INT_MAX - 1, le=INT_MAX),
    page: str | None = Query(None),
    limit: str | None = Query(None),
    service: OrderQueryService = Depends(get_order_service),
):
    return ApiResponse(
        data=await service.list_customer_orders(customer_id, PageRequest.from_params(page, limit))
    )
