"""Order listings and analytics."""

import logging

from sqlalchemy import func, select

from app.models.customer import Customer
from app.models.order import Order, OrderStatus
from app.schemas.customer import full_name
from app.schemas.order import (
    CustomerSummary,
    OrderAnalytics,
    OrderPage,
    OrderPaginationInfo,
    OrderWithCustomer,
    RecentOrder,
    StatusCount,
)
from app.services.pagination import PageRequest
from app.services.store import StoreReader

logger = logging.getLogger(__name__)

RECENT_ORDERS_LIMIT = 5


def _with_customer(order: Order, customer: Customer | None) -> OrderWithCustomer:
    view = OrderWithCustomer.model_validate(order)
    if customer is not None:
        view.customer = CustomerSummary(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            full_name=full_name(customer.first_name, customer.last_name),
            email=customer.email,
        )
    return view


class OrderQueryService(StoreReader):
    async def list_orders(
        self, page: PageRequest, status: OrderStatus | None = None
    ) -> OrderPage:
        """Orders newest first, optionally restricted to one status."""
        conditions = [Order.status == status] if status else []
        return await self._page(page, conditions)

    async def list_customer_orders(self, customer_id: int, page: PageRequest) -> OrderPage:
        return await self._page(page, [Order.user_id == customer_id])

    async def _page(self, page: PageRequest, conditions: list) -> OrderPage:
        page_stmt = (
            select(Order, Customer)
            .select_from(Order)
            .outerjoin(Customer, Customer.id == Order.user_id)
            .where(*conditions)
            .order_by(Order.created_at.desc(), Order.order_id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        total_stmt = select(func.count(Order.order_id)).where(*conditions)

        rows, total = await self._gather(self._rows(page_stmt), self._count(total_stmt))
        logger.info("Listed %s of %s orders (page=%s)", len(rows), total, page.page)

        return OrderPage(
            orders=[_with_customer(order, customer) for order, customer in rows],
            pagination=OrderPaginationInfo(total_orders=total, **page.summary(total)),
        )

    async def order_analytics(self) -> OrderAnalytics:
        status_count = func.count(Order.order_id)
        status_stmt = (
            select(Order.status, status_count)
            .group_by(Order.status)
            .order_by(status_count.desc(), Order.status)
        )
        total_stmt = select(func.count(Order.order_id))
        recent_stmt = (
            select(
                Order.order_id,
                Order.status,
                Order.created_at,
                Customer.first_name,
                Customer.last_name,
            )
            .select_from(Order)
            .outerjoin(Customer, Customer.id == Order.user_id)
            .order_by(Order.created_at.desc(), Order.order_id.desc())
            .limit(RECENT_ORDERS_LIMIT)
        )

        statuses, total, recent = await self._gather(
            self._rows(status_stmt), self._count(total_stmt), self._rows(recent_stmt)
        )

        return OrderAnalytics(
            total_orders=total,
            status_breakdown=[StatusCount(status=s, count=c) for s, c in statuses],
            recent_orders=[
                RecentOrder(
                    order_id=row.order_id,
                    status=row.status,
                    created_at=row.created_at,
                    customer_name=(
                        full_name(row.first_name, row.last_name)
                        if row.first_name is not None or row.last_name is not None
                        else None
                    ),
                )
                for row in recent
            ],
        )
