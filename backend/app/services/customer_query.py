"""Customer listing query engine.

Customers are listed with a derived ``order_count`` (number of orders whose
``user_id`` points at the customer). Two strategies produce a page:

* ``join_filter_paginate`` joins every customer to a grouped order count,
  filters on the derived column, sorts and then slices. The total is the same
  join and filter wrapped in a count. Required whenever the result depends on
  ``order_count``.
* ``paginate_then_enrich`` slices customers by id first and counts orders only
  for the ids on the page. Only valid when neither filter nor sort looks at
  ``order_count``.
"""

import enum
import logging
from dataclasses import dataclass, field

from sqlalchemy import ColumnElement, Select, func, select

from app.core.exceptions import NotFound
from app.models.customer import Customer
from app.models.order import Order
from app.schemas.customer import (
    AppliedFilters,
    CustomerDetail,
    CustomerFilters,
    CustomerPage,
    CustomerView,
    PaginationInfo,
    full_name,
)
from app.schemas.order import OrderView
from app.services.filters import AVAILABLE_FILTERS, OrderCountFilter
from app.services.pagination import PageRequest
from app.services.store import StoreReader

logger = logging.getLogger(__name__)


class CustomerSort(str, enum.Enum):
    ORDER_COUNT = "order_count"  # order_count desc, id asc
    ID = "id"


@dataclass(frozen=True)
class CustomerListQuery:
    page: PageRequest
    filters: list[OrderCountFilter] = field(default_factory=list)
    sort: CustomerSort = CustomerSort.ORDER_COUNT

    @property
    def needs_order_count(self) -> bool:
        return bool(self.filters) or self.sort is CustomerSort.ORDER_COUNT


def _order_counts():
    return (
        select(Order.user_id, func.count(Order.order_id).label("order_count"))
        .group_by(Order.user_id)
        .subquery("order_counts")
    )


def customers_with_order_count(
    filters: list[OrderCountFilter],
) -> tuple[Select, ColumnElement[int]]:
    """Customers outer-joined to their order count, with filter stages applied.

    Returns the statement and the order count expression so callers can sort
    on it. Customers without orders get a count of 0.
    """
    counts = _order_counts()
    order_count = func.coalesce(counts.c.order_count, 0)
    stmt = (
        select(
            Customer.id,
            Customer.first_name,
            Customer.last_name,
            Customer.email,
            order_count.label("order_count"),
        )
        .select_from(Customer)
        .outerjoin(counts, counts.c.user_id == Customer.id)
    )
    for stage in filters:
        stmt = stmt.where(stage.clause(order_count))
    return stmt, order_count


def _view(row, order_count: int) -> CustomerView:
    return CustomerView(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        full_name=full_name(row.first_name, row.last_name),
        email=row.email,
        order_count=order_count,
    )


class CustomerQueryEngine(StoreReader):
    async def list_customers(self, query: CustomerListQuery) -> CustomerPage:
        if query.needs_order_count:
            customers, total = await self.join_filter_paginate(query)
            strategy = "join_filter_paginate"
        else:
            customers, total = await self.paginate_then_enrich(query)
            strategy = "paginate_then_enrich"

        logger.info(
            "Listed %s of %s customers (page=%s, limit=%s, strategy=%s)",
            len(customers), total, query.page.page, query.page.limit, strategy,
        )

        applied: dict = {}
        for stage in query.filters:
            applied.update(stage.applied())

        return CustomerPage(
            customers=customers,
            pagination=PaginationInfo(total_customers=total, **query.page.summary(total)),
            filters=CustomerFilters(
                applied=AppliedFilters(**applied), available=dict(AVAILABLE_FILTERS)
            ),
        )

    async def join_filter_paginate(
        self, query: CustomerListQuery
    ) -> tuple[list[CustomerView], int]:
        stmt, order_count = customers_with_order_count(query.filters)

        if query.sort is CustomerSort.ORDER_COUNT:
            ordered = stmt.order_by(order_count.desc(), Customer.id.asc())
        else:
            ordered = stmt.order_by(Customer.id.asc())
        page_stmt = ordered.offset(query.page.offset).limit(query.page.limit)
        total_stmt = select(func.count()).select_from(stmt.subquery())

        rows, total = await self._gather(self._rows(page_stmt), self._count(total_stmt))
        return [_view(row, row.order_count) for row in rows], total

    async def paginate_then_enrich(
        self, query: CustomerListQuery
    ) -> tuple[list[CustomerView], int]:
        if query.needs_order_count:
            raise ValueError("paginate_then_enrich cannot filter or sort on order_count")

        page_stmt = (
            select(Customer.id, Customer.first_name, Customer.last_name, Customer.email)
            .order_by(Customer.id.asc())
            .offset(query.page.offset)
            .limit(query.page.limit)
        )
        total_stmt = select(func.count()).select_from(Customer)
        rows, total = await self._gather(self._rows(page_stmt), self._count(total_stmt))

        counts: dict[int, int] = {}
        ids = [row.id for row in rows]
        if ids:
            count_rows = await self._rows(
                select(Order.user_id, func.count(Order.order_id))
                .where(Order.user_id.in_(ids))
                .group_by(Order.user_id)
            )
            counts = {user_id: count for user_id, count in count_rows}

        return [_view(row, counts.get(row.id, 0)) for row in rows], total

    async def get_customer(self, customer_id: int) -> CustomerDetail:
        """Single customer with all of their orders, newest first."""
        row, orders = await self._gather(
            self._first(
                select(Customer.id, Customer.first_name, Customer.last_name, Customer.email)
                .where(Customer.id == customer_id)
            ),
            self._scalars(
                select(Order)
                .where(Order.user_id == customer_id)
                .order_by(Order.created_at.desc(), Order.order_id.desc())
            ),
        )
        if row is None:
            raise NotFound("Customer not found")

        return CustomerDetail(
            customer=_view(row, len(orders)),
            orders=[OrderView.model_validate(order) for order in orders],
        )
