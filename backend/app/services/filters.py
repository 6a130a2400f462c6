"""Predicate stages over the derived ``order_count`` column.

Each stage turns into one SQL clause against whatever expression computes the
order count, so the same stages feed both the page query and the total query.
"""

from dataclasses import dataclass

from sqlalchemy import ColumnElement, and_

from app.core.exceptions import ValidationError

# Help text returned with every listing under ``filters.available``
AVAILABLE_FILTERS = {
    "orderCount": "Exact number of orders (e.g., ?orderCount=0)",
    "minOrders": "Minimum number of orders (e.g., ?minOrders=1)",
    "maxOrders": "Maximum number of orders (e.g., ?maxOrders=5)",
    "hasOrders": "true/false for customers with/without orders (e.g., ?hasOrders=false)",
}


class OrderCountFilter:
    def clause(self, order_count: ColumnElement[int]) -> ColumnElement[bool]:
        raise NotImplementedError

    def applied(self) -> dict:
        """Fields reported back under ``filters.applied``."""
        raise NotImplementedError


@dataclass(frozen=True)
class ExactOrderCount(OrderCountFilter):
    count: int

    def clause(self, order_count):
        return order_count == self.count

    def applied(self):
        return {"exact_order_count": self.count}


@dataclass(frozen=True)
class OrderCountRange(OrderCountFilter):
    """Inclusive range; either bound may be omitted."""

    min_orders: int | None = None
    max_orders: int | None = None

    def clause(self, order_count):
        bounds = []
        if self.min_orders is not None:
            bounds.append(order_count >= self.min_orders)
        if self.max_orders is not None:
            bounds.append(order_count <= self.max_orders)
        return and_(*bounds)

    def applied(self):
        fields = {}
        if self.min_orders is not None:
            fields["min_orders"] = self.min_orders
        if self.max_orders is not None:
            fields["max_orders"] = self.max_orders
        return fields


@dataclass(frozen=True)
class HasOrders(OrderCountFilter):
    has_orders: bool

    def clause(self, order_count):
        return order_count > 0 if self.has_orders else order_count == 0

    def applied(self):
        return {"has_orders": self.has_orders}


def build_order_count_filters(
    order_count: int | None = None,
    min_orders: int | None = None,
    max_orders: int | None = None,
    has_orders: bool | None = None,
) -> list[OrderCountFilter]:
    """Build the filter stages for a listing request.

    At most one filter kind is allowed: an exact count, a min/max range, or the
    has-orders flag. Mixing kinds raises ``ValidationError``.
    """
    supplied: dict[str, OrderCountFilter] = {}
    if order_count is not None:
        supplied["orderCount"] = ExactOrderCount(order_count)
    if min_orders is not None or max_orders is not None:
        names = [n for n, v in (("minOrders", min_orders), ("maxOrders", max_orders)) if v is not None]
        supplied["/".join(names)] = OrderCountRange(min_orders, max_orders)
    if has_orders is not None:
        supplied["hasOrders"] = HasOrders(has_orders)

    if len(supplied) > 1:
        raise ValidationError(
            f"Conflicting order count filters: {', '.join(supplied)}. "
            "Use only one of orderCount, minOrders/maxOrders or hasOrders."
        )
    return list(supplied.values())
