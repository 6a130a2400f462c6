"""Offset pagination shared by the customer and order listings."""

import math
from dataclasses import dataclass

from app.core.config import settings
from app.db.base import BIGINT_MAX


def _positive_int(value: object, default: int) -> int:
    """Coerce a raw query value to a positive int, falling back to `default`."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @classmethod
    def from_params(cls, page: object = None, limit: object = None) -> "PageRequest":
        """Sanitize raw pagination input; malformed values never raise.

        The page is capped so that offset + limit still fits a signed 64-bit
        integer; anything past that cap is an empty page either way.
        """
        limit = min(_positive_int(limit, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)
        max_page = (BIGINT_MAX - limit) // limit + 1
        return cls(page=min(_positive_int(page, 1), max_page), limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def summary(self, total: int) -> dict:
        """Pagination fields common to every listing, minus the total key."""
        total_pages = math.ceil(total / self.limit)
        return {
            "current_page": self.page,
            "total_pages": total_pages,
            "per_page": self.limit,
            "has_next_page": self.page < total_pages,
            "has_prev_page": self.page > 1,
        }
