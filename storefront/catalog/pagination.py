# storefront/catalog/pagination.py

import math
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class PageSlice(Generic[T]):
    current_page: int
    total_pages: int
    items: List[T]

    @property
    def is_empty(self) -> bool:
        return not self.items


def parse_page_param(raw: Optional[Any]) -> int:
    """
    Turn a ``?page=`` query value into a page number.

    Anything missing, non-numeric or zero falls back to page 1; fractional
    values are truncated. Out-of-range numbers are left for ``paginate`` to clamp.
    """
    if raw is None:
        return 1
    try:
        value = float(str(raw).strip() or 0)
    except ValueError:
        return 1
    if value != value or value in (float("inf"), float("-inf")):
        return 1
    return int(value) or 1


def paginate(items: Optional[Sequence[T]], page: int, per_page: int = 2) -> PageSlice[T]:
    if per_page <= 0:
        raise ValueError("per_page must be > 0")

    items = list(items or [])
    total_pages = math.ceil(len(items) / per_page)
    current_page = max(1, min(page, total_pages))

    start = (current_page - 1) * per_page
    return PageSlice(
        current_page=current_page,
        total_pages=total_pages,
        items=items[start:start + per_page],
    )
