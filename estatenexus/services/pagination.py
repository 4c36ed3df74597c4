"""Page slicing for result lists."""

import math
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of results."""
    page_items: list[T] = Field(default_factory=list)
    total_pages: int = Field(1, ge=1)
    page_index: int = Field(0, description="Zero-based page index that was requested")
    page_size: int = Field(..., gt=0)
    total_items: int = Field(0, ge=0)


def total_pages_for(total_items: int, page_size: int) -> int:
    """Number of pages, at least 1 so an empty result is still "page 1 of 1"."""
    return max(1, math.ceil(total_items / page_size))


def paginate(items: Sequence[T], page_size: int, page_index: int) -> Page[T]:
    """
    Slice ``items`` into the requested page.

    Out-of-range (including negative) page indices give an empty page rather
    than an error; clamping is the caller's job.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    total_items = len(items)
    total_pages = total_pages_for(total_items, page_size)

    if page_index < 0:
        page_items: list[T] = []
    else:
        start = page_index * page_size
        page_items = list(items[start:start + page_size])

    return Page(
        page_items=page_items,
        total_pages=total_pages,
        page_index=page_index,
        page_size=page_size,
        total_items=total_items,
    )


def clamp_page_index(page_index: int, total_pages: int) -> int:
    """Clamp a requested page index into ``[0, total_pages - 1]``."""
    return min(max(page_index, 0), max(total_pages - 1, 0))
