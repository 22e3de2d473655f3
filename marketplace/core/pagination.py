"""Pagination helpers for list endpoints."""

import math

from fastapi import Query
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=20&sort=created_at&order=desc`."""

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(default=20, ge=1, le=200, description="Items per page"),
        sort: str = Query(default="created_at", description="Sort field"),
        order: str = Query(default="desc", pattern="^(asc|desc)$", description="Sort order"),
    ):
        self.page = page
        self.limit = limit
        self.sort = sort
        self.order = order

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    model_config = {"populate_by_name": True}


class PageInfo(BaseModel):
    """Pagination block for lists that are filtered and sliced in memory."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    @classmethod
    def build(cls, total_items: int, page: int, limit: int) -> "PageInfo":
        return cls(
            current_page=page,
            total_pages=math.ceil(total_items / limit) or 1,
            total_items=total_items,
            items_per_page=limit,
        )


def slice_page(items: list, page: int, limit: int) -> list:
    """Return the ``page``-th window of ``limit`` items (1-based pages)."""
    start = (page - 1) * limit
    return items[start:start + limit]
