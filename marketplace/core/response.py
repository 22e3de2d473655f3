"""Standardized JSON response envelope helpers."""


import math
from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from marketplace.core.pagination import PageMeta

T = TypeVar("T")

_ENVELOPE_CONFIG = {
    "populate_by_name": True,
    "alias_generator": to_camel,
}


class DataResponse(BaseModel, Generic[T]):
    """Single-item response envelope: `{ data: {...}, message: "..." }`"""

    data: T
    message: str | None = None

    model_config = _ENVELOPE_CONFIG


class ListResponse(BaseModel, Generic[T]):
    """Paginated list response envelope: `{ data: [...], meta: {...} }`"""

    data: list[T]
    meta: PageMeta

    model_config = _ENVELOPE_CONFIG


class ActionResult(BaseModel):
    """Outcome of a command endpoint that has nothing else to return."""

    success: bool = True


def envelope(data, message: str | None = None) -> dict:
    """Wrap a single payload for use with DataResponse."""
    return {"data": data, "message": message}


def paginated(items: list, total: int, page: int, limit: int) -> dict:
    """Build a paginated response dict for use with ListResponse."""
    return {
        "data": items,
        "meta": {
            "total": total,
            "page": page,
            "limit": limit,
            "pages": math.ceil(total / limit) if limit else 1,
        },
    }
