"""Shared schemas for API responses."""

import math
from typing import List, TypeVar, Generic
from pydantic import BaseModel, Field

T = TypeVar('T')


class BaseListResponse(BaseModel, Generic[T]):
    """Paginated list response."""

    items: List[T] = Field(..., description="Items on this page")
    total: int = Field(..., description="Total number of matching items")
    page: int = Field(..., description="Current page number")
    size: int = Field(..., description="Items per page")
    pages: int = Field(..., description="Total number of pages")

    @classmethod
    def paginate(cls, items: List[T], page: int, size: int) -> "BaseListResponse[T]":
        """Slice an already filtered and ordered list into one page."""
        total = len(items)
        start = (page - 1) * size
        return cls(
            items=items[start:start + size],
            total=total,
            page=page,
            size=size,
            pages=math.ceil(total / size) if total else 0,
        )


class MessageResponse(BaseModel):
    """Confirmation for operations without a resource body."""

    message: str = Field(..., description="Response message")
    success: bool = Field(default=True, description="Operation success status")


class PaginationParams(BaseModel):
    """Page and size query parameters."""

    page: int = Field(default=1, ge=1, description="Page number")
    size: int = Field(default=20, ge=1, le=100, description="Items per page")
